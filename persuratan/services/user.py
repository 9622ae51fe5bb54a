"""User service."""

import logging
from typing import Dict

from fastapi import HTTPException, status

from persuratan.auth.jwt import get_password_hash
from persuratan.models.user import User
from persuratan.repositories.user import UserRepository
from persuratan.schemas.common import ListResponse, MessageResponse
from persuratan.schemas.filters import UserFilterParams
from persuratan.schemas.user import UserCreate, UserResponse, UserUpdate
from persuratan.utils.validators import validate_password_strength

logger = logging.getLogger(__name__)


class UserService:
    """Service untuk manajemen user (khusus ADMIN)."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def _model_to_response(self, user: User) -> UserResponse:
        return UserResponse.model_validate(user)

    def _check_password(self, password: str) -> None:
        """Tolak password yang tidak memenuhi kebijakan, dengan daftar alasannya."""
        result = validate_password_strength(password)
        if not result["valid"]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "Password tidak memenuhi persyaratan keamanan",
                    "details": result["errors"],
                },
            )

    async def _get_or_404(self, user_id: str) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User tidak ditemukan"
            )
        return user

    async def create_user(self, user_data: UserCreate, current_user: Dict) -> UserResponse:
        if await self.user_repo.email_exists(user_data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User dengan email ini sudah terdaftar"
            )

        self._check_password(user_data.password)

        user = await self.user_repo.create(
            name=user_data.name,
            email=user_data.email,
            hashed_password=get_password_hash(user_data.password),
            role=user_data.role,
            created_by=current_user["id"],
        )
        logger.info(f"User {user.id} created by {current_user['id']}")
        return self._model_to_response(user)

    async def get_user(self, user_id: str) -> UserResponse:
        return self._model_to_response(await self._get_or_404(user_id))

    async def get_users(self, filters: UserFilterParams) -> ListResponse[UserResponse]:
        users, total = await self.user_repo.get_all_filtered(filters)
        return ListResponse[UserResponse].create(
            items=[self._model_to_response(user) for user in users],
            total=total,
            page=filters.page,
            limit=filters.limit,
        )

    async def update_user(self, user_id: str, user_data: UserUpdate, current_user: Dict) -> UserResponse:
        await self._get_or_404(user_id)

        update_data = user_data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in update_data and await self.user_repo.email_exists(update_data["email"], exclude_user_id=user_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email sudah digunakan oleh user lain"
            )

        # Password hanya diganti kalau diisi
        password = update_data.pop("password", None)
        if password:
            self._check_password(password)
            update_data["hashed_password"] = get_password_hash(password)

        user = await self.user_repo.update(user_id, update_data, updated_by=current_user["id"])
        return self._model_to_response(user)

    async def delete_user(self, user_id: str, current_user: Dict) -> MessageResponse:
        if user_id == current_user["id"]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Tidak dapat menghapus akun sendiri"
            )

        await self._get_or_404(user_id)
        await self.user_repo.delete(user_id)
        logger.info(f"User {user_id} deleted by {current_user['id']}")
        return MessageResponse(message="User berhasil dihapus")
