"""User management endpoints (ADMIN only)."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.auth.csrf import csrf_protect
from persuratan.auth.permissions import admin_required
from persuratan.core.database import get_db
from persuratan.repositories.user import UserRepository
from persuratan.schemas.common import ListResponse, MessageResponse
from persuratan.schemas.filters import UserFilterParams, get_user_filters
from persuratan.schemas.user import UserCreate, UserResponse, UserUpdate
from persuratan.services.user import UserService

router = APIRouter()


async def get_user_service(session: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(UserRepository(session))


@router.get("", response_model=ListResponse[UserResponse], summary="Get all users")
async def get_all_users(
    filters: UserFilterParams = Depends(get_user_filters),
    current_user: dict = Depends(admin_required),
    user_service: UserService = Depends(get_user_service)
):
    """
    **Query Parameters**:
    - **search**: cari di nama dan email
    - **role**: ADMIN / MEMBER
    """
    return await user_service.get_users(filters)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(csrf_protect)],
    summary="Create user"
)
async def create_user(
    user_data: UserCreate,
    current_user: dict = Depends(admin_required),
    user_service: UserService = Depends(get_user_service)
):
    """Password wajib memenuhi kebijakan keamanan (8+ karakter, huruf besar/kecil, angka, simbol)."""
    return await user_service.create_user(user_data, current_user)


@router.get("/{user_id}", response_model=UserResponse, summary="Get user by ID")
async def get_user(
    user_id: str,
    current_user: dict = Depends(admin_required),
    user_service: UserService = Depends(get_user_service)
):
    return await user_service.get_user(user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(csrf_protect)],
    summary="Update user"
)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: dict = Depends(admin_required),
    user_service: UserService = Depends(get_user_service)
):
    """Password hanya diganti kalau diisi."""
    return await user_service.update_user(user_id, user_data, current_user)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    dependencies=[Depends(csrf_protect)],
    summary="Delete user"
)
async def delete_user(
    user_id: str,
    current_user: dict = Depends(admin_required),
    user_service: UserService = Depends(get_user_service)
):
    return await user_service.delete_user(user_id, current_user)
