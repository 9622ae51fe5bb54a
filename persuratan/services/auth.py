"""Authentication service dengan cookie support."""

import logging
from datetime import timedelta
from typing import Dict

from fastapi import HTTPException, Request, Response, status

from persuratan.auth.jwt import create_access_token, create_refresh_token, verify_password
from persuratan.core.config import settings
from persuratan.models.enums import AuditAction, AuditEntity
from persuratan.repositories.user import UserRepository
from persuratan.schemas.common import MessageResponse
from persuratan.schemas.user import CurrentUserResponse, LoginRequest, LoginResponse
from persuratan.services.audit_log import AuditLogService
from persuratan.utils.cookies import clear_auth_cookies, set_auth_cookies
from persuratan.utils.password import mask_email

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Email atau password salah"


class AuthService:
    """Service untuk login, logout dan info user yang sedang login."""

    def __init__(self, user_repo: UserRepository, audit_service: AuditLogService):
        self.user_repo = user_repo
        self.audit_service = audit_service

    async def login(self, login_data: LoginRequest, request: Request, response: Response) -> LoginResponse:
        email = login_data.email.strip().lower()
        user = await self.user_repo.get_by_email(email)

        if not user or not verify_password(login_data.password, user.hashed_password):
            logger.warning(f"Failed login attempt for {mask_email(email)}")
            await self.audit_service.log(
                AuditAction.FAILED_LOGIN,
                AuditEntity.USER,
                entity_id=user.id if user else None,
                details=f"Login gagal untuk {mask_email(email)}",
                request=request,
                response_status=status.HTTP_401_UNAUTHORIZED,
            )
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_CREDENTIALS,
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Akun pengguna tidak aktif"
            )

        token_data = {
            "sub": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role.value,
        }
        access_token = create_access_token(
            data=token_data,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        refresh_token = create_refresh_token(data={"sub": user.id})

        await self.user_repo.update_last_login(user.id)

        set_auth_cookies(
            response=response,
            access_token=access_token,
            refresh_token=refresh_token,
            access_token_expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

        current = {"id": user.id, "name": user.name, "email": user.email}
        await self.audit_service.log(
            AuditAction.LOGIN,
            AuditEntity.USER,
            entity_id=user.id,
            user=current,
            details=f"Login berhasil ({user.role.value})",
            request=request,
            response_status=status.HTTP_200_OK,
        )
        logger.info(f"User {user.id} logged in")

        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user=CurrentUserResponse(
                id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                role_display=user.get_role_display(),
            ),
        )

    async def logout(self, current_user: Dict, request: Request, response: Response) -> MessageResponse:
        clear_auth_cookies(response)
        await self.audit_service.log(
            AuditAction.LOGOUT,
            AuditEntity.USER,
            entity_id=current_user["id"],
            user=current_user,
            request=request,
            response_status=status.HTTP_200_OK,
        )
        return MessageResponse(message="Logout berhasil")

    async def me(self, current_user: Dict) -> CurrentUserResponse:
        user = await self.user_repo.get_by_id(current_user["id"])
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User tidak ditemukan"
            )
        return CurrentUserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            role_display=user.get_role_display(),
        )
