"""Authentication endpoints dengan cookie support."""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.auth.csrf import csrf_protect
from persuratan.auth.permissions import get_current_user
from persuratan.core.database import get_db
from persuratan.repositories.audit_log import AuditLogRepository
from persuratan.repositories.user import UserRepository
from persuratan.schemas.common import MessageResponse
from persuratan.schemas.user import CurrentUserResponse, LoginRequest, LoginResponse
from persuratan.services.audit_log import AuditLogService
from persuratan.services.auth import AuthService

router = APIRouter()


async def get_auth_service(session: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(UserRepository(session), AuditLogService(AuditLogRepository(session)))


@router.post("/login", response_model=LoginResponse, summary="Login user")
async def login(
    login_data: LoginRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Login dengan email dan password.

    Token dikirim sebagai cookie httponly dan juga di body untuk client non-browser.
    Dibatasi 5 percobaan per 15 menit per IP.
    """
    return await auth_service.login(login_data, request, response)


@router.post(
    "/logout",
    response_model=MessageResponse,
    dependencies=[Depends(csrf_protect)],
    summary="Logout user"
)
async def logout(
    request: Request,
    response: Response,
    current_user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    return await auth_service.logout(current_user, request, response)


@router.get("/me", response_model=CurrentUserResponse, summary="Get current user")
async def get_me(
    current_user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    return await auth_service.me(current_user)
