"""Authorization dan permission checking dengan cookie support."""

from typing import Dict, List, Optional
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from persuratan.auth.jwt import verify_token
from persuratan.core.database import get_db
from persuratan.utils.cookies import get_access_token_from_cookie

logger = logging.getLogger(__name__)


class JWTBearer(HTTPBearer):
    """Custom JWT Bearer handler with cookie support."""

    def __init__(self, auto_error: bool = True):
        super(JWTBearer, self).__init__(auto_error=auto_error)

    async def __call__(self, request: Request) -> Optional[str]:
        # Authorization header dulu, baru cookie
        try:
            credentials: HTTPAuthorizationCredentials = await super(
                JWTBearer, self
            ).__call__(request)
            if credentials:
                if credentials.scheme.lower() != "bearer":
                    raise HTTPException(
                        status_code=status.HTTP_403_FORBIDDEN,
                        detail="Invalid authentication scheme.",
                    )
                return credentials.credentials
        except HTTPException:
            token = get_access_token_from_cookie(request)
            if token:
                return token

            if self.auto_error:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Unauthorized",
                    headers={"WWW-Authenticate": "Bearer"},
                )
        return None


jwt_bearer = JWTBearer()


async def get_current_user(
    token: str = Depends(jwt_bearer),
    session: AsyncSession = Depends(get_db)
) -> Dict:
    """Get the current authenticated user from JWT token."""
    # Import here to avoid circular import
    from persuratan.repositories.user import UserRepository

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = verify_token(token)
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    user = await UserRepository(session).get_by_id(user_id)
    if not user:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Akun pengguna tidak aktif"
        )

    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        "is_active": user.is_active,
    }


def require_roles(required_roles: List[str], detail: Optional[str] = None):
    """
    Dependency factory to require specific roles.

    Args:
        required_roles: List of role names that are allowed access
        detail: pesan 403 (default menyebut role yang dibutuhkan)
    """
    async def _check_roles(
        current_user: Dict = Depends(get_current_user),
    ) -> Dict:
        user_role = current_user.get("role")
        if user_role not in required_roles:
            logger.warning(
                f"Access denied for user {current_user.get('id')} "
                f"(role {user_role}, required {required_roles})"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=detail or f"Forbidden - Required roles: {', '.join(required_roles)}",
            )
        return current_user

    return _check_roles


admin_required = require_roles(["ADMIN"], detail="Forbidden - Admin only")
member_required = require_roles(["MEMBER"], detail="Forbidden - Member only")


def has_role(user: Dict, role: str) -> bool:
    return user.get("role") == role


def is_admin(user: Dict) -> bool:
    """Check if user is admin."""
    return has_role(user, "ADMIN")
