"""Cookie utilities for authentication and CSRF."""

from fastapi import Response, Request
from typing import Optional
from persuratan.core.config import settings


def _samesite() -> str:
    return "lax" if settings.DEBUG else "strict"


def set_auth_cookies(
    response: Response,
    access_token: str,
    refresh_token: str,
    access_token_expires_minutes: Optional[int] = None
) -> None:
    """
    Set HTTP-only cookies untuk access dan refresh token.

    Args:
        response: FastAPI Response object
        access_token: JWT access token
        refresh_token: JWT refresh token
        access_token_expires_minutes: Access token expiry in minutes
    """
    if access_token_expires_minutes is None:
        access_token_expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        max_age=access_token_expires_minutes * 60,
        httponly=True,
        secure=not settings.DEBUG,  # HTTP hanya boleh di development
        samesite=_samesite(),
        path="/"
    )

    response.set_cookie(
        key="refresh_token",
        value=f"Bearer {refresh_token}",
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=not settings.DEBUG,
        samesite=_samesite(),
        path="/"
    )


def clear_auth_cookies(response: Response) -> None:
    """Clear authentication cookies on logout."""
    for key in ("access_token", "refresh_token"):
        response.set_cookie(
            key=key,
            value="",
            max_age=0,
            httponly=True,
            secure=not settings.DEBUG,
            samesite=_samesite(),
            path="/"
        )


def set_csrf_cookie(response: Response, token: str) -> None:
    """Cookie CSRF untuk double-submit check. Selalu samesite strict."""
    response.set_cookie(
        key=settings.CSRF_COOKIE_KEY,
        value=token,
        max_age=settings.CSRF_TOKEN_MAX_AGE,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="strict",
        path="/"
    )


def get_token_from_cookie(request: Request, cookie_name: str) -> Optional[str]:
    """
    Extract token from HTTP-only cookie.

    Returns:
        Token string without Bearer prefix, or None if not found
    """
    cookie_value = request.cookies.get(cookie_name)
    if cookie_value and cookie_value.startswith("Bearer "):
        return cookie_value[7:]
    return None


def get_access_token_from_cookie(request: Request) -> Optional[str]:
    """Get access token from cookie."""
    return get_token_from_cookie(request, "access_token")


def get_csrf_token_from_cookie(request: Request) -> Optional[str]:
    return request.cookies.get(settings.CSRF_COOKIE_KEY)
