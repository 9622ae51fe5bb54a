"""CSRF protection dengan pola double submit cookie.

Token disimpan di cookie httponly dan harus dikirim ulang lewat header
``x-csrf-token`` untuk setiap request yang mengubah data.
"""

import logging
from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError

from persuratan.auth.jwt import verify_token
from persuratan.core.config import settings
from persuratan.utils.cookies import get_access_token_from_cookie, get_csrf_token_from_cookie
from persuratan.utils.password import generate_csrf_token, tokens_match

logger = logging.getLogger(__name__)

CSRF_TOKEN_BYTES = 32
SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


class CSRFError(HTTPException):
    """403 karena token CSRF hilang / tidak cocok."""

    def __init__(self):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid CSRF token")


def get_or_create_csrf_token(request: Request) -> str:
    """Pakai token di cookie kalau formatnya valid, selain itu buat baru."""
    existing = get_csrf_token_from_cookie(request)
    if existing and len(existing) == CSRF_TOKEN_BYTES * 2:
        return existing
    return generate_csrf_token(CSRF_TOKEN_BYTES)


def _request_token(request: Request) -> Optional[str]:
    scheme, credentials = get_authorization_scheme_param(request.headers.get("Authorization"))
    if credentials and scheme.lower() == "bearer":
        return credentials
    return get_access_token_from_cookie(request)


def _has_session(request: Request) -> bool:
    token = _request_token(request)
    if not token:
        return False
    try:
        verify_token(token)
    except JWTError:
        return False
    return True


async def csrf_protect(request: Request) -> None:
    """
    FastAPI dependency untuk route yang mengubah data.

    - Safe methods (GET, HEAD, OPTIONS) dilewati
    - Request tanpa session dilewati, biar dependency auth yang menolak (401)
    - Selain itu cookie dan header harus ada dan sama persis
    """
    if request.method.upper() in SAFE_METHODS:
        return

    if not _has_session(request):
        return

    cookie_token = get_csrf_token_from_cookie(request)
    header_token = request.headers.get(settings.CSRF_HEADER_NAME)

    if not tokens_match(cookie_token, header_token):
        logger.warning(f"Invalid CSRF token on {request.method} {request.url.path}")
        raise CSRFError()
