"""Endpoint untuk mengambil token CSRF."""

from fastapi import APIRouter, Request, Response

from persuratan.auth.csrf import get_or_create_csrf_token
from persuratan.schemas.common import CsrfTokenResponse
from persuratan.utils.cookies import set_csrf_cookie

router = APIRouter()


@router.get("/csrf-token", response_model=CsrfTokenResponse, summary="Get CSRF token")
async def get_csrf_token(request: Request, response: Response):
    """
    Token juga di-set ke cookie; kirim ulang lewat header ``x-csrf-token``
    untuk setiap POST / PUT / PATCH / DELETE.
    """
    token = get_or_create_csrf_token(request)
    set_csrf_cookie(response, token)
    return CsrfTokenResponse(csrf_token=token)
