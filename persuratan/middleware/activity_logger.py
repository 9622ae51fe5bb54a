"""Middleware untuk mencatat semua request yang mengubah data ke audit log."""

import logging
import re
from typing import Any, Dict, Optional, Tuple

from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError
from starlette.middleware.base import BaseHTTPMiddleware

from persuratan.auth.jwt import verify_token
from persuratan.core.config import settings
from persuratan.core.database import async_session
from persuratan.models.enums import AuditAction, AuditEntity
from persuratan.repositories.audit_log import AuditLogRepository
from persuratan.repositories.user import UserRepository
from persuratan.services.audit_log import AuditLogService
from persuratan.utils.cookies import get_access_token_from_cookie

logger = logging.getLogger(__name__)

UUID_PATTERN = re.compile(r"^[0-9a-fA-F-]{36}$")


class ActivityLoggingMiddleware(BaseHTTPMiddleware):
    """Catat POST / PUT / PATCH / DELETE dari user yang sudah login."""

    LOGGED_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

    # Login / logout dicatat sendiri oleh AuthService
    SKIP_SUFFIXES = ("/auth/login", "/auth/logout", "/csrf-token")

    ENTITY_BY_MODULE = {
        "users": AuditEntity.USER,
        "surat-masuk": AuditEntity.SURAT_MASUK,
        "surat-keluar": AuditEntity.SURAT_KELUAR,
        "disposisi": AuditEntity.DISPOSISI,
        "surat-tamu": AuditEntity.SURAT_TAMU,
    }

    DESCRIPTIONS = {
        ("POST", "users"): "Membuat user",
        ("PUT", "users"): "Mengubah user",
        ("DELETE", "users"): "Menghapus user",
        ("POST", "surat-masuk"): "Membuat surat masuk",
        ("PUT", "surat-masuk"): "Mengubah surat masuk",
        ("DELETE", "surat-masuk"): "Menghapus surat masuk",
        ("POST", "surat-keluar"): "Membuat surat keluar",
        ("PUT", "surat-keluar"): "Mengubah surat keluar",
        ("DELETE", "surat-keluar"): "Menghapus surat keluar",
        ("POST", "disposisi"): "Membuat disposisi",
        ("PUT", "disposisi"): "Mengubah disposisi",
        ("DELETE", "disposisi"): "Menghapus disposisi",
        ("POST", "surat-tamu"): "Membuat surat tamu",
        ("PUT", "surat-tamu"): "Mengubah surat tamu",
        ("DELETE", "surat-tamu"): "Menghapus surat tamu",
    }

    async def dispatch(self, request: Request, call_next):
        if request.method not in self.LOGGED_METHODS:
            return await call_next(request)

        path = request.url.path
        if not path.startswith(settings.API_PREFIX) or path.endswith(self.SKIP_SUFFIXES):
            return await call_next(request)

        current_user = await self._get_current_user(request)
        if not current_user:
            return await call_next(request)

        response = await call_next(request)

        if response.status_code < 500:
            await self._log_activity(request, response.status_code, current_user)

        return response

    def _parse_path(self, path: str) -> Tuple[str, Optional[str], Optional[str]]:
        """(module, entity_id, sub action) dari path API."""
        parts = [part for part in path[len(settings.API_PREFIX):].split("/") if part]
        module = parts[0] if parts else "system"
        entity_id = parts[1] if len(parts) > 1 and UUID_PATTERN.match(parts[1]) else None
        sub_action = parts[2] if len(parts) > 2 else None
        return module, entity_id, sub_action

    def describe(self, method: str, path: str) -> Tuple[AuditAction, AuditEntity, Optional[str], str]:
        module, entity_id, sub_action = self._parse_path(path)

        if module == "surat-masuk" and sub_action == "copy-disposisi":
            return (
                AuditAction.CREATE,
                AuditEntity.DISPOSISI,
                entity_id,
                "Menyalin surat masuk ke disposisi",
            )

        action = AuditAction.from_method(method)
        entity = self.ENTITY_BY_MODULE.get(module, AuditEntity.SYSTEM)
        method_key = "PUT" if method == "PATCH" else method
        description = self.DESCRIPTIONS.get((method_key, module), f"{action.value} {module}")
        return action, entity, entity_id, description

    async def _get_current_user(self, request: Request) -> Optional[Dict[str, Any]]:
        scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
        if not token or scheme.lower() != "bearer":
            token = get_access_token_from_cookie(request)
        if not token:
            return None

        try:
            payload = verify_token(token)
        except JWTError:
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None

        async with async_session() as session:
            user = await UserRepository(session).get_by_id(user_id)
            if not user or not user.is_active:
                return None
            return {"id": user.id, "name": user.name, "email": user.email}

    async def _log_activity(self, request: Request, status_code: int, current_user: Dict[str, Any]) -> None:
        action, entity, entity_id, description = self.describe(request.method, request.url.path)
        async with async_session() as session:
            service = AuditLogService(AuditLogRepository(session))
            await service.log(
                action,
                entity,
                entity_id=entity_id,
                user=current_user,
                details=description,
                request=request,
                response_status=status_code,
            )


def add_activity_logging(app) -> None:
    app.add_middleware(ActivityLoggingMiddleware)
