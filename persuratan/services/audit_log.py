"""Service untuk audit log."""

import logging
from typing import Dict, List, Optional

from fastapi import Request

from persuratan.models.enums import AuditAction, AuditEntity
from persuratan.repositories.audit_log import AuditLogRepository
from persuratan.schemas.audit_log import AuditLogCreate, AuditLogResponse
from persuratan.schemas.common import ListResponse
from persuratan.schemas.filters import AuditLogFilterParams

logger = logging.getLogger(__name__)


def get_ip_address(request: Optional[Request]) -> Optional[str]:
    """IP client, utamakan header dari reverse proxy."""
    if request is None:
        return None

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return None


def get_user_agent(request: Optional[Request]) -> Optional[str]:
    if request is None:
        return None
    user_agent = request.headers.get("User-Agent")
    return user_agent[:500] if user_agent else None


def to_response(log) -> AuditLogResponse:
    return AuditLogResponse(
        id=log.id,
        action=log.action,
        entity=log.entity,
        entity_id=log.entity_id,
        user_id=log.user_id,
        user_name=log.user_name,
        method=log.method,
        url=log.url,
        details=log.details,
        ip_address=log.ip_address,
        user_agent=log.user_agent,
        response_status=log.response_status,
        is_success=log.is_success,
        date=log.date,
    )


class AuditLogService:
    """Tulis dan baca audit log. Gagal menulis log tidak boleh menggagalkan request."""

    def __init__(self, audit_repo: AuditLogRepository):
        self.audit_repo = audit_repo

    async def log(
        self,
        action: AuditAction,
        entity: AuditEntity,
        entity_id: Optional[str] = None,
        user: Optional[Dict] = None,
        details: Optional[str] = None,
        request: Optional[Request] = None,
        response_status: Optional[int] = None,
    ) -> None:
        try:
            await self.audit_repo.create(AuditLogCreate(
                action=action,
                entity=entity,
                entity_id=entity_id,
                user_id=user.get("id") if user else None,
                user_name=(user.get("name") or user.get("email")) if user else None,
                method=request.method if request else None,
                url=str(request.url.path) if request else None,
                details=details,
                ip_address=get_ip_address(request),
                user_agent=get_user_agent(request),
                response_status=response_status,
            ))
        except Exception as e:
            logger.error(f"Failed to write audit log ({action.value} {entity.value}): {str(e)}")

    async def get_all(self, filters: AuditLogFilterParams) -> ListResponse[AuditLogResponse]:
        logs, total = await self.audit_repo.get_all_filtered(filters)
        return ListResponse[AuditLogResponse].create(
            items=[to_response(log) for log in logs],
            total=total,
            page=filters.page,
            limit=filters.limit,
        )

    async def get_failed_logins(self, hours: int = 24, limit: int = 100) -> List[AuditLogResponse]:
        logs = await self.audit_repo.get_failed_logins(hours=hours, limit=limit)
        return [to_response(log) for log in logs]
