"""Audit log endpoints (ADMIN only)."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.auth.permissions import admin_required
from persuratan.core.database import get_db
from persuratan.repositories.audit_log import AuditLogRepository
from persuratan.schemas.audit_log import AuditLogResponse
from persuratan.schemas.common import ListResponse
from persuratan.schemas.filters import AuditLogFilterParams, get_audit_log_filters
from persuratan.services.audit_log import AuditLogService

router = APIRouter()


async def get_audit_log_service(session: AsyncSession = Depends(get_db)) -> AuditLogService:
    return AuditLogService(AuditLogRepository(session))


@router.get("", response_model=ListResponse[AuditLogResponse])
async def get_audit_logs(
    filters: AuditLogFilterParams = Depends(get_audit_log_filters),
    current_user: dict = Depends(admin_required),
    service: AuditLogService = Depends(get_audit_log_service)
):
    """
    **Query Parameters:**
    - **days**: rentang hari ke belakang (default 30)
    - **action**, **entity**, **userId**
    - **search**: details, nama user, url

    Urut terbaru dulu.
    """
    return await service.get_all(filters)


@router.get("/failed-logins", response_model=List[AuditLogResponse])
async def get_failed_logins(
    hours: int = Query(24, ge=1, le=720),
    limit: int = Query(100, ge=1, le=500),
    current_user: dict = Depends(admin_required),
    service: AuditLogService = Depends(get_audit_log_service)
):
    """Percobaan login gagal dalam beberapa jam terakhir."""
    return await service.get_failed_logins(hours=hours, limit=limit)
