"""Repository untuk operasi audit log."""

from typing import List, Optional, Tuple
from datetime import timedelta
from sqlalchemy import select, or_, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.models.base import utc_now
from persuratan.models.audit_log import AuditLog
from persuratan.models.enums import AuditAction
from persuratan.schemas.audit_log import AuditLogCreate
from persuratan.schemas.filters import AuditLogFilterParams


class AuditLogRepository:
    """Repository untuk operasi audit log."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, log_data: AuditLogCreate) -> AuditLog:
        """Create audit log baru."""
        audit_log = AuditLog(**log_data.model_dump())

        self.session.add(audit_log)
        await self.session.commit()
        await self.session.refresh(audit_log)
        return audit_log

    async def get_all_filtered(self, filters: AuditLogFilterParams) -> Tuple[List[AuditLog], int]:
        """Audit log dalam ``days`` hari terakhir, terbaru dulu."""
        since = utc_now() - timedelta(days=filters.days)
        query = select(AuditLog).where(AuditLog.date >= since)

        if filters.search:
            search_term = f"%{filters.search}%"
            query = query.where(
                or_(
                    AuditLog.details.ilike(search_term),
                    AuditLog.user_name.ilike(search_term),
                    AuditLog.url.ilike(search_term),
                )
            )

        if filters.action:
            query = query.where(AuditLog.action == filters.action)
        if filters.entity:
            query = query.where(AuditLog.entity == filters.entity)
        if filters.user_id:
            query = query.where(AuditLog.user_id == filters.user_id)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar() or 0

        query = (
            query
            .order_by(desc(AuditLog.date))
            .offset(filters.offset)
            .limit(filters.limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def get_failed_logins(self, hours: int = 24, limit: int = 100) -> List[AuditLog]:
        since = utc_now() - timedelta(hours=hours)
        query = (
            select(AuditLog)
            .where(AuditLog.action == AuditAction.FAILED_LOGIN, AuditLog.date >= since)
            .order_by(desc(AuditLog.date))
            .limit(limit)
        )
        return list((await self.session.execute(query)).scalars().all())

