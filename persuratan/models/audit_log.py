"""Model untuk audit log activity sistem."""

from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import DateTime, Enum as SQLEnum
import uuid as uuid_lib

from .base import utc_now
from .enums import AuditAction, AuditEntity


class AuditLog(SQLModel, table=True):
    """Log semua activity penting (login, mutasi data, export)."""

    __tablename__ = "audit_logs"

    id: str = Field(
        default_factory=lambda: str(uuid_lib.uuid4()),
        primary_key=True,
        max_length=36
    )

    # ===== CORE FIELDS =====
    action: AuditAction = Field(
        sa_column=Column(SQLEnum(AuditAction), nullable=False, index=True)
    )
    entity: AuditEntity = Field(
        sa_column=Column(SQLEnum(AuditEntity), nullable=False, index=True)
    )
    entity_id: Optional[str] = Field(default=None, max_length=36)
    date: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime(timezone=True))

    # ===== OPTIONAL ENRICHMENT FIELDS =====
    user_id: Optional[str] = Field(default=None, index=True, max_length=36)
    user_name: Optional[str] = Field(default=None, max_length=200)
    method: Optional[str] = Field(default=None, max_length=10)
    url: Optional[str] = Field(default=None, max_length=500)
    details: Optional[str] = Field(default=None)
    ip_address: Optional[str] = Field(default=None, max_length=45)  # IPv6 support
    user_agent: Optional[str] = Field(default=None, max_length=500)
    response_status: Optional[int] = Field(default=None)

    @property
    def is_success(self) -> bool:
        if self.response_status is None:
            return self.action != AuditAction.FAILED_LOGIN
        return 200 <= self.response_status < 400

    def __repr__(self) -> str:
        return f"<AuditLog(action={self.action.value}, entity={self.entity.value}, user={self.user_name})>"
