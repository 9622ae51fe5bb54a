"""Base model with common fields."""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Waktu sekarang dalam UTC (timezone-aware)."""
    return datetime.now(timezone.utc)


class TimestampMixin(SQLModel):
    """Mixin for timestamp fields."""
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))


class AuditMixin(SQLModel):
    """Mixin for audit fields (user id pembuat / pengubah)."""
    created_by: Optional[str] = Field(default=None, max_length=36, index=True)
    updated_by: Optional[str] = Field(default=None, max_length=36)


class BaseModel(TimestampMixin, AuditMixin):
    """Base model with all common fields."""
    pass
