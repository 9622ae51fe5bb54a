"""Schemas untuk audit log."""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime

from persuratan.models.enums import AuditAction, AuditEntity
from persuratan.schemas.common import CamelModel


class AuditLogCreate(BaseModel):
    """Schema internal untuk menulis audit log."""
    action: AuditAction
    entity: AuditEntity
    entity_id: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    method: Optional[str] = Field(None, max_length=10)
    url: Optional[str] = Field(None, max_length=500)
    details: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = Field(None, max_length=500)
    response_status: Optional[int] = Field(None, ge=100, le=599)


class AuditLogResponse(CamelModel):
    id: str
    action: AuditAction
    entity: AuditEntity
    entity_id: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None
    details: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    response_status: Optional[int] = None
    is_success: bool
    date: datetime
