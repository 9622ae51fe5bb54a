"""User schemas."""

from typing import Optional
from pydantic import EmailStr, Field, field_validator
from datetime import datetime

from persuratan.models.enums import UserRole
from persuratan.schemas.common import CamelModel


# ===== REQUEST SCHEMAS =====

class UserCreate(CamelModel):
    """Schema for creating a user."""
    name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = UserRole.MEMBER

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: str) -> str:
        name = name.strip()
        if len(name) < 2:
            raise ValueError("Nama minimal 2 karakter")
        return name


class UserUpdate(CamelModel):
    """Schema for updating a user. Password hanya diganti kalau diisi."""
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: Optional[str]) -> Optional[str]:
        if name is not None:
            name = name.strip()
            if len(name) < 2:
                raise ValueError("Nama minimal 2 karakter")
        return name


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


# ===== RESPONSE SCHEMAS =====

class UserResponse(CamelModel):
    """Schema for user response."""
    id: str
    name: str
    email: str
    role: UserRole
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class CurrentUserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole
    role_display: str


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: CurrentUserResponse
