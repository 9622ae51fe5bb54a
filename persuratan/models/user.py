"""User model: petugas arsip (ADMIN) dan pengguna surat tamu (MEMBER)."""

from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import DateTime, Enum as SQLEnum
import uuid as uuid_lib

from .base import BaseModel
from .enums import UserRole


class User(BaseModel, SQLModel, table=True):
    """User model."""

    __tablename__ = "users"

    id: str = Field(
        default_factory=lambda: str(uuid_lib.uuid4()),
        primary_key=True,
        max_length=36
    )

    name: str = Field(max_length=200, index=True, description="Nama lengkap")
    email: str = Field(unique=True, index=True, max_length=255)

    # Authentication
    hashed_password: str = Field(description="Password yang sudah di-hash")

    # Status
    is_active: bool = Field(default=True)
    last_login: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    role: UserRole = Field(
        default=UserRole.MEMBER,
        sa_column=Column(SQLEnum(UserRole), nullable=False, index=True),
        description="Role pengguna: ADMIN atau MEMBER"
    )

    def is_admin(self) -> bool:
        """Check if user is admin."""
        return self.role == UserRole.ADMIN

    def is_member(self) -> bool:
        return self.role == UserRole.MEMBER

    def get_role_display(self) -> str:
        """Get role display name."""
        role_display = {
            UserRole.ADMIN: "Administrator",
            UserRole.MEMBER: "Member",
        }
        return role_display.get(self.role, self.role.value)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"
