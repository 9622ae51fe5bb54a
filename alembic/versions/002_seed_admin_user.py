"""seed admin user

Revision ID: 002_seed_admin_user
Revises: 001_initial_schema
Create Date: 2025-01-06 09:30:00

"""
import os
import uuid
from datetime import datetime, timezone
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from persuratan.auth.jwt import get_password_hash


# revision identifiers, used by Alembic.
revision: str = '002_seed_admin_user'
down_revision: Union[str, None] = '001_initial_schema'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_ADMIN_EMAIL = "admin@dprd-kalsel.go.id"


def upgrade() -> None:
    """Akun admin awal. Email / password bisa diatur lewat ADMIN_EMAIL dan ADMIN_PASSWORD."""
    connection = op.get_bind()

    email = os.getenv("ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL).lower()
    password = os.getenv("ADMIN_PASSWORD", "Arsip@DPRD2025")

    exists = connection.execute(
        sa.text("SELECT 1 FROM users WHERE email = :email"), {"email": email}
    ).fetchone()
    if exists:
        print(f"Admin {email} sudah ada, dilewati")
        return

    connection.execute(
        sa.text("""
            INSERT INTO users (id, name, email, hashed_password, is_active, role, created_at)
            VALUES (:id, :name, :email, :hashed_password, :is_active, :role, :created_at)
        """),
        {
            "id": str(uuid.uuid4()),
            "name": "Administrator Arsip",
            "email": email,
            "hashed_password": get_password_hash(password),
            "is_active": True,
            "role": "ADMIN",
            "created_at": datetime.now(timezone.utc),
        }
    )
    print(f"Admin user created: {email}")


def downgrade() -> None:
    connection = op.get_bind()
    connection.execute(
        sa.text("DELETE FROM users WHERE email = :email"),
        {"email": os.getenv("ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL).lower()}
    )
