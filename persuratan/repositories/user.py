"""User repository."""

from typing import List, Optional, Tuple

from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.models.base import utc_now
from persuratan.models.user import User
from persuratan.models.enums import UserRole
from persuratan.schemas.filters import UserFilterParams


class UserRepository:
    """Repository untuk operasi user."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ===== USER CRUD OPERATIONS =====

    async def create(
        self,
        name: str,
        email: str,
        hashed_password: str,
        role: UserRole,
        created_by: Optional[str] = None,
    ) -> User:
        """Create user baru. Email disimpan lowercase."""
        user = User(
            name=name,
            email=email.lower(),
            hashed_password=hashed_password,
            role=role,
            created_by=created_by,
        )

        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by UUID."""
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (untuk login)."""
        query = select(User).where(User.email == email.lower())
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def update(self, user_id: str, update_data: dict, updated_by: Optional[str] = None) -> Optional[User]:
        """Update user. ``update_data`` sudah berisi hashed_password kalau password diganti."""
        user = await self.get_by_id(user_id)
        if not user:
            return None

        if "email" in update_data and update_data["email"]:
            update_data["email"] = update_data["email"].lower()

        for key, value in update_data.items():
            setattr(user, key, value)

        user.updated_at = utc_now()
        user.updated_by = updated_by
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def update_last_login(self, user_id: str) -> None:
        user = await self.get_by_id(user_id)
        if user:
            user.last_login = utc_now()
            await self.session.commit()

    async def delete(self, user_id: str) -> bool:
        user = await self.get_by_id(user_id)
        if not user:
            return False
        await self.session.delete(user)
        await self.session.commit()
        return True

    async def get_all_filtered(self, filters: UserFilterParams) -> Tuple[List[User], int]:
        """Get users dengan search (nama, email), filter role dan pagination."""
        query = select(User)

        if filters.search:
            search_term = f"%{filters.search}%"
            query = query.where(
                or_(
                    User.name.ilike(search_term),
                    User.email.ilike(search_term),
                )
            )

        if filters.role:
            query = query.where(User.role == filters.role)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar() or 0

        query = (
            query
            .order_by(User.created_at.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def email_exists(self, email: str, exclude_user_id: Optional[str] = None) -> bool:
        """Check if email already exists."""
        query = select(User.id).where(User.email == email.lower())
        if exclude_user_id:
            query = query.where(User.id != exclude_user_id)
        result = await self.session.execute(query)
        return result.first() is not None

