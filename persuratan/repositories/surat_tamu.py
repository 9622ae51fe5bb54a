"""Repository untuk surat tamu."""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.models.base import utc_now
from persuratan.models.surat_tamu import SuratTamu
from persuratan.models.user import User
from persuratan.schemas.filters import SuratTamuFilterParams


class SuratTamuRepository:
    """Repository untuk operasi surat tamu."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, data: dict, created_by: Optional[str] = None) -> SuratTamu:
        surat = SuratTamu(**data, created_by=created_by)

        self.session.add(surat)
        await self.session.commit()
        await self.session.refresh(surat)
        return surat

    async def get_by_id(self, surat_id: str) -> Optional[SuratTamu]:
        result = await self.session.execute(select(SuratTamu).where(SuratTamu.id == surat_id))
        return result.scalar_one_or_none()

    async def get_with_creator(self, surat_id: str) -> Optional[Tuple[SuratTamu, Optional[User]]]:
        query = (
            select(SuratTamu, User)
            .outerjoin(User, SuratTamu.created_by == User.id)
            .where(SuratTamu.id == surat_id)
        )
        row = (await self.session.execute(query)).first()
        return (row[0], row[1]) if row else None

    async def no_urut_exists(self, no_urut: int, exclude_id: Optional[str] = None) -> bool:
        query = select(SuratTamu.id).where(SuratTamu.no_urut == no_urut)
        if exclude_id:
            query = query.where(SuratTamu.id != exclude_id)
        return (await self.session.execute(query)).first() is not None

    async def update(self, surat_id: str, update_data: dict, updated_by: Optional[str] = None) -> Optional[SuratTamu]:
        surat = await self.get_by_id(surat_id)
        if not surat:
            return None

        for key, value in update_data.items():
            setattr(surat, key, value)

        surat.updated_at = utc_now()
        surat.updated_by = updated_by
        await self.session.commit()
        await self.session.refresh(surat)
        return surat

    async def delete(self, surat_id: str) -> bool:
        surat = await self.get_by_id(surat_id)
        if not surat:
            return False
        await self.session.delete(surat)
        await self.session.commit()
        return True

    async def get_all_filtered(
        self, filters: SuratTamuFilterParams
    ) -> Tuple[List[Tuple[SuratTamu, Optional[User]]], int]:
        """Search di nama, keperluan, asal dan tujuan surat."""
        query = select(SuratTamu)

        if filters.search:
            search_term = f"%{filters.search}%"
            query = query.where(
                or_(
                    SuratTamu.nama.ilike(search_term),
                    SuratTamu.keperluan.ilike(search_term),
                    SuratTamu.asal_surat.ilike(search_term),
                    SuratTamu.tujuan_surat.ilike(search_term),
                )
            )

        month_range = filters.month_range
        if month_range:
            start, end = month_range
            query = query.where(SuratTamu.tanggal >= start, SuratTamu.tanggal < end)
        elif filters.tanggal:
            query = query.where(SuratTamu.tanggal == filters.tanggal)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar() or 0

        query = (
            query
            .add_columns(User)
            .outerjoin(User, SuratTamu.created_by == User.id)
            .order_by(SuratTamu.no_urut.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        rows = (await self.session.execute(query)).all()
        return [(row[0], row[1]) for row in rows], total
