"""Repository untuk surat keluar."""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.models.base import utc_now
from persuratan.models.surat_keluar import SuratKeluar
from persuratan.models.surat_masuk import SuratMasuk
from persuratan.models.user import User
from persuratan.schemas.filters import SuratKeluarFilterParams

SuratKeluarRow = Tuple[SuratKeluar, Optional[SuratMasuk], Optional[User]]


class SuratKeluarRepository:
    """Repository untuk operasi surat keluar."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _base_query(self):
        return (
            select(SuratKeluar, SuratMasuk, User)
            .outerjoin(SuratMasuk, SuratKeluar.surat_masuk_id == SuratMasuk.id)
            .outerjoin(User, SuratKeluar.created_by == User.id)
        )

    async def create(self, data: dict, created_by: Optional[str] = None) -> SuratKeluar:
        surat = SuratKeluar(**data, created_by=created_by)

        self.session.add(surat)
        await self.session.commit()
        await self.session.refresh(surat)
        return surat

    async def get_by_id(self, surat_id: str) -> Optional[SuratKeluar]:
        result = await self.session.execute(select(SuratKeluar).where(SuratKeluar.id == surat_id))
        return result.scalar_one_or_none()

    async def get_detail(self, surat_id: str) -> Optional[SuratKeluarRow]:
        row = (await self.session.execute(
            self._base_query().where(SuratKeluar.id == surat_id)
        )).first()
        return (row[0], row[1], row[2]) if row else None

    async def no_urut_exists(self, no_urut: int, exclude_id: Optional[str] = None) -> bool:
        query = select(SuratKeluar.id).where(SuratKeluar.no_urut == no_urut)
        if exclude_id:
            query = query.where(SuratKeluar.id != exclude_id)
        return (await self.session.execute(query)).first() is not None

    async def update(self, surat_id: str, update_data: dict, updated_by: Optional[str] = None) -> Optional[SuratKeluar]:
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

    async def get_all_filtered(self, filters: SuratKeluarFilterParams) -> Tuple[List[SuratKeluarRow], int]:
        """Search di perihal, kirim kepada dan klas; filter tanggal/bulan."""
        query = self._base_query()

        if filters.search:
            search_term = f"%{filters.search}%"
            query = query.where(
                or_(
                    SuratKeluar.perihal_surat.ilike(search_term),
                    SuratKeluar.kirim_kepada.ilike(search_term),
                    SuratKeluar.klas.ilike(search_term),
                )
            )

        month_range = filters.month_range
        if month_range:
            start, end = month_range
            query = query.where(SuratKeluar.tanggal_surat >= start, SuratKeluar.tanggal_surat < end)
        elif filters.tanggal:
            query = query.where(SuratKeluar.tanggal_surat == filters.tanggal)

        count_query = select(func.count()).select_from(
            query.with_only_columns(SuratKeluar.id).subquery()
        )
        total = (await self.session.execute(count_query)).scalar() or 0

        query = (
            query
            .order_by(SuratKeluar.no_urut.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        rows = (await self.session.execute(query)).all()
        return [(row[0], row[1], row[2]) for row in rows], total

    async def count(self) -> int:
        return (await self.session.execute(select(func.count(SuratKeluar.id)))).scalar() or 0
