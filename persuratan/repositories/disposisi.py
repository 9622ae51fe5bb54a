"""Repository untuk disposisi."""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.models.base import utc_now
from persuratan.models.disposisi import Disposisi
from persuratan.models.surat_masuk import SuratMasuk
from persuratan.models.user import User
from persuratan.schemas.filters import DisposisiFilterParams

DisposisiRow = Tuple[Disposisi, Optional[SuratMasuk], Optional[User]]


class DisposisiRepository:
    """Repository untuk operasi disposisi."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _base_query(self):
        """Disposisi + surat masuk + pembuat."""
        return (
            select(Disposisi, SuratMasuk, User)
            .outerjoin(SuratMasuk, Disposisi.surat_masuk_id == SuratMasuk.id)
            .outerjoin(User, Disposisi.created_by == User.id)
        )

    async def create(self, data: dict, created_by: Optional[str] = None) -> Disposisi:
        disposisi = Disposisi(**data, created_by=created_by)

        self.session.add(disposisi)
        await self.session.commit()
        await self.session.refresh(disposisi)
        return disposisi

    async def get_by_id(self, disposisi_id: str) -> Optional[Disposisi]:
        result = await self.session.execute(select(Disposisi).where(Disposisi.id == disposisi_id))
        return result.scalar_one_or_none()

    async def get_detail(self, disposisi_id: str) -> Optional[DisposisiRow]:
        row = (await self.session.execute(
            self._base_query().where(Disposisi.id == disposisi_id)
        )).first()
        return (row[0], row[1], row[2]) if row else None

    async def get_by_surat_masuk(self, surat_masuk_id: str) -> List[DisposisiRow]:
        query = (
            self._base_query()
            .where(Disposisi.surat_masuk_id == surat_masuk_id)
            .order_by(Disposisi.created_at.desc())
        )
        rows = (await self.session.execute(query)).all()
        return [(row[0], row[1], row[2]) for row in rows]

    async def update(self, disposisi_id: str, update_data: dict, updated_by: Optional[str] = None) -> Optional[Disposisi]:
        disposisi = await self.get_by_id(disposisi_id)
        if not disposisi:
            return None

        for key, value in update_data.items():
            setattr(disposisi, key, value)

        disposisi.updated_at = utc_now()
        disposisi.updated_by = updated_by
        await self.session.commit()
        await self.session.refresh(disposisi)
        return disposisi

    async def delete(self, disposisi_id: str) -> bool:
        disposisi = await self.get_by_id(disposisi_id)
        if not disposisi:
            return False
        await self.session.delete(disposisi)
        await self.session.commit()
        return True

    async def get_all_filtered(self, filters: DisposisiFilterParams) -> Tuple[List[DisposisiRow], int]:
        """Search di tujuan, isi disposisi dan nomor surat masuk."""
        query = self._base_query()

        if filters.search:
            search_term = f"%{filters.search}%"
            query = query.where(
                or_(
                    Disposisi.tujuan_disposisi.ilike(search_term),
                    Disposisi.isi_disposisi.ilike(search_term),
                    SuratMasuk.nomor_surat.ilike(search_term),
                )
            )

        if filters.status:
            query = query.where(Disposisi.status == filters.status)

        if filters.surat_masuk_id:
            query = query.where(Disposisi.surat_masuk_id == filters.surat_masuk_id)

        count_query = select(func.count()).select_from(
            query.with_only_columns(Disposisi.id).subquery()
        )
        total = (await self.session.execute(count_query)).scalar() or 0

        query = (
            query
            .order_by(Disposisi.created_at.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        rows = (await self.session.execute(query)).all()
        return [(row[0], row[1], row[2]) for row in rows], total

    async def get_all_for_export(self) -> List[DisposisiRow]:
        query = self._base_query().order_by(Disposisi.no_urut.asc(), Disposisi.tanggal_disposisi.asc())
        rows = (await self.session.execute(query)).all()
        return [(row[0], row[1], row[2]) for row in rows]

    async def count(self) -> int:
        return (await self.session.execute(select(func.count(Disposisi.id)))).scalar() or 0
