"""Repository untuk surat masuk."""

from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.models.base import utc_now
from persuratan.models.disposisi import Disposisi
from persuratan.models.surat_keluar import SuratKeluar
from persuratan.models.surat_masuk import SuratMasuk
from persuratan.models.user import User
from persuratan.schemas.filters import SuratMasukFilterParams, SuratMasukSearchField


class SuratMasukRepository:
    """Repository untuk operasi surat masuk."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, data: dict, created_by: Optional[str] = None) -> SuratMasuk:
        surat = SuratMasuk(**data, created_by=created_by)

        self.session.add(surat)
        await self.session.commit()
        await self.session.refresh(surat)
        return surat

    async def get_by_id(self, surat_id: str) -> Optional[SuratMasuk]:
        """Get surat masuk by ID."""
        result = await self.session.execute(select(SuratMasuk).where(SuratMasuk.id == surat_id))
        return result.scalar_one_or_none()

    async def get_with_creator(self, surat_id: str) -> Optional[Tuple[SuratMasuk, Optional[User]]]:
        query = (
            select(SuratMasuk, User)
            .outerjoin(User, SuratMasuk.created_by == User.id)
            .where(SuratMasuk.id == surat_id)
        )
        row = (await self.session.execute(query)).first()
        return (row[0], row[1]) if row else None

    async def no_urut_exists(self, no_urut: int, exclude_id: Optional[str] = None) -> bool:
        query = select(SuratMasuk.id).where(SuratMasuk.no_urut == no_urut)
        if exclude_id:
            query = query.where(SuratMasuk.id != exclude_id)
        return (await self.session.execute(query)).first() is not None

    async def update(self, surat_id: str, update_data: dict, updated_by: Optional[str] = None) -> Optional[SuratMasuk]:
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

    async def sync_disposisi_no_urut(
        self, surat_id: str, no_urut: int, build_nomor: Callable[[int, date], str]
    ) -> int:
        """Samakan no_urut semua disposisi milik surat ini dan bentuk ulang nomor_disposisi."""
        result = await self.session.execute(
            select(Disposisi).where(Disposisi.surat_masuk_id == surat_id)
        )
        disposisi_list = list(result.scalars().all())
        now = utc_now()
        for disposisi in disposisi_list:
            disposisi.no_urut = no_urut
            disposisi.nomor_disposisi = build_nomor(no_urut, disposisi.tanggal_disposisi)
            disposisi.updated_at = now
        await self.session.commit()
        return len(disposisi_list)

    async def delete(self, surat_id: str) -> bool:
        """Hapus surat beserta disposisinya; surat keluar yang merujuk dilepas."""
        surat = await self.get_by_id(surat_id)
        if not surat:
            return False

        await self.session.execute(delete(Disposisi).where(Disposisi.surat_masuk_id == surat_id))
        await self.session.execute(
            update(SuratKeluar)
            .where(SuratKeluar.surat_masuk_id == surat_id)
            .values(surat_masuk_id=None)
        )
        await self.session.delete(surat)
        await self.session.commit()
        return True

    async def get_all_filtered(
        self, filters: SuratMasukFilterParams
    ) -> Tuple[List[Tuple[SuratMasuk, Optional[User]]], int]:
        """Get surat masuk dengan search, filter tanggal/bulan dan pagination."""
        query = select(SuratMasuk)

        if filters.search:
            if filters.search_field == SuratMasukSearchField.NO_URUT:
                # Pencarian no urut harus angka persis; selain angka diabaikan
                if filters.search.isdigit():
                    query = query.where(SuratMasuk.no_urut == int(filters.search))
            else:
                column = {
                    SuratMasukSearchField.NOMOR_SURAT: SuratMasuk.nomor_surat,
                    SuratMasukSearchField.ASAL_SURAT: SuratMasuk.asal_surat,
                    SuratMasukSearchField.PERIHAL: SuratMasuk.perihal,
                }[filters.search_field]
                query = query.where(column.ilike(f"%{filters.search}%"))

        month_range = filters.month_range
        if month_range:
            start, end = month_range
            query = query.where(SuratMasuk.tanggal_surat >= start, SuratMasuk.tanggal_surat < end)
        elif filters.tanggal:
            query = query.where(SuratMasuk.tanggal_surat == filters.tanggal)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar() or 0

        query = (
            query
            .add_columns(User)
            .outerjoin(User, SuratMasuk.created_by == User.id)
            .order_by(SuratMasuk.no_urut.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        rows = (await self.session.execute(query)).all()
        return [(row[0], row[1]) for row in rows], total

    async def get_related_counts(self, surat_ids: List[str]) -> Dict[str, Tuple[int, int]]:
        """Map surat_id -> (jumlah disposisi, jumlah surat keluar)."""
        if not surat_ids:
            return {}

        disposisi_rows = await self.session.execute(
            select(Disposisi.surat_masuk_id, func.count(Disposisi.id))
            .where(Disposisi.surat_masuk_id.in_(surat_ids))
            .group_by(Disposisi.surat_masuk_id)
        )
        keluar_rows = await self.session.execute(
            select(SuratKeluar.surat_masuk_id, func.count(SuratKeluar.id))
            .where(SuratKeluar.surat_masuk_id.in_(surat_ids))
            .group_by(SuratKeluar.surat_masuk_id)
        )
        disposisi_counts = dict(disposisi_rows.all())
        keluar_counts = dict(keluar_rows.all())
        return {
            surat_id: (disposisi_counts.get(surat_id, 0), keluar_counts.get(surat_id, 0))
            for surat_id in surat_ids
        }

    async def get_all_for_export(self) -> List[Tuple[SuratMasuk, Optional[User]]]:
        """Semua surat masuk urut no_urut naik, untuk export."""
        query = (
            select(SuratMasuk, User)
            .outerjoin(User, SuratMasuk.created_by == User.id)
            .order_by(SuratMasuk.no_urut.asc())
        )
        rows = (await self.session.execute(query)).all()
        return [(row[0], row[1]) for row in rows]

    # ===== STATISTICS =====

    async def count(self) -> int:
        return (await self.session.execute(select(func.count(SuratMasuk.id)))).scalar() or 0

    async def count_in_month(self, today: Optional[date] = None) -> int:
        """Jumlah surat dengan tanggal_surat di bulan berjalan."""
        today = today or date.today()
        start = today.replace(day=1)
        end = (start + timedelta(days=32)).replace(day=1)
        query = select(func.count(SuratMasuk.id)).where(
            SuratMasuk.tanggal_surat >= start,
            SuratMasuk.tanggal_surat < end,
        )
        return (await self.session.execute(query)).scalar() or 0

    async def get_recent(self, limit: int = 5) -> List[SuratMasuk]:
        query = select(SuratMasuk).order_by(SuratMasuk.no_urut.desc()).limit(limit)
        return list((await self.session.execute(query)).scalars().all())
