"""Service untuk disposisi."""

import logging
from datetime import date
from typing import Dict, Optional

from fastapi import HTTPException, status

from persuratan.models.disposisi import Disposisi
from persuratan.models.surat_masuk import SuratMasuk
from persuratan.models.user import User
from persuratan.repositories.disposisi import DisposisiRepository
from persuratan.repositories.surat_masuk import SuratMasukRepository
from persuratan.schemas.common import CreatorInfo, ListResponse, MessageResponse, SuratMasukBrief
from persuratan.schemas.disposisi import DisposisiCreate, DisposisiResponse, DisposisiUpdate
from persuratan.schemas.filters import DisposisiFilterParams
from persuratan.utils.tujuan import decode_tujuan, validate_tujuan

logger = logging.getLogger(__name__)


def generate_nomor_disposisi(no_urut: int, tanggal: date) -> str:
    """Format DISP/SM{no_urut 3 digit}/DSP/{MM}/{YYYY}."""
    return f"DISP/SM{no_urut:03d}/DSP/{tanggal.month:02d}/{tanggal.year}"


def to_disposisi_response(
    disposisi: Disposisi,
    surat: Optional[SuratMasuk] = None,
    creator: Optional[User] = None,
) -> DisposisiResponse:
    unit, sub_unit = decode_tujuan(disposisi.tujuan_disposisi)
    return DisposisiResponse(
        id=disposisi.id,
        no_urut=disposisi.no_urut,
        nomor_disposisi=disposisi.nomor_disposisi,
        tanggal_disposisi=disposisi.tanggal_disposisi,
        tujuan_disposisi=disposisi.tujuan_disposisi,
        tujuan_unit=unit or None,
        tujuan_sub_unit=sub_unit,
        isi_disposisi=disposisi.isi_disposisi,
        keterangan=disposisi.keterangan,
        status=disposisi.status,
        surat_masuk_id=disposisi.surat_masuk_id,
        surat_masuk=SuratMasukBrief.from_surat(surat),
        created_by_id=disposisi.created_by,
        created_by=CreatorInfo.from_user(creator),
        created_at=disposisi.created_at,
        updated_at=disposisi.updated_at,
    )


def check_tujuan(tujuan: str) -> None:
    try:
        validate_tujuan(tujuan)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


class DisposisiService:
    """no_urut disposisi selalu mengikuti no_urut surat masuk induknya."""

    def __init__(self, disposisi_repo: DisposisiRepository, surat_masuk_repo: SuratMasukRepository):
        self.disposisi_repo = disposisi_repo
        self.surat_masuk_repo = surat_masuk_repo

    async def _get_surat_masuk(self, surat_masuk_id: str) -> SuratMasuk:
        surat = await self.surat_masuk_repo.get_by_id(surat_masuk_id)
        if not surat:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Surat masuk tidak ditemukan"
            )
        return surat

    @staticmethod
    def _check_no_urut(no_urut: Optional[int], surat: SuratMasuk) -> None:
        if no_urut is not None and no_urut != surat.no_urut:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"No urut disposisi harus sama dengan no urut surat masuk ({surat.no_urut})"
            )

    async def _detail(self, disposisi_id: str) -> DisposisiResponse:
        row = await self.disposisi_repo.get_detail(disposisi_id)
        if not row:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Disposisi tidak ditemukan"
            )
        return to_disposisi_response(*row)

    async def create_disposisi(self, data: DisposisiCreate, current_user: Dict) -> DisposisiResponse:
        surat = await self._get_surat_masuk(data.surat_masuk_id)
        self._check_no_urut(data.no_urut, surat)
        check_tujuan(data.tujuan_disposisi)

        payload = data.model_dump(exclude={"no_urut"})
        payload["no_urut"] = surat.no_urut
        payload["nomor_disposisi"] = generate_nomor_disposisi(surat.no_urut, data.tanggal_disposisi)

        disposisi = await self.disposisi_repo.create(payload, created_by=current_user["id"])
        logger.info(f"Disposisi {disposisi.nomor_disposisi} created for surat masuk {surat.id}")
        return await self._detail(disposisi.id)

    async def get_disposisi(self, disposisi_id: str) -> DisposisiResponse:
        return await self._detail(disposisi_id)

    async def get_all(self, filters: DisposisiFilterParams) -> ListResponse[DisposisiResponse]:
        rows, total = await self.disposisi_repo.get_all_filtered(filters)
        return ListResponse[DisposisiResponse].create(
            items=[to_disposisi_response(*row) for row in rows],
            total=total,
            page=filters.page,
            limit=filters.limit,
        )

    async def update_disposisi(self, disposisi_id: str, data: DisposisiUpdate, current_user: Dict) -> DisposisiResponse:
        disposisi = await self.disposisi_repo.get_by_id(disposisi_id)
        if not disposisi:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Disposisi tidak ditemukan"
            )

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        surat = await self._get_surat_masuk(update_data.get("surat_masuk_id", disposisi.surat_masuk_id))
        self._check_no_urut(update_data.get("no_urut"), surat)

        if "tujuan_disposisi" in update_data:
            update_data["tujuan_disposisi"] = update_data["tujuan_disposisi"].strip()
            check_tujuan(update_data["tujuan_disposisi"])

        tanggal = update_data.get("tanggal_disposisi", disposisi.tanggal_disposisi)
        update_data["no_urut"] = surat.no_urut
        update_data["nomor_disposisi"] = generate_nomor_disposisi(surat.no_urut, tanggal)

        await self.disposisi_repo.update(disposisi_id, update_data, updated_by=current_user["id"])
        return await self._detail(disposisi_id)

    async def delete_disposisi(self, disposisi_id: str) -> MessageResponse:
        deleted = await self.disposisi_repo.delete(disposisi_id)
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Disposisi tidak ditemukan"
            )
        return MessageResponse(message="Disposisi berhasil dihapus")
