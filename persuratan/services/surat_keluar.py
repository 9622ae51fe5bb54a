"""Service untuk surat keluar."""

import logging
from typing import Dict, Optional

from fastapi import HTTPException, status

from persuratan.models.surat_keluar import SuratKeluar
from persuratan.models.surat_masuk import SuratMasuk
from persuratan.models.user import User
from persuratan.repositories.surat_keluar import SuratKeluarRepository
from persuratan.repositories.surat_masuk import SuratMasukRepository
from persuratan.schemas.common import CreatorInfo, ListResponse, MessageResponse, SuratMasukBrief
from persuratan.schemas.filters import SuratKeluarFilterParams
from persuratan.schemas.surat_keluar import SuratKeluarCreate, SuratKeluarResponse, SuratKeluarUpdate

logger = logging.getLogger(__name__)

NOT_FOUND = "Surat keluar tidak ditemukan"


def to_surat_keluar_response(
    surat: SuratKeluar,
    surat_masuk: Optional[SuratMasuk] = None,
    creator: Optional[User] = None,
) -> SuratKeluarResponse:
    return SuratKeluarResponse(
        id=surat.id,
        no_urut=surat.no_urut,
        klas=surat.klas,
        pengolah=surat.pengolah,
        pengolah_label=surat.pengolah.label,
        tanggal_surat=surat.tanggal_surat,
        perihal_surat=surat.perihal_surat,
        kirim_kepada=surat.kirim_kepada,
        file_path=surat.file_path,
        surat_masuk_id=surat.surat_masuk_id,
        surat_masuk=SuratMasukBrief.from_surat(surat_masuk),
        created_by_id=surat.created_by,
        created_by=CreatorInfo.from_user(creator),
        created_at=surat.created_at,
        updated_at=surat.updated_at,
    )


class SuratKeluarService:
    def __init__(self, surat_repo: SuratKeluarRepository, surat_masuk_repo: SuratMasukRepository):
        self.surat_repo = surat_repo
        self.surat_masuk_repo = surat_masuk_repo

    async def _ensure_no_urut_free(self, no_urut: int, exclude_id: Optional[str] = None) -> None:
        if await self.surat_repo.no_urut_exists(no_urut, exclude_id=exclude_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Nomor urut sudah digunakan"
            )

    async def _ensure_surat_masuk(self, surat_masuk_id: Optional[str]) -> None:
        if surat_masuk_id and not await self.surat_masuk_repo.get_by_id(surat_masuk_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Surat masuk tidak ditemukan"
            )

    async def _detail(self, surat_id: str) -> SuratKeluarResponse:
        row = await self.surat_repo.get_detail(surat_id)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return to_surat_keluar_response(*row)

    async def create_surat(self, data: SuratKeluarCreate, current_user: Dict) -> SuratKeluarResponse:
        await self._ensure_no_urut_free(data.no_urut)
        await self._ensure_surat_masuk(data.surat_masuk_id)

        surat = await self.surat_repo.create(data.model_dump(), created_by=current_user["id"])
        logger.info(f"Surat keluar no urut {surat.no_urut} created by {current_user['id']}")
        return await self._detail(surat.id)

    async def get_surat(self, surat_id: str) -> SuratKeluarResponse:
        return await self._detail(surat_id)

    async def get_all(self, filters: SuratKeluarFilterParams) -> ListResponse[SuratKeluarResponse]:
        rows, total = await self.surat_repo.get_all_filtered(filters)
        return ListResponse[SuratKeluarResponse].create(
            items=[to_surat_keluar_response(*row) for row in rows],
            total=total,
            page=filters.page,
            limit=filters.limit,
        )

    async def update_surat(self, surat_id: str, data: SuratKeluarUpdate, current_user: Dict) -> SuratKeluarResponse:
        surat = await self.surat_repo.get_by_id(surat_id)
        if not surat:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

        update_data = data.model_dump(exclude_unset=True)
        for field in ("no_urut", "klas", "pengolah", "tanggal_surat", "perihal_surat", "kirim_kepada"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        # string kosong berarti lepas relasi surat masuk
        if "surat_masuk_id" in update_data:
            update_data["surat_masuk_id"] = (update_data["surat_masuk_id"] or "").strip() or None
            await self._ensure_surat_masuk(update_data["surat_masuk_id"])

        if "no_urut" in update_data and update_data["no_urut"] != surat.no_urut:
            await self._ensure_no_urut_free(update_data["no_urut"], exclude_id=surat_id)

        await self.surat_repo.update(surat_id, update_data, updated_by=current_user["id"])
        return await self._detail(surat_id)

    async def delete_surat(self, surat_id: str) -> MessageResponse:
        if not await self.surat_repo.delete(surat_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return MessageResponse(message="Surat keluar berhasil dihapus")
