"""Service untuk surat tamu (khusus MEMBER)."""

from typing import Dict, Optional

from fastapi import HTTPException, status

from persuratan.models.surat_tamu import SuratTamu
from persuratan.models.user import User
from persuratan.repositories.surat_tamu import SuratTamuRepository
from persuratan.schemas.common import CreatorInfo, ListResponse, MessageResponse
from persuratan.schemas.filters import SuratTamuFilterParams
from persuratan.schemas.surat_tamu import SuratTamuCreate, SuratTamuResponse, SuratTamuUpdate

NOT_FOUND = "Surat tamu tidak ditemukan"


class SuratTamuService:
    def __init__(self, surat_repo: SuratTamuRepository):
        self.surat_repo = surat_repo

    def _to_response(self, surat: SuratTamu, creator: Optional[User]) -> SuratTamuResponse:
        return SuratTamuResponse(
            id=surat.id,
            no_urut=surat.no_urut,
            nama=surat.nama,
            keperluan=surat.keperluan,
            asal_surat=surat.asal_surat,
            tujuan_surat=surat.tujuan_surat,
            nomor_telpon=surat.nomor_telpon,
            tanggal=surat.tanggal,
            created_by_id=surat.created_by,
            created_by=CreatorInfo.from_user(creator),
            created_at=surat.created_at,
            updated_at=surat.updated_at,
        )

    async def _ensure_no_urut_free(self, no_urut: int, exclude_id: Optional[str] = None) -> None:
        if await self.surat_repo.no_urut_exists(no_urut, exclude_id=exclude_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"No urut {no_urut} sudah digunakan"
            )

    async def _detail(self, surat_id: str) -> SuratTamuResponse:
        row = await self.surat_repo.get_with_creator(surat_id)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return self._to_response(*row)

    async def create_surat(self, data: SuratTamuCreate, current_user: Dict) -> SuratTamuResponse:
        await self._ensure_no_urut_free(data.no_urut)
        surat = await self.surat_repo.create(data.model_dump(), created_by=current_user["id"])
        return await self._detail(surat.id)

    async def get_surat(self, surat_id: str) -> SuratTamuResponse:
        return await self._detail(surat_id)

    async def get_all(self, filters: SuratTamuFilterParams) -> ListResponse[SuratTamuResponse]:
        rows, total = await self.surat_repo.get_all_filtered(filters)
        return ListResponse[SuratTamuResponse].create(
            items=[self._to_response(surat, creator) for surat, creator in rows],
            total=total,
            page=filters.page,
            limit=filters.limit,
        )

    async def update_surat(self, surat_id: str, data: SuratTamuUpdate, current_user: Dict) -> SuratTamuResponse:
        surat = await self.surat_repo.get_by_id(surat_id)
        if not surat:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

        update_data = data.model_dump(exclude_unset=True, exclude={"nomor_telpon"}, exclude_none=True)
        if "nomor_telpon" in data.model_fields_set:
            update_data["nomor_telpon"] = data.nomor_telpon

        if "no_urut" in update_data and update_data["no_urut"] != surat.no_urut:
            await self._ensure_no_urut_free(update_data["no_urut"], exclude_id=surat_id)

        await self.surat_repo.update(surat_id, update_data, updated_by=current_user["id"])
        return await self._detail(surat_id)

    async def delete_surat(self, surat_id: str) -> MessageResponse:
        if not await self.surat_repo.delete(surat_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return MessageResponse(message="Surat tamu berhasil dihapus")
