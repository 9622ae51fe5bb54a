"""Service untuk surat masuk, termasuk salin ke disposisi."""

import logging
from typing import Dict, Optional

from fastapi import HTTPException, status

from persuratan.models.enums import StatusDisposisi
from persuratan.models.surat_masuk import SuratMasuk
from persuratan.models.user import User
from persuratan.repositories.disposisi import DisposisiRepository
from persuratan.repositories.surat_masuk import SuratMasukRepository
from persuratan.schemas.common import CountInfo, CreatorInfo, ListResponse, MessageResponse
from persuratan.schemas.filters import SuratMasukFilterParams
from persuratan.schemas.surat_masuk import (
    CopyDisposisiRequest, CopyDisposisiResponse, SuratMasukCreate,
    SuratMasukDetailResponse, SuratMasukResponse, SuratMasukUpdate,
)
from persuratan.services.disposisi import check_tujuan, generate_nomor_disposisi, to_disposisi_response

logger = logging.getLogger(__name__)


def build_isi_disposisi(surat: SuratMasuk) -> str:
    return (
        f'Disposisi untuk surat {surat.label} dengan perihal "{surat.perihal}" '
        f"dari {surat.asal_surat}. Mohon untuk ditindaklanjuti sesuai dengan ketentuan yang berlaku."
    )


def build_keterangan_default(surat: SuratMasuk, tujuan: str) -> str:
    sumber = surat.nomor_surat or f"no urut {surat.no_urut}"
    return f"Auto-generated dari surat masuk {sumber} ke {tujuan}"


class SuratMasukService:
    """Service untuk operasi surat masuk."""

    def __init__(self, surat_repo: SuratMasukRepository, disposisi_repo: DisposisiRepository):
        self.surat_repo = surat_repo
        self.disposisi_repo = disposisi_repo

    def _to_response(
        self,
        surat: SuratMasuk,
        creator: Optional[User],
        counts: tuple = (0, 0),
    ) -> SuratMasukResponse:
        return SuratMasukResponse(
            id=surat.id,
            no_urut=surat.no_urut,
            nomor_surat=surat.nomor_surat,
            tanggal_surat=surat.tanggal_surat,
            tanggal_diteruskan=surat.tanggal_diteruskan,
            asal_surat=surat.asal_surat,
            perihal=surat.perihal,
            keterangan=surat.keterangan,
            file_path=surat.file_path,
            created_by_id=surat.created_by,
            created_by=CreatorInfo.from_user(creator),
            count=CountInfo(disposisi=counts[0], surat_keluar=counts[1]),
            created_at=surat.created_at,
            updated_at=surat.updated_at,
        )

    async def _ensure_no_urut_free(self, no_urut: int, exclude_id: Optional[str] = None) -> None:
        if await self.surat_repo.no_urut_exists(no_urut, exclude_id=exclude_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"No urut {no_urut} sudah digunakan"
            )

    async def _get_or_404(self, surat_id: str, detail: str = "Surat tidak ditemukan") -> SuratMasuk:
        surat = await self.surat_repo.get_by_id(surat_id)
        if not surat:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
        return surat

    async def create_surat(self, data: SuratMasukCreate, current_user: Dict) -> SuratMasukResponse:
        await self._ensure_no_urut_free(data.no_urut)

        surat = await self.surat_repo.create(data.model_dump(), created_by=current_user["id"])
        logger.info(f"Surat masuk no urut {surat.no_urut} created by {current_user['id']}")

        surat, creator = await self.surat_repo.get_with_creator(surat.id)
        return self._to_response(surat, creator)

    async def get_all(self, filters: SuratMasukFilterParams) -> ListResponse[SuratMasukResponse]:
        rows, total = await self.surat_repo.get_all_filtered(filters)
        counts = await self.surat_repo.get_related_counts([surat.id for surat, _ in rows])
        return ListResponse[SuratMasukResponse].create(
            items=[
                self._to_response(surat, creator, counts.get(surat.id, (0, 0)))
                for surat, creator in rows
            ],
            total=total,
            page=filters.page,
            limit=filters.limit,
        )

    async def get_surat(self, surat_id: str) -> SuratMasukDetailResponse:
        row = await self.surat_repo.get_with_creator(surat_id)
        if not row:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Surat tidak ditemukan"
            )
        surat, creator = row
        counts = await self.surat_repo.get_related_counts([surat.id])
        disposisi_rows = await self.disposisi_repo.get_by_surat_masuk(surat.id)

        response = self._to_response(surat, creator, counts.get(surat.id, (0, 0)))
        return SuratMasukDetailResponse(
            **response.model_dump(),
            disposisi=[to_disposisi_response(*row) for row in disposisi_rows],
        )

    async def update_surat(self, surat_id: str, data: SuratMasukUpdate, current_user: Dict) -> SuratMasukResponse:
        surat = await self._get_or_404(surat_id)
        update_data = data.model_dump(exclude_unset=True)

        # Field wajib tidak boleh dikosongkan lewat update
        for field in ("no_urut", "tanggal_surat", "tanggal_diteruskan", "asal_surat", "perihal"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        no_urut_changed = "no_urut" in update_data and update_data["no_urut"] != surat.no_urut
        if no_urut_changed:
            await self._ensure_no_urut_free(update_data["no_urut"], exclude_id=surat_id)

        await self.surat_repo.update(surat_id, update_data, updated_by=current_user["id"])

        if no_urut_changed:
            synced = await self.surat_repo.sync_disposisi_no_urut(
                surat_id, update_data["no_urut"], generate_nomor_disposisi
            )
            logger.info(f"Synced no urut {update_data['no_urut']} to {synced} disposisi")

        surat, creator = await self.surat_repo.get_with_creator(surat_id)
        counts = await self.surat_repo.get_related_counts([surat_id])
        return self._to_response(surat, creator, counts.get(surat_id, (0, 0)))

    async def delete_surat(self, surat_id: str) -> MessageResponse:
        deleted = await self.surat_repo.delete(surat_id)
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Surat tidak ditemukan"
            )
        return MessageResponse(message="Surat berhasil dihapus")

    async def copy_to_disposisi(
        self, surat_id: str, data: CopyDisposisiRequest, current_user: Dict
    ) -> CopyDisposisiResponse:
        """Buat disposisi dari surat masuk dengan no urut yang sama."""
        if not data.tujuan_disposisi:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Tujuan disposisi wajib diisi"
            )
        if not data.tanggal_disposisi:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Tanggal disposisi wajib diisi"
            )

        surat = await self._get_or_404(surat_id, detail="Surat masuk tidak ditemukan")
        check_tujuan(data.tujuan_disposisi)

        disposisi = await self.disposisi_repo.create(
            {
                "no_urut": surat.no_urut,
                "nomor_disposisi": generate_nomor_disposisi(surat.no_urut, data.tanggal_disposisi),
                "tanggal_disposisi": data.tanggal_disposisi,
                "tujuan_disposisi": data.tujuan_disposisi,
                "isi_disposisi": build_isi_disposisi(surat),
                "keterangan": data.keterangan or build_keterangan_default(surat, data.tujuan_disposisi),
                "status": StatusDisposisi.SELESAI,
                "surat_masuk_id": surat.id,
            },
            created_by=current_user["id"],
        )
        logger.info(f"Surat masuk {surat.id} copied to disposisi {disposisi.id}")

        row = await self.disposisi_repo.get_detail(disposisi.id)
        return CopyDisposisiResponse(
            message="Disposisi berhasil dibuat dari surat masuk",
            disposisi=to_disposisi_response(*row),
        )
