"""Surat masuk endpoints (ADMIN only)."""

import io

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.auth.csrf import csrf_protect
from persuratan.auth.permissions import admin_required
from persuratan.core.database import get_db
from persuratan.models.enums import AuditAction, AuditEntity
from persuratan.repositories.audit_log import AuditLogRepository
from persuratan.repositories.disposisi import DisposisiRepository
from persuratan.repositories.surat_masuk import SuratMasukRepository
from persuratan.schemas.common import ListResponse, MessageResponse
from persuratan.schemas.filters import SuratMasukFilterParams, get_surat_masuk_filters
from persuratan.schemas.surat_masuk import (
    CopyDisposisiRequest, CopyDisposisiResponse, SuratMasukCreate,
    SuratMasukDetailResponse, SuratMasukResponse, SuratMasukUpdate,
)
from persuratan.services.audit_log import AuditLogService
from persuratan.services.export import XLSX_MEDIA_TYPE, ExportService
from persuratan.services.surat_masuk import SuratMasukService

router = APIRouter()


async def get_surat_masuk_service(session: AsyncSession = Depends(get_db)) -> SuratMasukService:
    return SuratMasukService(SuratMasukRepository(session), DisposisiRepository(session))


async def get_export_service(session: AsyncSession = Depends(get_db)) -> ExportService:
    return ExportService(SuratMasukRepository(session), DisposisiRepository(session))


async def get_audit_service(session: AsyncSession = Depends(get_db)) -> AuditLogService:
    return AuditLogService(AuditLogRepository(session))


@router.get("", response_model=ListResponse[SuratMasukResponse], summary="Get all surat masuk")
async def get_all_surat_masuk(
    filters: SuratMasukFilterParams = Depends(get_surat_masuk_filters),
    current_user: dict = Depends(admin_required),
    service: SuratMasukService = Depends(get_surat_masuk_service)
):
    """
    **Query Parameters:**
    - **search** + **searchField**: noUrut (default, angka persis), nomorSurat, asalSurat, perihal
    - **tanggal**: YYYY-MM-DD
    - **bulan**: YYYY-MM, mengalahkan tanggal

    Urut no urut terbesar dulu.
    """
    return await service.get_all(filters)


@router.post(
    "",
    response_model=SuratMasukResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(csrf_protect)],
    summary="Create surat masuk"
)
async def create_surat_masuk(
    data: SuratMasukCreate,
    current_user: dict = Depends(admin_required),
    service: SuratMasukService = Depends(get_surat_masuk_service)
):
    return await service.create_surat(data, current_user)


@router.get("/export", summary="Export surat masuk ke Excel")
async def export_surat_masuk(
    request: Request,
    current_user: dict = Depends(admin_required),
    export_service: ExportService = Depends(get_export_service),
    audit_service: AuditLogService = Depends(get_audit_service)
):
    filename, content, total = await export_service.export_surat_masuk()
    await audit_service.log(
        AuditAction.EXPORT,
        AuditEntity.SURAT_MASUK,
        user=current_user,
        details=f"Export {total} surat masuk ke {filename}",
        request=request,
        response_status=status.HTTP_200_OK,
    )
    return StreamingResponse(
        io.BytesIO(content),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/{surat_id}", response_model=SuratMasukDetailResponse, summary="Get surat masuk by ID")
async def get_surat_masuk(
    surat_id: str,
    current_user: dict = Depends(admin_required),
    service: SuratMasukService = Depends(get_surat_masuk_service)
):
    """Detail surat beserta daftar disposisinya."""
    return await service.get_surat(surat_id)


@router.put(
    "/{surat_id}",
    response_model=SuratMasukResponse,
    dependencies=[Depends(csrf_protect)],
    summary="Update surat masuk"
)
async def update_surat_masuk(
    surat_id: str,
    data: SuratMasukUpdate,
    current_user: dict = Depends(admin_required),
    service: SuratMasukService = Depends(get_surat_masuk_service)
):
    """Mengubah no urut ikut mengubah no urut semua disposisinya."""
    return await service.update_surat(surat_id, data, current_user)


@router.delete(
    "/{surat_id}",
    response_model=MessageResponse,
    dependencies=[Depends(csrf_protect)],
    summary="Delete surat masuk"
)
async def delete_surat_masuk(
    surat_id: str,
    current_user: dict = Depends(admin_required),
    service: SuratMasukService = Depends(get_surat_masuk_service)
):
    return await service.delete_surat(surat_id)


@router.post(
    "/{surat_id}/copy-disposisi",
    response_model=CopyDisposisiResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(csrf_protect)],
    summary="Salin surat masuk menjadi disposisi"
)
async def copy_to_disposisi(
    surat_id: str,
    data: CopyDisposisiRequest,
    current_user: dict = Depends(admin_required),
    service: SuratMasukService = Depends(get_surat_masuk_service)
):
    """
    Buat disposisi baru dengan no urut yang sama dengan surat masuk.

    - **tujuanDisposisi**: "Unit" atau "Unit - Sub Unit" dari katalog tujuan
    - **tanggalDisposisi**: YYYY-MM-DD
    - **keterangan**: opsional, default dibuat otomatis
    """
    return await service.copy_to_disposisi(surat_id, data, current_user)
