"""Disposisi endpoints (ADMIN only)."""

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
from persuratan.schemas.disposisi import DisposisiCreate, DisposisiResponse, DisposisiUpdate
from persuratan.schemas.filters import DisposisiFilterParams, get_disposisi_filters
from persuratan.services.audit_log import AuditLogService
from persuratan.services.disposisi import DisposisiService
from persuratan.services.export import XLSX_MEDIA_TYPE, ExportService

router = APIRouter()


async def get_disposisi_service(session: AsyncSession = Depends(get_db)) -> DisposisiService:
    return DisposisiService(DisposisiRepository(session), SuratMasukRepository(session))


async def get_export_service(session: AsyncSession = Depends(get_db)) -> ExportService:
    return ExportService(SuratMasukRepository(session), DisposisiRepository(session))


async def get_audit_service(session: AsyncSession = Depends(get_db)) -> AuditLogService:
    return AuditLogService(AuditLogRepository(session))


@router.get("", response_model=ListResponse[DisposisiResponse], summary="Get all disposisi")
async def get_all_disposisi(
    filters: DisposisiFilterParams = Depends(get_disposisi_filters),
    current_user: dict = Depends(admin_required),
    service: DisposisiService = Depends(get_disposisi_service)
):
    """
    **Query Parameters:**
    - **search**: tujuan, isi disposisi, nomor surat masuk
    - **status**, **suratMasukId**
    """
    return await service.get_all(filters)


@router.post(
    "",
    response_model=DisposisiResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(csrf_protect)],
    summary="Create disposisi"
)
async def create_disposisi(
    data: DisposisiCreate,
    current_user: dict = Depends(admin_required),
    service: DisposisiService = Depends(get_disposisi_service)
):
    """Nomor disposisi dibuat otomatis; no urut mengikuti surat masuk."""
    return await service.create_disposisi(data, current_user)


@router.get("/export", summary="Export disposisi ke Excel")
async def export_disposisi(
    request: Request,
    current_user: dict = Depends(admin_required),
    export_service: ExportService = Depends(get_export_service),
    audit_service: AuditLogService = Depends(get_audit_service)
):
    filename, content, total = await export_service.export_disposisi()
    await audit_service.log(
        AuditAction.EXPORT,
        AuditEntity.DISPOSISI,
        user=current_user,
        details=f"Export {total} disposisi ke {filename}",
        request=request,
        response_status=status.HTTP_200_OK,
    )
    return StreamingResponse(
        io.BytesIO(content),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/{disposisi_id}", response_model=DisposisiResponse, summary="Get disposisi by ID")
async def get_disposisi(
    disposisi_id: str,
    current_user: dict = Depends(admin_required),
    service: DisposisiService = Depends(get_disposisi_service)
):
    return await service.get_disposisi(disposisi_id)


@router.put(
    "/{disposisi_id}",
    response_model=DisposisiResponse,
    dependencies=[Depends(csrf_protect)],
    summary="Update disposisi"
)
async def update_disposisi(
    disposisi_id: str,
    data: DisposisiUpdate,
    current_user: dict = Depends(admin_required),
    service: DisposisiService = Depends(get_disposisi_service)
):
    return await service.update_disposisi(disposisi_id, data, current_user)


@router.delete(
    "/{disposisi_id}",
    response_model=MessageResponse,
    dependencies=[Depends(csrf_protect)],
    summary="Delete disposisi"
)
async def delete_disposisi(
    disposisi_id: str,
    current_user: dict = Depends(admin_required),
    service: DisposisiService = Depends(get_disposisi_service)
):
    return await service.delete_disposisi(disposisi_id)
