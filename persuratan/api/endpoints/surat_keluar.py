"""Surat keluar endpoints (ADMIN only)."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.auth.csrf import csrf_protect
from persuratan.auth.permissions import admin_required
from persuratan.core.database import get_db
from persuratan.repositories.surat_keluar import SuratKeluarRepository
from persuratan.repositories.surat_masuk import SuratMasukRepository
from persuratan.schemas.common import ListResponse, MessageResponse
from persuratan.schemas.filters import SuratKeluarFilterParams, get_surat_keluar_filters
from persuratan.schemas.surat_keluar import SuratKeluarCreate, SuratKeluarResponse, SuratKeluarUpdate
from persuratan.services.surat_keluar import SuratKeluarService

router = APIRouter()


async def get_surat_keluar_service(session: AsyncSession = Depends(get_db)) -> SuratKeluarService:
    return SuratKeluarService(SuratKeluarRepository(session), SuratMasukRepository(session))


@router.get("", response_model=ListResponse[SuratKeluarResponse], summary="Get all surat keluar")
async def get_all_surat_keluar(
    filters: SuratKeluarFilterParams = Depends(get_surat_keluar_filters),
    current_user: dict = Depends(admin_required),
    service: SuratKeluarService = Depends(get_surat_keluar_service)
):
    """Search di perihal, kirim kepada dan klas; filter tanggal / bulan."""
    return await service.get_all(filters)


@router.post(
    "",
    response_model=SuratKeluarResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(csrf_protect)],
)
async def create_surat_keluar(
    data: SuratKeluarCreate,
    current_user: dict = Depends(admin_required),
    service: SuratKeluarService = Depends(get_surat_keluar_service)
):
    return await service.create_surat(data, current_user)


@router.get("/{surat_id}", response_model=SuratKeluarResponse)
async def get_surat_keluar(
    surat_id: str,
    current_user: dict = Depends(admin_required),
    service: SuratKeluarService = Depends(get_surat_keluar_service)
):
    return await service.get_surat(surat_id)


@router.put("/{surat_id}", response_model=SuratKeluarResponse, dependencies=[Depends(csrf_protect)])
async def update_surat_keluar(
    surat_id: str,
    data: SuratKeluarUpdate,
    current_user: dict = Depends(admin_required),
    service: SuratKeluarService = Depends(get_surat_keluar_service)
):
    return await service.update_surat(surat_id, data, current_user)


@router.delete("/{surat_id}", response_model=MessageResponse, dependencies=[Depends(csrf_protect)])
async def delete_surat_keluar(
    surat_id: str,
    current_user: dict = Depends(admin_required),
    service: SuratKeluarService = Depends(get_surat_keluar_service)
):
    return await service.delete_surat(surat_id)
