"""Surat tamu endpoints (MEMBER only)."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.auth.csrf import csrf_protect
from persuratan.auth.permissions import member_required
from persuratan.core.database import get_db
from persuratan.repositories.surat_tamu import SuratTamuRepository
from persuratan.schemas.common import ListResponse, MessageResponse
from persuratan.schemas.filters import SuratTamuFilterParams, get_surat_tamu_filters
from persuratan.schemas.surat_tamu import SuratTamuCreate, SuratTamuResponse, SuratTamuUpdate
from persuratan.services.surat_tamu import SuratTamuService

router = APIRouter()


async def get_surat_tamu_service(session: AsyncSession = Depends(get_db)) -> SuratTamuService:
    return SuratTamuService(SuratTamuRepository(session))


@router.get("", response_model=ListResponse[SuratTamuResponse])
async def get_all_surat_tamu(
    filters: SuratTamuFilterParams = Depends(get_surat_tamu_filters),
    current_user: dict = Depends(member_required),
    service: SuratTamuService = Depends(get_surat_tamu_service)
):
    return await service.get_all(filters)


@router.post(
    "",
    response_model=SuratTamuResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(csrf_protect)],
)
async def create_surat_tamu(
    data: SuratTamuCreate,
    current_user: dict = Depends(member_required),
    service: SuratTamuService = Depends(get_surat_tamu_service)
):
    return await service.create_surat(data, current_user)


@router.get("/{surat_id}", response_model=SuratTamuResponse)
async def get_surat_tamu(
    surat_id: str,
    current_user: dict = Depends(member_required),
    service: SuratTamuService = Depends(get_surat_tamu_service)
):
    return await service.get_surat(surat_id)


@router.put("/{surat_id}", response_model=SuratTamuResponse, dependencies=[Depends(csrf_protect)])
async def update_surat_tamu(
    surat_id: str,
    data: SuratTamuUpdate,
    current_user: dict = Depends(member_required),
    service: SuratTamuService = Depends(get_surat_tamu_service)
):
    return await service.update_surat(surat_id, data, current_user)


@router.delete("/{surat_id}", response_model=MessageResponse, dependencies=[Depends(csrf_protect)])
async def delete_surat_tamu(
    surat_id: str,
    current_user: dict = Depends(member_required),
    service: SuratTamuService = Depends(get_surat_tamu_service)
):
    return await service.delete_surat(surat_id)
