"""Dashboard endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from persuratan.auth.permissions import admin_required
from persuratan.core.database import get_db
from persuratan.repositories.disposisi import DisposisiRepository
from persuratan.repositories.surat_keluar import SuratKeluarRepository
from persuratan.repositories.surat_masuk import SuratMasukRepository
from persuratan.schemas.dashboard import DashboardResponse
from persuratan.services.dashboard import DashboardService

router = APIRouter()


async def get_dashboard_service(session: AsyncSession = Depends(get_db)) -> DashboardService:
    return DashboardService(
        SuratMasukRepository(session),
        SuratKeluarRepository(session),
        DisposisiRepository(session),
    )


@router.get("/stats", response_model=DashboardResponse)
async def get_dashboard_stats(
    current_user: dict = Depends(admin_required),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Jumlah surat, disposisi, surat bulan ini dan 5 surat masuk terbaru."""
    return await service.get_stats()
