"""Ringkasan statistik untuk dashboard arsip."""

from persuratan.repositories.disposisi import DisposisiRepository
from persuratan.repositories.surat_keluar import SuratKeluarRepository
from persuratan.repositories.surat_masuk import SuratMasukRepository
from persuratan.schemas.dashboard import DashboardResponse, DashboardStats, RecentSurat


class DashboardService:
    def __init__(
        self,
        surat_masuk_repo: SuratMasukRepository,
        surat_keluar_repo: SuratKeluarRepository,
        disposisi_repo: DisposisiRepository,
    ):
        self.surat_masuk_repo = surat_masuk_repo
        self.surat_keluar_repo = surat_keluar_repo
        self.disposisi_repo = disposisi_repo

    async def get_stats(self) -> DashboardResponse:
        total_surat = await self.surat_masuk_repo.count()
        total_disposisi = await self.disposisi_repo.count()

        stats = DashboardStats(
            total_surat=total_surat,
            total_surat_keluar=await self.surat_keluar_repo.count(),
            total_disposisi=total_disposisi,
            surat_bulan_ini=await self.surat_masuk_repo.count_in_month(),
            # Surat yang belum punya disposisi, dihitung kasar dari selisih total
            disposisi_pending=max(0, total_surat - total_disposisi),
        )
        recent = await self.surat_masuk_repo.get_recent(limit=5)
        return DashboardResponse(
            stats=stats,
            recent_surats=[RecentSurat.model_validate(surat) for surat in recent],
        )
