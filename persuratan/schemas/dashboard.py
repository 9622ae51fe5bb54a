"""Schemas untuk ringkasan dashboard."""

from typing import List, Optional
from datetime import date

from persuratan.schemas.common import CamelModel


class DashboardStats(CamelModel):
    total_surat: int
    total_surat_keluar: int
    total_disposisi: int
    surat_bulan_ini: int
    disposisi_pending: int


class RecentSurat(CamelModel):
    id: str
    no_urut: int
    nomor_surat: Optional[str] = None
    tanggal_surat: date
    asal_surat: str
    perihal: str


class DashboardResponse(CamelModel):
    stats: DashboardStats
    recent_surats: List[RecentSurat]
