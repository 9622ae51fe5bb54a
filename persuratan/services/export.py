"""Export surat masuk dan disposisi ke file Excel (xlsx).

Baris dikelompokkan per no urut: setiap kali no urut berganti, disisipkan
tiga baris kosong sebagai pemisah.
"""

import io
import logging
from datetime import date, datetime
from typing import Any, List, Optional, Sequence, Tuple

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from persuratan.repositories.disposisi import DisposisiRepository
from persuratan.repositories.surat_masuk import SuratMasukRepository

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
GROUP_SEPARATOR_ROWS = 3
EMPTY = "-"

HARI = ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"]

SURAT_MASUK_COLUMNS: List[Tuple[str, int]] = [
    ("No Urut", 10),
    ("Nomor Surat", 20),
    ("Tanggal Surat", 15),
    ("Tanggal Diteruskan", 18),
    ("Asal Surat", 30),
    ("Perihal", 50),
    ("Keterangan", 30),
    ("Jumlah Disposisi", 15),
    ("Dibuat Oleh", 20),
    ("Tanggal Dibuat", 18),
]

DISPOSISI_COLUMNS: List[Tuple[str, int]] = [
    ("Nomor", 8),
    ("Nomor Surat", 20),
    ("Hari/Tanggal", 18),
    ("Hal", 50),
    ("Asal Surat", 20),
    ("Disposisi Surat", 15),
    ("Tanggal Disposisi", 18),
]


def format_tanggal(value: Optional[date]) -> str:
    """dd/mm/yyyy"""
    return value.strftime("%d/%m/%Y") if value else EMPTY


def format_hari_tanggal(value: Optional[date]) -> str:
    """Contoh: ``Senin, 06/01/2025``."""
    if not value:
        return EMPTY
    return f"{HARI[value.weekday()]}, {value.strftime('%d/%m/%Y')}"


def format_waktu(value: Optional[datetime]) -> str:
    return value.strftime("%d/%m/%Y %H:%M") if value else EMPTY


def group_rows(rows: Sequence[Tuple[int, List[Any]]], width: int) -> List[List[Any]]:
    """Sisipkan baris kosong di antara kelompok no urut yang berbeda."""
    result: List[List[Any]] = []
    previous: Optional[int] = None
    for no_urut, values in rows:
        if previous is not None and no_urut != previous:
            result.extend([[None] * width for _ in range(GROUP_SEPARATOR_ROWS)])
        result.append(values)
        previous = no_urut
    return result


def build_workbook(sheet_name: str, columns: List[Tuple[str, int]], rows: List[List[Any]]) -> bytes:
    headers = [name for name, _ in columns]
    df = pd.DataFrame(rows, columns=headers, dtype=object)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)

        worksheet = writer.sheets[sheet_name]
        for index, (_, width) in enumerate(columns, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = width
            worksheet.cell(row=1, column=index).font = Font(bold=True)

    return output.getvalue()


class ExportService:
    def __init__(self, surat_repo: SuratMasukRepository, disposisi_repo: DisposisiRepository):
        self.surat_repo = surat_repo
        self.disposisi_repo = disposisi_repo

    async def export_surat_masuk(self, today: Optional[date] = None) -> Tuple[str, bytes, int]:
        """Return (filename, isi file, jumlah surat)."""
        today = today or date.today()
        records = await self.surat_repo.get_all_for_export()
        counts = await self.surat_repo.get_related_counts([surat.id for surat, _ in records])

        rows = []
        for surat, creator in records:
            dibuat_oleh = (creator.name or creator.email) if creator else EMPTY
            rows.append((surat.no_urut, [
                surat.no_urut,
                surat.nomor_surat or EMPTY,
                format_tanggal(surat.tanggal_surat),
                format_tanggal(surat.tanggal_diteruskan),
                surat.asal_surat,
                surat.perihal,
                surat.keterangan or EMPTY,
                counts.get(surat.id, (0, 0))[0],
                dibuat_oleh,
                format_waktu(surat.created_at),
            ]))

        content = build_workbook(
            "Surat Masuk",
            SURAT_MASUK_COLUMNS,
            group_rows(rows, len(SURAT_MASUK_COLUMNS)),
        )
        logger.info(f"Exported {len(records)} surat masuk")
        return f"Surat-Masuk-{today.isoformat()}.xlsx", content, len(records)

    async def export_disposisi(self, today: Optional[date] = None) -> Tuple[str, bytes, int]:
        today = today or date.today()
        records = await self.disposisi_repo.get_all_for_export()

        rows = []
        for disposisi, surat, _ in records:
            rows.append((disposisi.no_urut, [
                disposisi.no_urut,
                (surat.nomor_surat if surat else None) or EMPTY,
                format_hari_tanggal(surat.tanggal_surat if surat else None),
                surat.perihal if surat else EMPTY,
                surat.asal_surat if surat else EMPTY,
                disposisi.tujuan_disposisi,
                format_hari_tanggal(disposisi.tanggal_disposisi),
            ]))

        content = build_workbook(
            "Disposisi",
            DISPOSISI_COLUMNS,
            group_rows(rows, len(DISPOSISI_COLUMNS)),
        )
        logger.info(f"Exported {len(records)} disposisi")
        return f"Disposisi_DPRD_Kalsel_{today.strftime('%d-%m-%Y')}.xlsx", content, len(records)
