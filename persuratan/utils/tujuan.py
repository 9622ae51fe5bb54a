"""Katalog tujuan disposisi dan format string "Unit - Sub Unit".

Dipakai bersama oleh server (validasi copy-disposisi) dan client (workflow
modal dan form edit), supaya format encode/decode hanya ada di satu tempat.
"""

from typing import Dict, List, Optional, Tuple

SEPARATOR = " - "

# Urutan mengikuti urutan tampil di dropdown
UNIT_TUJUAN: Dict[str, List[str]] = {
    "Ketua DPRD": [],
    "Wakil": ["Wakil I", "Wakil II", "Wakil III"],
    "Ketua Komisi": ["Ketua Komisi I", "Ketua Komisi II", "Ketua Komisi III", "Ketua Komisi IV"],
    "Anggota Dewan": [],
    "SEKWAN": [],
    "Bagian Persidangan dan Perundang-Undangan": [
        "Sub Bagian Kajian Perundang-Undangan",
        "Sub Bagian Persidangan dan Risalah",
        "Sub Bagian Humas, Protokol dan Publikasi",
    ],
    "Bagian Fasilitasi Penganggaran dan Pengawasan": [
        "Sub Bagian Fasilitasi dan Penganggaran",
        "Sub Bagian Fasilitasi Pengawasan",
        "Sub Bagian Kerjasama dan Aspirasi",
    ],
    "Bagian Umum dan Keuangan": [
        "Sub Bagian Perencanaan dan Keuangan",
        "Sub Bagian Tata Usaha dan Kepegawaian",
        "Sub Bagian Rumah Tangga & Aset",
    ],
    "Staff": [],
}


def get_units() -> List[str]:
    return list(UNIT_TUJUAN.keys())


def get_sub_units(unit: str) -> List[str]:
    """Sub unit dari unit; list kosong untuk unit tanpa sub unit atau unit tak dikenal."""
    return list(UNIT_TUJUAN.get(unit, []))


def is_known_unit(unit: str) -> bool:
    return unit in UNIT_TUJUAN


def has_sub_units(unit: str) -> bool:
    return bool(UNIT_TUJUAN.get(unit))


def encode_tujuan(unit: str, sub_unit: Optional[str] = None) -> str:
    """Gabungkan unit dan sub unit menjadi string tujuan disposisi.

    Unit di luar katalog yang mengandung SEPARATOR ditolak, karena tidak
    bisa di-decode kembali dengan benar.
    """
    unit = (unit or "").strip()
    sub_unit = (sub_unit or "").strip() or None

    if not unit:
        raise ValueError("Unit tujuan wajib diisi")
    if SEPARATOR in unit and not is_known_unit(unit):
        raise ValueError(f"Nama unit tidak boleh mengandung '{SEPARATOR.strip()}' : {unit}")

    if sub_unit is None:
        return unit
    return f"{unit}{SEPARATOR}{sub_unit}"


def decode_tujuan(value: str) -> Tuple[str, Optional[str]]:
    """Pecah string tujuan menjadi (unit, sub_unit).

    Unit katalog dicocokkan lebih dulu (prefix terpanjang), baru fallback ke
    split pada SEPARATOR pertama untuk data lama / free-form.
    """
    value = (value or "").strip()
    if not value:
        return "", None

    if is_known_unit(value):
        return value, None

    for unit in sorted(UNIT_TUJUAN, key=len, reverse=True):
        prefix = f"{unit}{SEPARATOR}"
        if value.startswith(prefix):
            return unit, value[len(prefix):] or None

    if SEPARATOR in value:
        unit, sub_unit = value.split(SEPARATOR, 1)
        return unit, sub_unit or None

    return value, None


def validate_tujuan(value: str) -> Tuple[str, Optional[str]]:
    """Decode lalu pastikan unit (dan sub unit bila ada) terdaftar di katalog."""
    unit, sub_unit = decode_tujuan(value)
    if not is_known_unit(unit):
        raise ValueError(f"Tujuan disposisi tidak dikenal: {unit}")
    if sub_unit is not None and sub_unit not in UNIT_TUJUAN[unit]:
        raise ValueError(f"Sub bagian '{sub_unit}' bukan bagian dari {unit}")
    return unit, sub_unit
