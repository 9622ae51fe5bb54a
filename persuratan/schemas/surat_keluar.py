"""Schemas untuk surat keluar."""

from typing import Optional
from pydantic import Field, field_validator
from datetime import date, datetime

from persuratan.models.enums import PengolahSurat
from persuratan.schemas.common import CamelModel, CreatorInfo, SuratMasukBrief


class SuratKeluarCreate(CamelModel):
    no_urut: int = Field(..., ge=1)
    klas: str = Field(..., min_length=1, max_length=100)
    pengolah: PengolahSurat
    tanggal_surat: date
    perihal_surat: str = Field(..., min_length=1)
    kirim_kepada: str = Field(..., min_length=1, max_length=500)
    surat_masuk_id: Optional[str] = None
    file_path: Optional[str] = Field(None, max_length=500)

    @field_validator('klas', 'perihal_surat', 'kirim_kepada')
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field wajib diisi")
        return value

    @field_validator('surat_masuk_id', 'file_path')
    @classmethod
    def empty_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class SuratKeluarUpdate(CamelModel):
    no_urut: Optional[int] = Field(None, ge=1)
    klas: Optional[str] = Field(None, min_length=1, max_length=100)
    pengolah: Optional[PengolahSurat] = None
    tanggal_surat: Optional[date] = None
    perihal_surat: Optional[str] = Field(None, min_length=1)
    kirim_kepada: Optional[str] = Field(None, min_length=1, max_length=500)
    surat_masuk_id: Optional[str] = None
    file_path: Optional[str] = Field(None, max_length=500)


class SuratKeluarResponse(CamelModel):
    id: str
    no_urut: int
    klas: str
    pengolah: PengolahSurat
    pengolah_label: str
    tanggal_surat: date
    perihal_surat: str
    kirim_kepada: str
    file_path: Optional[str] = None
    surat_masuk_id: Optional[str] = None
    surat_masuk: Optional[SuratMasukBrief] = None
    created_by_id: Optional[str] = None
    created_by: Optional[CreatorInfo] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
