"""Schemas untuk surat masuk."""

from typing import List, Optional
from pydantic import Field, field_validator
from datetime import date, datetime

from persuratan.schemas.common import CamelModel, CountInfo, CreatorInfo
from persuratan.schemas.disposisi import DisposisiResponse


def _strip_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# ===== REQUEST SCHEMAS =====

class SuratMasukCreate(CamelModel):
    """Schema untuk membuat surat masuk."""
    no_urut: int = Field(..., ge=1, description="Nomor urut agenda (unik)")
    nomor_surat: Optional[str] = Field(None, max_length=255)
    tanggal_surat: date
    tanggal_diteruskan: date
    asal_surat: str = Field(..., min_length=1, max_length=500)
    perihal: str = Field(..., min_length=1)
    keterangan: Optional[str] = None
    file_path: Optional[str] = Field(None, max_length=500)

    @field_validator('nomor_surat', 'keterangan', 'file_path')
    @classmethod
    def strip_optional(cls, value: Optional[str]) -> Optional[str]:
        return _strip_optional(value)

    @field_validator('asal_surat', 'perihal')
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field wajib diisi")
        return value


class SuratMasukUpdate(CamelModel):
    """Schema untuk update surat masuk."""
    no_urut: Optional[int] = Field(None, ge=1)
    nomor_surat: Optional[str] = Field(None, max_length=255)
    tanggal_surat: Optional[date] = None
    tanggal_diteruskan: Optional[date] = None
    asal_surat: Optional[str] = Field(None, min_length=1, max_length=500)
    perihal: Optional[str] = Field(None, min_length=1)
    keterangan: Optional[str] = None
    file_path: Optional[str] = Field(None, max_length=500)

    @field_validator('nomor_surat', 'keterangan', 'file_path')
    @classmethod
    def strip_optional(cls, value: Optional[str]) -> Optional[str]:
        return _strip_optional(value)


class CopyDisposisiRequest(CamelModel):
    """Body untuk menyalin surat masuk menjadi disposisi.

    Field wajib dicek di service supaya pesan error sesuai.
    """
    tujuan_disposisi: Optional[str] = None
    tanggal_disposisi: Optional[date] = None
    keterangan: Optional[str] = None

    @field_validator('tujuan_disposisi', 'keterangan')
    @classmethod
    def strip_optional(cls, value: Optional[str]) -> Optional[str]:
        return _strip_optional(value)


# ===== RESPONSE SCHEMAS =====

class SuratMasukResponse(CamelModel):
    id: str
    no_urut: int
    nomor_surat: Optional[str] = None
    tanggal_surat: date
    tanggal_diteruskan: date
    asal_surat: str
    perihal: str
    keterangan: Optional[str] = None
    file_path: Optional[str] = None
    created_by_id: Optional[str] = None
    created_by: Optional[CreatorInfo] = None
    count: CountInfo = Field(default_factory=CountInfo, alias="_count")
    created_at: datetime
    updated_at: Optional[datetime] = None


class SuratMasukDetailResponse(SuratMasukResponse):
    disposisi: List[DisposisiResponse] = []


class CopyDisposisiResponse(CamelModel):
    message: str
    disposisi: DisposisiResponse
