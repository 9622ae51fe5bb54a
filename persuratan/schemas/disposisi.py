"""Schemas untuk disposisi."""

from typing import Optional
from pydantic import Field, field_validator
from datetime import date, datetime

from persuratan.models.enums import StatusDisposisi
from persuratan.schemas.common import CamelModel, CreatorInfo, SuratMasukBrief


class DisposisiCreate(CamelModel):
    """no_urut opsional; kalau diisi harus sama dengan no_urut surat masuk."""
    surat_masuk_id: str = Field(..., min_length=1)
    no_urut: Optional[int] = Field(None, ge=1)
    tanggal_disposisi: date
    tujuan_disposisi: str = Field(..., min_length=1, max_length=500)
    isi_disposisi: str = Field(..., min_length=1)
    keterangan: Optional[str] = None
    status: StatusDisposisi = StatusDisposisi.SELESAI

    @field_validator('tujuan_disposisi', 'isi_disposisi')
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field wajib diisi")
        return value


class DisposisiUpdate(CamelModel):
    surat_masuk_id: Optional[str] = None
    no_urut: Optional[int] = Field(None, ge=1)
    tanggal_disposisi: Optional[date] = None
    tujuan_disposisi: Optional[str] = Field(None, min_length=1, max_length=500)
    isi_disposisi: Optional[str] = Field(None, min_length=1)
    keterangan: Optional[str] = None
    status: Optional[StatusDisposisi] = None


class DisposisiResponse(CamelModel):
    id: str
    no_urut: int
    nomor_disposisi: str
    tanggal_disposisi: date
    tujuan_disposisi: str
    tujuan_unit: Optional[str] = None
    tujuan_sub_unit: Optional[str] = None
    isi_disposisi: str
    keterangan: Optional[str] = None
    status: StatusDisposisi
    surat_masuk_id: str
    surat_masuk: Optional[SuratMasukBrief] = None
    created_by_id: Optional[str] = None
    created_by: Optional[CreatorInfo] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
