"""Schemas untuk surat tamu."""

from typing import Optional
from pydantic import Field
from datetime import date, datetime

from persuratan.schemas.common import CamelModel, CreatorInfo


class SuratTamuCreate(CamelModel):
    no_urut: int = Field(..., ge=1)
    nama: str = Field(..., min_length=1, max_length=200)
    keperluan: str = Field(..., min_length=1)
    asal_surat: str = Field(..., min_length=1, max_length=500)
    tujuan_surat: str = Field(..., min_length=1, max_length=500)
    nomor_telpon: Optional[str] = Field(None, max_length=30)
    tanggal: date


class SuratTamuUpdate(CamelModel):
    no_urut: Optional[int] = Field(None, ge=1)
    nama: Optional[str] = Field(None, min_length=1, max_length=200)
    keperluan: Optional[str] = Field(None, min_length=1)
    asal_surat: Optional[str] = Field(None, min_length=1, max_length=500)
    tujuan_surat: Optional[str] = Field(None, min_length=1, max_length=500)
    nomor_telpon: Optional[str] = Field(None, max_length=30)
    tanggal: Optional[date] = None


class SuratTamuResponse(CamelModel):
    id: str
    no_urut: int
    nama: str
    keperluan: str
    asal_surat: str
    tujuan_surat: str
    nomor_telpon: Optional[str] = None
    tanggal: date
    created_by_id: Optional[str] = None
    created_by: Optional[CreatorInfo] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
