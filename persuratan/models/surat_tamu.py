"""Model untuk surat tamu (diisi oleh MEMBER)."""

from typing import Optional
from datetime import date
from sqlmodel import Field, SQLModel
import uuid as uuid_lib

from .base import BaseModel


class SuratTamu(BaseModel, SQLModel, table=True):

    __tablename__ = "surat_tamu"

    id: str = Field(
        default_factory=lambda: str(uuid_lib.uuid4()),
        primary_key=True,
        max_length=36
    )

    no_urut: int = Field(unique=True, index=True)
    nama: str = Field(max_length=200)
    keperluan: str
    asal_surat: str = Field(max_length=500)
    tujuan_surat: str = Field(max_length=500)
    nomor_telpon: Optional[str] = Field(default=None, max_length=30)
    tanggal: date = Field(index=True)
