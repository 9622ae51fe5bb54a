"""Model untuk surat keluar."""

from typing import Optional
from datetime import date
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Enum as SQLEnum, ForeignKey, String
import uuid as uuid_lib

from .base import BaseModel
from .enums import PengolahSurat


class SuratKeluar(BaseModel, SQLModel, table=True):

    __tablename__ = "surat_keluar"

    id: str = Field(
        default_factory=lambda: str(uuid_lib.uuid4()),
        primary_key=True,
        max_length=36
    )

    no_urut: int = Field(unique=True, index=True)
    klas: str = Field(max_length=100)
    pengolah: PengolahSurat = Field(
        sa_column=Column(SQLEnum(PengolahSurat), nullable=False, index=True)
    )
    tanggal_surat: date = Field(index=True)
    perihal_surat: str
    kirim_kepada: str = Field(max_length=500)
    file_path: Optional[str] = Field(default=None, max_length=500)

    # Surat masuk yang dibalas (opsional)
    surat_masuk_id: Optional[str] = Field(
        default=None,
        sa_column=Column(
            String(36),
            ForeignKey("surat_masuk.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )
    )

    def __repr__(self) -> str:
        return f"<SuratKeluar(no_urut={self.no_urut}, pengolah={self.pengolah.value})>"
