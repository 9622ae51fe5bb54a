"""Model untuk surat masuk."""

from typing import Optional
from datetime import date
from sqlmodel import Field, SQLModel
import uuid as uuid_lib

from .base import BaseModel


class SuratMasuk(BaseModel, SQLModel, table=True):
    """Surat masuk. no_urut unik dan menjadi acuan no_urut disposisi."""

    __tablename__ = "surat_masuk"

    id: str = Field(
        default_factory=lambda: str(uuid_lib.uuid4()),
        primary_key=True,
        max_length=36
    )

    no_urut: int = Field(unique=True, index=True, description="Nomor urut agenda")
    nomor_surat: Optional[str] = Field(default=None, max_length=255, index=True)
    tanggal_surat: date = Field(index=True)
    tanggal_diteruskan: date
    asal_surat: str = Field(max_length=500)
    perihal: str
    keterangan: Optional[str] = Field(default=None)
    file_path: Optional[str] = Field(default=None, max_length=500)

    @property
    def label(self) -> str:
        """Nomor surat kalau ada, selain itu no urut."""
        if self.nomor_surat:
            return f"nomor {self.nomor_surat}"
        return f"no urut {self.no_urut}"

    def __repr__(self) -> str:
        return f"<SuratMasuk(no_urut={self.no_urut}, nomor_surat={self.nomor_surat})>"
