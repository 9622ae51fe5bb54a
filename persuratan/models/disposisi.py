"""Model untuk disposisi surat masuk."""

from typing import Optional
from datetime import date
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Enum as SQLEnum, ForeignKey, String
import uuid as uuid_lib

from .base import BaseModel
from .enums import StatusDisposisi


class Disposisi(BaseModel, SQLModel, table=True):
    """Disposisi: instruksi penerusan surat masuk ke bagian / sub bagian."""

    __tablename__ = "disposisi"

    id: str = Field(
        default_factory=lambda: str(uuid_lib.uuid4()),
        primary_key=True,
        max_length=36
    )

    no_urut: int = Field(index=True, description="Selalu sama dengan no_urut surat masuk")
    nomor_disposisi: str = Field(max_length=100, index=True)
    tanggal_disposisi: date = Field(index=True)
    tujuan_disposisi: str = Field(max_length=500, description="'Unit' atau 'Unit - Sub Unit'")
    isi_disposisi: str
    keterangan: Optional[str] = Field(default=None)

    status: StatusDisposisi = Field(
        default=StatusDisposisi.SELESAI,
        sa_column=Column(SQLEnum(StatusDisposisi), nullable=False, index=True),
    )

    surat_masuk_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("surat_masuk.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    def __repr__(self) -> str:
        return f"<Disposisi(nomor={self.nomor_disposisi}, tujuan={self.tujuan_disposisi})>"
