"""Common schema components: camelCase base, pesan dan pagination."""

from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar('T')


class CamelModel(BaseModel):
    """Base schema: JSON pakai camelCase, atribut Python tetap snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Response sederhana berisi pesan."""
    message: str


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


class PaginationInfo(CamelModel):
    """Envelope pagination standar untuk semua list."""

    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def create(cls, total: int, page: int, limit: int) -> "PaginationInfo":
        total_pages = (total + limit - 1) // limit if total > 0 else 0
        return cls(total=total, page=page, limit=limit, total_pages=total_pages)


class ListResponse(CamelModel, Generic[T]):
    """Base class untuk semua list responses."""

    items: List[T]
    pagination: PaginationInfo

    @classmethod
    def create(cls, items: List[T], total: int, page: int, limit: int):
        return cls(items=items, pagination=PaginationInfo.create(total, page, limit))


class CreatorInfo(CamelModel):
    """Info singkat user pembuat record."""
    id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user) -> Optional["CreatorInfo"]:
        if user is None:
            return None
        return cls(id=user.id, name=user.name, email=user.email)


class CountInfo(CamelModel):
    disposisi: int = 0
    surat_keluar: int = 0


class SuratMasukBrief(CamelModel):
    """Ringkasan surat masuk untuk di-embed di disposisi / surat keluar."""
    id: str
    no_urut: int
    nomor_surat: Optional[str] = None
    perihal: str
    asal_surat: str

    @classmethod
    def from_surat(cls, surat) -> Optional["SuratMasukBrief"]:
        if surat is None:
            return None
        return cls.model_validate(surat)


class CsrfTokenResponse(CamelModel):
    csrf_token: str
    message: str = Field(default="CSRF token generated successfully")
