"""Filter schemas dan query dependencies untuk list endpoints."""

from datetime import date
from enum import Enum
from typing import Optional
from fastapi import Query
from pydantic import BaseModel, Field, field_validator

from persuratan.models.enums import AuditAction, AuditEntity, StatusDisposisi, UserRole

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


def _clean_search(search: Optional[str]) -> Optional[str]:
    if search is not None:
        search = search.strip()
        if not search:
            return None
        if len(search) > 100:
            raise ValueError("Kata kunci pencarian terlalu panjang (maks 100 karakter)")
    return search


class SuratMasukSearchField(str, Enum):
    """Kolom yang bisa dipakai untuk pencarian surat masuk."""
    NO_URUT = "noUrut"
    NOMOR_SURAT = "nomorSurat"
    ASAL_SURAT = "asalSurat"
    PERIHAL = "perihal"


class PaginationParams(BaseModel):
    page: int = Field(1, ge=1, description="Page number")
    limit: int = Field(10, ge=1, le=100, description="Page size (max 100)")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class SearchParams(PaginationParams):
    search: Optional[str] = Field(None, description="Kata kunci pencarian")

    @field_validator('search')
    @classmethod
    def validate_search(cls, search: Optional[str]) -> Optional[str]:
        """Validate and clean search term."""
        return _clean_search(search)


class DateFilterParams(SearchParams):
    """Filter tanggal (satu hari) atau bulan (YYYY-MM). Bulan mengalahkan tanggal."""
    tanggal: Optional[date] = None
    bulan: Optional[str] = Field(None, pattern=MONTH_PATTERN)

    @property
    def month_range(self) -> Optional[tuple]:
        """(awal bulan, awal bulan berikutnya) kalau filter bulan aktif."""
        if not self.bulan:
            return None
        year, month = (int(part) for part in self.bulan.split("-"))
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        return start, end


class SuratMasukFilterParams(DateFilterParams):
    search_field: SuratMasukSearchField = SuratMasukSearchField.NO_URUT


class SuratKeluarFilterParams(DateFilterParams):
    pass


class SuratTamuFilterParams(DateFilterParams):
    pass


class DisposisiFilterParams(SearchParams):
    status: Optional[StatusDisposisi] = None
    surat_masuk_id: Optional[str] = None


class UserFilterParams(SearchParams):
    role: Optional[UserRole] = None


class AuditLogFilterParams(SearchParams):
    limit: int = Field(50, ge=1, le=100)
    action: Optional[AuditAction] = None
    entity: Optional[AuditEntity] = None
    user_id: Optional[str] = None
    days: int = Field(30, ge=1, le=365)


# ===== QUERY DEPENDENCIES =====
# Query param memakai camelCase seperti di response JSON

def get_surat_masuk_filters(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    search_field: SuratMasukSearchField = Query(SuratMasukSearchField.NO_URUT, alias="searchField"),
    tanggal: Optional[date] = Query(None),
    bulan: Optional[str] = Query(None, pattern=MONTH_PATTERN),
) -> SuratMasukFilterParams:
    return SuratMasukFilterParams(
        page=page, limit=limit, search=search, search_field=search_field,
        tanggal=tanggal, bulan=bulan,
    )


def get_surat_keluar_filters(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    tanggal: Optional[date] = Query(None),
    bulan: Optional[str] = Query(None, pattern=MONTH_PATTERN),
) -> SuratKeluarFilterParams:
    return SuratKeluarFilterParams(page=page, limit=limit, search=search, tanggal=tanggal, bulan=bulan)


def get_surat_tamu_filters(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    tanggal: Optional[date] = Query(None),
    bulan: Optional[str] = Query(None, pattern=MONTH_PATTERN),
) -> SuratTamuFilterParams:
    return SuratTamuFilterParams(page=page, limit=limit, search=search, tanggal=tanggal, bulan=bulan)


def get_disposisi_filters(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    status: Optional[StatusDisposisi] = Query(None),
    surat_masuk_id: Optional[str] = Query(None, alias="suratMasukId"),
) -> DisposisiFilterParams:
    return DisposisiFilterParams(
        page=page, limit=limit, search=search, status=status, surat_masuk_id=surat_masuk_id,
    )


def get_user_filters(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    role: Optional[UserRole] = Query(None),
) -> UserFilterParams:
    return UserFilterParams(page=page, limit=limit, search=search, role=role)


def get_audit_log_filters(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    action: Optional[AuditAction] = Query(None),
    entity: Optional[AuditEntity] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    days: int = Query(30, ge=1, le=365),
) -> AuditLogFilterParams:
    return AuditLogFilterParams(
        page=page, limit=limit, search=search, action=action,
        entity=entity, user_id=user_id, days=days,
    )
