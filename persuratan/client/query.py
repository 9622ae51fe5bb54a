"""Query builder untuk list endpoint (page, limit, search, filter tanggal / bulan)."""

import re
from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, Optional, Union

import httpx

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

DEFAULT_LIMIT = 10
DEFAULT_SEARCH_FIELD = "noUrut"


def _normalize_tanggal(value: Union[date, str, None]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    value = value.strip()
    if not value:
        return None
    # Validasi format YYYY-MM-DD
    return date.fromisoformat(value).isoformat()


def _normalize_bulan(value: Union[date, str, None]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, date):
        return value.strftime("%Y-%m")
    value = value.strip()
    if not value:
        return None
    if not MONTH_PATTERN.match(value):
        raise ValueError(f"Format bulan harus YYYY-MM: {value}")
    return value


@dataclass(frozen=True)
class ListQuery:
    """State filter sebuah halaman list. Immutable; pakai ``with_*`` untuk mengubah."""

    page: int = 1
    limit: int = DEFAULT_LIMIT
    search: str = ""
    search_field: str = DEFAULT_SEARCH_FIELD
    tanggal: Optional[str] = None
    bulan: Optional[str] = None

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page minimal 1")
        if self.limit < 1:
            raise ValueError("limit minimal 1")
        object.__setattr__(self, "search", (self.search or "").strip())
        object.__setattr__(self, "tanggal", _normalize_tanggal(self.tanggal))
        object.__setattr__(self, "bulan", _normalize_bulan(self.bulan))

    def to_params(self) -> Dict[str, str]:
        """Query params kanonik: hanya field yang terisi yang ikut."""
        params = {"page": str(self.page), "limit": str(self.limit)}
        if self.search:
            params["search"] = self.search
            params["searchField"] = self.search_field
        if self.tanggal:
            params["tanggal"] = self.tanggal
        if self.bulan:
            params["bulan"] = self.bulan
        return params

    def to_query_string(self) -> str:
        return str(httpx.QueryParams(self.to_params()))

    def with_search(self, search: str) -> "ListQuery":
        """Search baru selalu kembali ke halaman 1."""
        return replace(self, search=search, page=1)

    def with_search_field(self, search_field: str) -> "ListQuery":
        return replace(self, search_field=search_field, page=1)

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=page)

    def with_limit(self, limit: int) -> "ListQuery":
        return replace(self, limit=limit, page=1)

    def with_tanggal(self, tanggal: Union[date, str, None]) -> "ListQuery":
        return replace(self, tanggal=tanggal, page=1)

    def with_bulan(self, bulan: Union[date, str, None]) -> "ListQuery":
        return replace(self, bulan=bulan, page=1)
