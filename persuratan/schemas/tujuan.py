"""Schemas untuk katalog tujuan disposisi."""

from typing import List

from persuratan.schemas.common import CamelModel


class UnitTujuan(CamelModel):
    name: str
    sub_units: List[str] = []


class TujuanCatalogResponse(CamelModel):
    separator: str
    units: List[UnitTujuan]
