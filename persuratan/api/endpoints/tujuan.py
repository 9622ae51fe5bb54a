"""Katalog tujuan disposisi untuk dropdown unit / sub unit."""

from fastapi import APIRouter, Depends

from persuratan.auth.permissions import get_current_user
from persuratan.schemas.tujuan import TujuanCatalogResponse, UnitTujuan
from persuratan.utils.tujuan import SEPARATOR, UNIT_TUJUAN

router = APIRouter()


@router.get("/tujuan-disposisi", response_model=TujuanCatalogResponse)
async def get_tujuan_disposisi(current_user: dict = Depends(get_current_user)):
    return TujuanCatalogResponse(
        separator=SEPARATOR,
        units=[UnitTujuan(name=unit, sub_units=subs) for unit, subs in UNIT_TUJUAN.items()],
    )
