"""Workflow modal "salin surat masuk ke disposisi".

CLOSED -> SELECTING_UNIT -> (unit punya sub unit) SELECTING_SUB_UNIT -> READY,
``cancel()`` kembali ke CLOSED dari state mana pun.
"""

import inspect
import logging
from datetime import date
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Union

import httpx

from persuratan.client.exceptions import ApiError, WorkflowValidationError
from persuratan.utils.tujuan import encode_tujuan, get_sub_units, has_sub_units, is_known_unit

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Surat berhasil disalin ke disposisi!"
FAILURE_MESSAGE = "Gagal menyalin surat ke disposisi"


class WorkflowState(str, Enum):
    CLOSED = "closed"
    SELECTING_UNIT = "selecting_unit"
    SELECTING_SUB_UNIT = "selecting_sub_unit"
    READY = "ready"


class CopyDisposisiWorkflow:
    def __init__(self, client, on_success: Optional[Callable[[], Any]] = None):
        self.client = client
        self.on_success = on_success
        self.state = WorkflowState.CLOSED
        self.surat: Optional[Mapping[str, Any]] = None
        self.unit: Optional[str] = None
        self.sub_unit: Optional[str] = None
        self.tanggal: Optional[date] = None
        self.keterangan: Optional[str] = None
        self.submitting = False

    @property
    def is_open(self) -> bool:
        return self.state != WorkflowState.CLOSED

    @property
    def sub_unit_options(self) -> List[str]:
        return get_sub_units(self.unit) if self.unit else []

    @property
    def tujuan(self) -> Optional[str]:
        if not self.unit:
            return None
        return encode_tujuan(self.unit, self.sub_unit)

    def _require_open(self) -> None:
        if not self.is_open:
            raise WorkflowValidationError("Pilih surat yang akan disalin terlebih dahulu")

    def open(self, surat: Mapping[str, Any]) -> None:
        if not surat.get("id"):
            raise WorkflowValidationError("Surat tidak valid")
        self.surat = surat
        self.unit = None
        self.sub_unit = None
        self.tanggal = None
        self.keterangan = None
        self.state = WorkflowState.SELECTING_UNIT

    def select_unit(self, unit: str) -> None:
        self._require_open()
        unit = (unit or "").strip()
        if not is_known_unit(unit):
            raise WorkflowValidationError(f"Tujuan disposisi tidak dikenal: {unit}")

        self.unit = unit
        self.sub_unit = None
        if has_sub_units(unit):
            self.state = WorkflowState.SELECTING_SUB_UNIT
        else:
            self.state = WorkflowState.READY

    def select_sub_unit(self, sub_unit: Optional[str]) -> None:
        """Sub unit opsional; None berarti disposisi ke unit induk."""
        self._require_open()
        if not self.unit:
            raise WorkflowValidationError("Silakan pilih tujuan disposisi")

        sub_unit = (sub_unit or "").strip() or None
        if sub_unit is not None and sub_unit not in self.sub_unit_options:
            raise WorkflowValidationError(f"Sub bagian '{sub_unit}' bukan bagian dari {self.unit}")

        self.sub_unit = sub_unit
        self.state = WorkflowState.READY

    def set_tanggal(self, tanggal: Union[date, str, None]) -> None:
        if isinstance(tanggal, str):
            tanggal = date.fromisoformat(tanggal) if tanggal.strip() else None
        self.tanggal = tanggal

    def set_keterangan(self, keterangan: Optional[str]) -> None:
        self.keterangan = (keterangan or "").strip() or None

    def cancel(self) -> None:
        self.state = WorkflowState.CLOSED
        self.surat = None
        self.unit = None
        self.sub_unit = None
        self.tanggal = None
        self.keterangan = None

    async def confirm(self) -> str:
        """Kirim ke server. Validasi gagal tidak mengirim request apa pun."""
        self._require_open()
        if not self.unit:
            raise WorkflowValidationError("Silakan pilih tujuan disposisi")
        if not self.tanggal:
            raise WorkflowValidationError("Silakan pilih tanggal disposisi")
        if self.submitting:
            raise WorkflowValidationError("Permintaan sedang diproses")

        self.submitting = True
        try:
            await self.client.copy_to_disposisi(
                self.surat["id"],
                tujuan_disposisi=self.tujuan,
                tanggal_disposisi=self.tanggal,
                keterangan=self.keterangan,
            )
        except ApiError as e:
            logger.warning(f"Copy disposisi failed: {e.status_code} {e.message}")
            message = e.message if e.from_server and e.message else FAILURE_MESSAGE
            raise ApiError(e.status_code, message, e.details) from e
        except httpx.HTTPError as e:
            logger.warning(f"Copy disposisi failed: {e!r}")
            raise ApiError(0, FAILURE_MESSAGE, from_server=False) from e
        finally:
            self.submitting = False

        self.cancel()
        if self.on_success is not None:
            result = self.on_success()
            if inspect.isawaitable(result):
                await result
        return SUCCESS_MESSAGE
