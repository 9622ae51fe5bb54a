"""Controller halaman list: filter, debounce search, dan pembatalan request basi.

Setiap fetch diberi nomor generasi. Fetch baru membatalkan task generasi
sebelumnya, dan hasil dari generasi lama tidak pernah menimpa state.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from persuratan.client.debounce import DEFAULT_DELAY, SearchDebouncer
from persuratan.client.exceptions import ApiError
from persuratan.client.pagination import PaginationState
from persuratan.client.query import ListQuery

logger = logging.getLogger(__name__)

Fetcher = Callable[[ListQuery], Awaitable[Dict[str, Any]]]

SYSTEM_ERROR = "Terjadi kesalahan sistem"


class ListController:
    def __init__(
        self,
        fetcher: Fetcher,
        query: Optional[ListQuery] = None,
        resource: str = "surat",
        debounce_delay: float = DEFAULT_DELAY,
    ):
        self._fetcher = fetcher
        self.query = query or ListQuery()
        self.resource = resource
        self.items: List[Dict[str, Any]] = []
        self.pagination = PaginationState(limit=self.query.limit)
        self.error: Optional[str] = None
        self.loading = False
        self.generation = 0
        self._task: Optional[asyncio.Task] = None
        self._debouncer = SearchDebouncer(self._apply_search, delay=debounce_delay)

    # ===== FILTER SETTERS =====

    def set_search(self, term: str) -> None:
        """Input search mentah; diterapkan setelah debounce."""
        self._debouncer.submit(term)

    def set_page(self, page: int) -> asyncio.Task:
        self.query = self.query.with_page(page)
        return self.reload()

    def set_search_field(self, search_field: str) -> asyncio.Task:
        self.query = self.query.with_search_field(search_field)
        return self.reload()

    def set_tanggal(self, tanggal) -> asyncio.Task:
        self.query = self.query.with_tanggal(tanggal)
        return self.reload()

    def set_bulan(self, bulan) -> asyncio.Task:
        self.query = self.query.with_bulan(bulan)
        return self.reload()

    def _apply_search(self, term: str) -> None:
        term = (term or "").strip()
        if term == self.query.search:
            return
        self.query = self.query.with_search(term)
        self.reload()

    # ===== FETCH =====

    def reload(self) -> asyncio.Task:
        """Mulai fetch generasi baru dan batalkan yang masih berjalan."""
        self.generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self.loading = True
        self._task = asyncio.get_running_loop().create_task(self._load(self.generation, self.query))
        return self._task

    async def _load(self, generation: int, query: ListQuery) -> None:
        try:
            envelope = await self._fetcher(query)
        except ApiError as e:
            if generation == self.generation:
                logger.warning(f"Fetch {self.resource} failed: {e.status_code} {e.message}")
                self.error = f"Gagal mengambil data {self.resource}"
                self.loading = False
            return
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if generation == self.generation:
                logger.error(f"Fetch {self.resource} error: {e}")
                self.error = SYSTEM_ERROR
                self.loading = False
            return

        if generation != self.generation:
            return

        self.items = list(envelope.get("items", []))
        self.pagination.update(envelope)
        self.error = None
        self.loading = False

    async def wait(self) -> None:
        """Tunggu sampai fetch generasi terakhir selesai."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    async def flush_search(self) -> None:
        """Terapkan search yang masih tertunda debounce, lalu tunggu hasilnya."""
        await self._debouncer.flush()
        await self.wait()

    def close(self) -> None:
        self._debouncer.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()
