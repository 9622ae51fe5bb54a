"""Debounce input search: callback hanya dipanggil setelah input diam selama ``delay``."""

import asyncio
import inspect
from typing import Any, Callable, Optional

DEFAULT_DELAY = 0.3


class SearchDebouncer:
    def __init__(self, callback: Callable[[Any], Any], delay: float = DEFAULT_DELAY):
        self.callback = callback
        self.delay = delay
        self._task: Optional[asyncio.Task] = None
        self._value: Any = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, value: Any) -> None:
        """Jadwalkan ulang; nilai sebelumnya yang belum terkirim dibuang."""
        self.cancel()
        self._value = value
        self._task = asyncio.get_running_loop().create_task(self._fire_later(value))

    def cancel(self) -> None:
        if self.pending:
            self._task.cancel()
        self._task = None

    async def flush(self) -> None:
        """Kirim nilai yang tertunda sekarang juga."""
        if not self.pending:
            return
        self.cancel()
        await self._invoke(self._value)

    async def _fire_later(self, value: Any) -> None:
        await asyncio.sleep(self.delay)
        await self._invoke(value)

    async def _invoke(self, value: Any) -> None:
        result = self.callback(value)
        if inspect.isawaitable(result):
            await result
