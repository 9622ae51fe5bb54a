"""State pagination yang diperbarui dari envelope response server."""

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass
class PaginationState:
    total: int = 0
    page: int = 1
    limit: int = 10
    total_pages: int = 0

    @classmethod
    def from_envelope(cls, envelope: Mapping[str, Any]) -> "PaginationState":
        state = cls()
        state.update(envelope)
        return state

    def update(self, envelope: Mapping[str, Any]) -> None:
        """Terima envelope penuh ``{"items", "pagination"}`` atau objek pagination saja."""
        data = envelope.get("pagination", envelope)
        self.total = int(data.get("total", 0))
        self.page = int(data.get("page", 1))
        self.limit = int(data.get("limit", self.limit))
        self.total_pages = int(data.get("totalPages", 0))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1
