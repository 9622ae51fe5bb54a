"""Exceptions untuk client API persuratan."""

from typing import Any, List, Optional


class ApiError(Exception):
    """Response non-2xx dari server, membawa pesan ``error`` dari body."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: Optional[List[Any]] = None,
        from_server: bool = True,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details or []
        # False kalau body tidak membawa error/message (mis. 502 dari proxy)
        self.from_server = from_server

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, message={self.message!r})"


class WorkflowValidationError(ValueError):
    """Input workflow belum lengkap, request tidak dikirim ke server."""
