"""Client API persuratan: query list, workflow salin disposisi, role gate."""

from persuratan.client.controller import ListController
from persuratan.client.debounce import SearchDebouncer
from persuratan.client.exceptions import ApiError, WorkflowValidationError
from persuratan.client.http import PersuratanClient
from persuratan.client.pagination import PaginationState
from persuratan.client.query import ListQuery
from persuratan.client.role_gate import AuthContext, RoleGate, SessionStatus
from persuratan.client.workflow import CopyDisposisiWorkflow, WorkflowState

__all__ = [
    "ApiError",
    "AuthContext",
    "CopyDisposisiWorkflow",
    "ListController",
    "ListQuery",
    "PaginationState",
    "PersuratanClient",
    "RoleGate",
    "SearchDebouncer",
    "SessionStatus",
    "WorkflowState",
    "WorkflowValidationError",
]
