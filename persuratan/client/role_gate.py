"""Role gate: tentukan redirect berdasarkan status session dan role.

Session dikirim eksplisit sebagai ``AuthContext``, tidak ada state global.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from persuratan.models.enums import UserRole

ADMIN_LOGIN = "/arsip/login"
ADMIN_HOME = "/arsip/dashboard"
MEMBER_LOGIN = "/tamu/login"
MEMBER_HOME = "/tamu/dashboard"

ADMIN_PAGES: Tuple[str, ...] = (
    "/arsip/dashboard",
    "/arsip/surat-masuk",
    "/arsip/surat-keluar",
    "/arsip/disposisi",
    "/arsip/settings",
    "/arsip/admin",
)
MEMBER_PAGES: Tuple[str, ...] = (
    "/tamu/dashboard",
    "/surat-tamu",
)


class SessionStatus(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class AuthContext:
    status: SessionStatus
    user: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def loading(cls) -> "AuthContext":
        return cls(SessionStatus.LOADING)

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls(SessionStatus.UNAUTHENTICATED)

    @classmethod
    def for_user(cls, user: Dict[str, Any]) -> "AuthContext":
        return cls(SessionStatus.AUTHENTICATED, dict(user))

    @property
    def role(self) -> Optional[str]:
        return self.user.get("role")

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED


def _matches(path: str, prefixes: Tuple[str, ...]) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in prefixes)


class RoleGate:
    def __init__(self, auth: AuthContext):
        self.auth = auth

    def _guard(self, login_path: str, role: UserRole, home_other: str) -> Optional[str]:
        if not self.auth.is_authenticated:
            return login_path
        if self.auth.role != role.value:
            return home_other
        return None

    def check(self, path: str) -> Optional[str]:
        """Path redirect, atau None kalau halaman boleh dibuka."""
        if self.auth.status == SessionStatus.LOADING:
            return None

        if _matches(path, ADMIN_PAGES):
            return self._guard(ADMIN_LOGIN, UserRole.ADMIN, MEMBER_HOME)
        if _matches(path, MEMBER_PAGES):
            return self._guard(MEMBER_LOGIN, UserRole.MEMBER, ADMIN_HOME)
        return None

    def allows(self, path: str) -> bool:
        return self.check(path) is None
