"""Enums untuk database models - MATCH DATABASE UPPERCASE."""

from enum import Enum


class UserRole(str, Enum):
    """User role enum yang match dengan database UPPERCASE values."""
    ADMIN = "ADMIN"     # petugas arsip (sekretariat)
    MEMBER = "MEMBER"   # pengguna surat tamu

    @classmethod
    def get_all_values(cls):
        """Get all role values as list."""
        return [role.value for role in cls]

    @classmethod
    def is_valid_role(cls, role: str) -> bool:
        """Check if role is valid."""
        return role in cls.get_all_values()


class StatusDisposisi(str, Enum):
    """Status disposisi. Saat ini hanya satu nilai yang dipakai."""
    SELESAI = "SELESAI"


class PengolahSurat(str, Enum):
    """Pejabat pengolah surat keluar."""
    KETUA_DPRD = "KETUA_DPRD"
    WAKIL_KETUA_1 = "WAKIL_KETUA_1"
    WAKIL_KETUA_2 = "WAKIL_KETUA_2"
    WAKIL_KETUA_3 = "WAKIL_KETUA_3"
    SEKWAN = "SEKWAN"

    @property
    def label(self) -> str:
        return {
            PengolahSurat.KETUA_DPRD: "Ketua DPRD",
            PengolahSurat.WAKIL_KETUA_1: "Wakil Ketua 1",
            PengolahSurat.WAKIL_KETUA_2: "Wakil Ketua 2",
            PengolahSurat.WAKIL_KETUA_3: "Wakil Ketua 3",
            PengolahSurat.SEKWAN: "Sekwan",
        }[self]


class AuditAction(str, Enum):
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    FAILED_LOGIN = "FAILED_LOGIN"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    EXPORT = "EXPORT"
    VIEW = "VIEW"

    @classmethod
    def from_method(cls, method: str) -> "AuditAction":
        """Map HTTP method ke action."""
        return {
            "POST": cls.CREATE,
            "PUT": cls.UPDATE,
            "PATCH": cls.UPDATE,
            "DELETE": cls.DELETE,
        }.get(method.upper(), cls.VIEW)


class AuditEntity(str, Enum):
    USER = "User"
    SURAT_MASUK = "SuratMasuk"
    SURAT_KELUAR = "SuratKeluar"
    DISPOSISI = "Disposisi"
    SURAT_TAMU = "SuratTamu"
    SYSTEM = "System"
