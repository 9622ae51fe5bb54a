"""Models initialization."""

from .base import BaseModel, TimestampMixin, AuditMixin
from .enums import UserRole, StatusDisposisi, PengolahSurat, AuditAction, AuditEntity
from .user import User
from .surat_masuk import SuratMasuk
from .disposisi import Disposisi
from .surat_keluar import SuratKeluar
from .surat_tamu import SuratTamu
from .audit_log import AuditLog

__all__ = [
    # Base classes
    "BaseModel",
    "TimestampMixin",
    "AuditMixin",

    # Enums
    "UserRole",
    "StatusDisposisi",
    "PengolahSurat",
    "AuditAction",
    "AuditEntity",

    # Tables
    "User",
    "SuratMasuk",
    "Disposisi",
    "SuratKeluar",
    "SuratTamu",
    "AuditLog",
]

# Urutan create table (foreign key):
# users -> surat_masuk -> disposisi, surat_keluar
# surat_tamu dan audit_logs tidak punya FK
