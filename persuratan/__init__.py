"""Sistem persuratan Sekretariat DPRD: surat masuk, surat keluar, disposisi dan surat tamu."""

__version__ = "1.0.0"
