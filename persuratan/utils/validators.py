"""Validation utilities: password policy untuk akun pengguna."""

import re
from typing import Any, Dict, List

SPECIAL_CHARACTERS = r'[!@#$%^&*()_+\-=\[\]{};\':"\\|,.<>/?]'

# Password lemah yang ditolak
COMMON_PASSWORDS = {
    "password", "password123", "12345678", "qwerty123",
    "admin123", "letmein", "welcome123", "passw0rd",
}

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


def validate_password_strength(password: str) -> Dict[str, Any]:
    """
    Validate password sesuai kebijakan password instansi.

    Requirements:
    - 8 sampai 128 karakter
    - Minimal satu huruf besar, satu huruf kecil, satu angka, satu karakter spesial
    - Bukan password umum
    - Tidak ada karakter yang berulang 3 kali berturut-turut

    Returns:
        Dict with 'valid' (bool), 'errors' (list) and 'strength_score' keys
    """
    errors: List[str] = []

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password minimal {PASSWORD_MIN_LENGTH} karakter")

    if len(password) > PASSWORD_MAX_LENGTH:
        errors.append(f"Password maksimal {PASSWORD_MAX_LENGTH} karakter")

    if not re.search(r'[A-Z]', password):
        errors.append("Password harus mengandung minimal 1 huruf besar (A-Z)")

    if not re.search(r'[a-z]', password):
        errors.append("Password harus mengandung minimal 1 huruf kecil (a-z)")

    if not re.search(r'\d', password):
        errors.append("Password harus mengandung minimal 1 angka (0-9)")

    if not re.search(SPECIAL_CHARACTERS, password):
        errors.append("Password harus mengandung minimal 1 karakter spesial (!@#$%^&* dll)")

    if password.lower() in COMMON_PASSWORDS:
        errors.append("Password terlalu umum dan mudah ditebak")

    if re.search(r'(.)\1{2,}', password):
        errors.append("Password tidak boleh mengandung karakter berulang lebih dari 2 kali")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "strength_score": calculate_strength_score(password),
    }


def calculate_strength_score(password: str) -> int:
    """Calculate password strength score (0-100)."""
    score = 0

    if len(password) >= 8:
        score += 20
    if len(password) >= 12:
        score += 10
    if len(password) >= 16:
        score += 10

    if re.search(r'[a-z]', password):
        score += 15
    if re.search(r'[A-Z]', password):
        score += 15
    if re.search(r'\d', password):
        score += 15
    if re.search(SPECIAL_CHARACTERS, password):
        score += 15

    return min(score, 100)


def get_strength_label(score: int) -> str:
    if score >= 100:
        return "Sangat Kuat"
    if score >= 80:
        return "Kuat"
    if score >= 60:
        return "Sedang"
    if score >= 40:
        return "Lemah"
    return "Sangat Lemah"
