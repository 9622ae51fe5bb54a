"""Token dan masking utilities."""

import secrets


def generate_csrf_token(nbytes: int = 32) -> str:
    """Random token hex (32 bytes -> 64 karakter)."""
    return secrets.token_hex(nbytes)


def tokens_match(expected: str, received: str) -> bool:
    """Constant-time comparison."""
    if not expected or not received:
        return False
    return secrets.compare_digest(expected, received)


def mask_email(email: str) -> str:
    """
    Mask email for logging purposes.

    Args:
        email: Email address to mask

    Returns:
        Masked email (e.g., "u***r@example.com")
    """
    if not email or '@' not in email:
        return "***@***.***"

    local, domain = email.split('@', 1)

    if len(local) <= 2:
        masked_local = local[0] + '*'
    else:
        masked_local = local[0] + '*' * (len(local) - 2) + local[-1]

    return f"{masked_local}@{domain}"
