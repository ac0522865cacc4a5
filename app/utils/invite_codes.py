"""
Invite code generation.

Codes are uppercase alphanumeric tokens drawn from the OS CSPRNG.
"""

import secrets
import string

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invite_code(length: int = 8) -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


def normalize_invite_code(code: str) -> str:
    """Codes are matched case-insensitively; users often type them lowercase."""
    return code.strip().upper()
