"""
Validation helpers shared by request models.

Functions raise ``ValueError`` so they can be called from pydantic
``field_validator`` hooks; pydantic turns that into a field error.
"""

import re

PASSWORD_MIN_LENGTH = 8
# bcrypt ignores everything after the 72nd byte
PASSWORD_MAX_BYTES = 72

_PASSWORD_RULES = [
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[^a-zA-Z0-9]"), "Password must contain at least one special character"),
]


def validate_password_strength(value: str) -> str:
    """Check a new password against the password policy and return it unchanged."""
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        )
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(value):
            raise ValueError(message)
    return value
