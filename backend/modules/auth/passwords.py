"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting and a
configurable work factor.
"""

import bcrypt

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """bcrypt wrapper. Plaintext passwords are never stored or logged."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh random salt.

        Raises:
            ValueError: If the password is empty.
        """
        if not password:
            raise ValueError("Password must not be empty")
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds)
        ).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash. False on malformed hashes."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False
