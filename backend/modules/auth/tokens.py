"""
One-time secure tokens for email verification and password reset links.

Token strategy:
    - 32 random bytes from ``secrets`` rendered as 64 hex characters
      (256 bits of entropy)
    - Only the SHA-256 digest is persisted; the raw token goes out in
      the email once and is never stored
    - The digest is unsalted so the stored value can be looked up directly
"""

import hashlib
import secrets

TOKEN_BYTES = 32


class SecureTokenGenerator:
    """Generates unguessable tokens and their storage digests."""

    def __init__(self, nbytes: int = TOKEN_BYTES):
        self._nbytes = nbytes

    def generate(self) -> str:
        return secrets.token_hex(self._nbytes)

    @staticmethod
    def hash(token: str) -> str:
        """Deterministic SHA-256 hex digest of a token."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
