"""
Signed session tokens (access and refresh JWTs).

Tokens are HS256 JWTs carrying ``sub``, ``email``, ``type``, ``iat``,
``exp`` and a random ``jti``. Verification is stateless and never raises
for bad input; it returns a ``TokenVerification`` that callers match on.

Expiry is checked against the injected clock rather than by PyJWT so
that the issuing and verifying side share one notion of "now".
"""

import uuid
from datetime import timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.clock import Clock, utc_now
from shared.config import Settings

from .models import TokenClaims, TokenKind, TokenStatus, TokenVerification

_REQUIRED_CLAIMS = ["sub", "email", "type", "iat", "exp"]


class SessionTokenCodec:
    """Issues and verifies access/refresh tokens."""

    def __init__(
        self,
        secret: str,
        access_ttl_seconds: int,
        refresh_ttl_seconds: int,
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ):
        if not secret:
            raise ValueError("Token signing secret must be configured")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock
        self._ttl = {
            TokenKind.ACCESS: access_ttl_seconds,
            TokenKind.REFRESH: refresh_ttl_seconds,
        }

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock = utc_now) -> "SessionTokenCodec":
        return cls(
            secret=settings.jwt_secret,
            access_ttl_seconds=settings.access_token_ttl_seconds,
            refresh_ttl_seconds=settings.refresh_token_ttl_seconds,
            algorithm=settings.jwt_algorithm,
            clock=clock,
        )

    def ttl(self, kind: TokenKind) -> int:
        """Lifetime in seconds for tokens of the given kind."""
        return self._ttl[kind]

    def issue(self, subject: str, email: str, kind: TokenKind) -> str:
        """Create a signed token for a user."""
        now = self._clock()
        payload = {
            "sub": subject,
            "email": email,
            "type": kind.value,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self._ttl[kind])).timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, kind: TokenKind) -> TokenVerification:
        """
        Check a token's signature, shape, kind and expiry.

        Returns:
            TokenVerification with status VALID and the decoded claims,
            or one of MALFORMED / SIGNATURE_INVALID / EXPIRED.
        """
        if not token:
            return TokenVerification(TokenStatus.MALFORMED)

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError):
            return TokenVerification(TokenStatus.SIGNATURE_INVALID)
        except jwt.InvalidTokenError:
            return TokenVerification(TokenStatus.MALFORMED)

        try:
            claims = TokenClaims(**payload)
        except PydanticValidationError:
            return TokenVerification(TokenStatus.MALFORMED)

        if claims.type != kind:
            return TokenVerification(TokenStatus.MALFORMED)

        if claims.exp <= int(self._clock().timestamp()):
            return TokenVerification(TokenStatus.EXPIRED)

        return TokenVerification(TokenStatus.VALID, claims)
