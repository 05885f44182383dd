"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ValidationError


class InvalidCredentialsError(AuthenticationError):
    """Raised on login failure. Unknown email and wrong password look the same."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class InvalidRefreshTokenError(AuthenticationError):
    """Raised for every kind of refresh failure."""

    def __init__(self) -> None:
        super().__init__("Invalid refresh token", code="INVALID_REFRESH_TOKEN")


class InvalidTokenError(AuthenticationError):
    """Raised when an access token is invalid or malformed."""

    def __init__(self, message: str = "Invalid access token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when an access token has expired."""

    def __init__(self, message: str = "Access token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Access token is required"):
        super().__init__(message, code="MISSING_TOKEN")


class EmailAlreadyVerifiedError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Email is already verified", code="EMAIL_ALREADY_VERIFIED")


class InvalidVerificationTokenError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Invalid or expired verification token",
            code="INVALID_VERIFICATION_TOKEN",
        )


class InvalidResetTokenError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired reset token", code="INVALID_RESET_TOKEN")
