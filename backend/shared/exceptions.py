"""
Base exception classes for the Quillpost backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps every base class to one HTTP status code, so a module
exception only has to pick the right parent.
"""

from typing import Optional, Any


class QuillpostError(Exception):
    """
    Base exception for all Quillpost errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        errors: Optional[list[dict[str, str]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.errors = errors or []


class ValidationError(QuillpostError):
    """Input was malformed or broke a business rule (bad request)."""

    status_code = 400


class AuthenticationError(QuillpostError):
    """Authentication failed (invalid, expired or missing credentials)."""

    status_code = 401


class AuthorizationError(QuillpostError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class NotFoundError(QuillpostError):
    """Resource not found."""

    status_code = 404


class ConflictError(QuillpostError):
    """A uniqueness constraint would be violated."""

    status_code = 409


class RateLimitError(QuillpostError):
    """Too many requests from the same client."""

    status_code = 429


class ExternalServiceError(QuillpostError):
    """Error communicating with an external service."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
