"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    QuillpostError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    ExternalServiceError,
)


class TestQuillpostError:
    def test_message(self):
        """QuillpostError should store message."""
        error = QuillpostError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code(self):
        """QuillpostError should default code to class name."""
        assert QuillpostError("Test error").code == "QuillpostError"

    def test_custom_code_and_details(self):
        error = QuillpostError("Test error", code="CUSTOM_ERROR", details={"key": "value"})
        assert error.code == "CUSTOM_ERROR"
        assert error.details == {"key": "value"}

    def test_defaults_are_empty(self):
        error = QuillpostError("Test error")
        assert error.details == {}
        assert error.errors == []

    def test_field_errors(self):
        error = ValidationError("Validation failed", errors=[{"field": "email", "message": "Invalid"}])
        assert error.errors == [{"field": "email", "message": "Invalid"}]

    def test_is_exception(self):
        with pytest.raises(QuillpostError):
            raise QuillpostError("boom")


class TestStatusCodes:
    @pytest.mark.parametrize(
        "cls, status",
        [
            (QuillpostError, 500),
            (ValidationError, 400),
            (AuthenticationError, 401),
            (AuthorizationError, 403),
            (NotFoundError, 404),
            (ConflictError, 409),
            (RateLimitError, 429),
        ],
    )
    def test_status_code(self, cls, status):
        assert cls("x").status_code == status

    def test_subclasses_are_quillpost_errors(self):
        for cls in (ValidationError, AuthenticationError, NotFoundError, ConflictError, RateLimitError):
            assert issubclass(cls, QuillpostError)


class TestExternalServiceError:
    def test_records_service(self):
        error = ExternalServiceError("Provider down", service="email")
        assert error.status_code == 502
        assert error.service == "email"
        assert error.details["service"] == "email"
