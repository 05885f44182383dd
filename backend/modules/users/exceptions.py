"""
Users module exceptions.
"""

from shared.exceptions import AuthenticationError, ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user record does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class EmailAlreadyExistsError(ConflictError):
    """Raised when an email is already registered."""

    def __init__(self) -> None:
        super().__init__(
            "User with this email already exists",
            code="EMAIL_ALREADY_EXISTS",
        )


class IncorrectPasswordError(AuthenticationError):
    """Raised when a password re-confirmation does not match."""

    def __init__(self, message: str = "Password is incorrect"):
        super().__init__(message, code="INCORRECT_PASSWORD")


class EmailInUseError(ConflictError):
    """Raised when an update would move a user onto another user's email."""

    def __init__(self) -> None:
        super().__init__("Email already in use", code="EMAIL_IN_USE")
