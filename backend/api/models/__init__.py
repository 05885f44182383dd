"""
API-level models shared by every router.
"""

from .errors import ErrorResponse, FieldError
from .responses import ApiResponse, success_response

__all__ = [
    "ErrorResponse",
    "FieldError",
    "ApiResponse",
    "success_response",
]
