"""
Success response envelope.

Every enveloped endpoint answers ``{"success": true, "message": ..., "data": ...}``.
Collection endpoints add ``"pagination"``.
"""

from typing import Any, Generic, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.models import Pagination

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope used for documentation (``response_model``) of enveloped routes."""

    success: bool = True
    message: str = "Success"
    data: Optional[T] = None
    pagination: Optional[Pagination] = None


def _to_json(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(data, dict):
        return {key: _to_json(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_to_json(item) for item in data]
    return data


def success_response(
    data: Any = None,
    message: str = "Success",
    status_code: int = 200,
    pagination: Optional[Pagination] = None,
) -> JSONResponse:
    """
    Build an enveloped JSON response.

    Pydantic models are serialized in camelCase with unset optional
    fields left out.
    """
    content = {"success": True, "message": message, "data": _to_json(data)}
    if pagination is not None:
        content["pagination"] = _to_json(pagination)
    return JSONResponse(status_code=status_code, content=content)
