"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import Settings

from ..dependencies import get_app_settings, get_container

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    user_store: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> JSONResponse:
    """
    Readiness check endpoint.

    Runs a cheap lookup against the user store. Returns 503 if it fails.
    """
    try:
        await get_container().user_store.find_by_id("00000000-0000-0000-0000-000000000000")
    except Exception:
        logger.exception("Readiness check failed")
        body = ReadinessResponse(status="not_ready", user_store="unavailable")
        return JSONResponse(status_code=503, content=body.model_dump())

    body = ReadinessResponse(status="ready", user_store="connected")
    return JSONResponse(content=body.model_dump())
