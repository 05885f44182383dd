"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import Settings, get_settings
from modules.auth.routes import router as auth_router
from modules.posts.routes import router as posts_router
from modules.users.routes import router as users_router

from .dependencies import get_container
from .errors import register_exception_handlers
from .middleware.rate_limit import rate_limit
from .routes import health

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_container().settings
    configure_logging(settings)
    logger.info(
        "Starting %s on %s:%s (%s)",
        settings.app_name,
        settings.host,
        settings.port,
        settings.environment,
    )
    yield
    # Shutdown: let queued emails finish
    dispatcher = get_container().dispatcher
    if dispatcher.pending:
        logger.info("Waiting for %d background task(s)", dispatcher.pending)
    await dispatcher.drain()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Users, posts and authentication REST API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    api_limit = [Depends(rate_limit("api"))]
    app.include_router(health.router, tags=["health"])
    app.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"], dependencies=api_limit)
    app.include_router(users_router, prefix="/api/v1/users", tags=["users"], dependencies=api_limit)
    app.include_router(
        users_router, prefix="/api/v1/user", tags=["users"], dependencies=api_limit, include_in_schema=False
    )
    app.include_router(posts_router, prefix="/api/v1/posts", tags=["posts"], dependencies=api_limit)

    return app


# Application instance for uvicorn
app = create_app()
