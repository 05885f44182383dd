"""
Quillpost API package.

Provides the FastAPI application for the Quillpost REST API.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
