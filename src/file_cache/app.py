"""
FastAPI application factory.
"""

from __future__ import annotations

from fastapi import FastAPI

from file_cache.config import get_settings
from file_cache.core.exceptions import register_exception_handlers
from file_cache.core.lifespan import lifespan
from file_cache.routers import files, health, info


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.service.name} Service",
        version=settings.service.version,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Operations"])
    app.include_router(info.router, tags=["Operations"])
    app.include_router(files.router, tags=["Files"])

    return app
