"""Application lifecycle management."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from file_cache.config import get_settings
from file_cache.core.state import init_app_state
from file_cache.logging import get_logger, setup_logging
from file_cache.services.content_store import ContentStore

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    # === STARTUP ===
    settings = get_settings()

    setup_logging(settings.logging.level, settings.service.name)
    logger = get_logger(__name__)

    state = init_app_state()

    # StoreInitError propagates and aborts startup
    store = ContentStore(settings.storage.to_store_options(), logger=get_logger("store"))
    state.content_store = store

    logger.info(
        "Service starting",
        extra={
            "service": settings.service.name,
            "version": settings.service.version,
            "host": settings.server.host,
            "port": settings.server.port,
            "storage_path": str(store.root),
            "entry_count": store.count(),
            "staging_count": len(store.staging_files()),
        },
    )

    logger.info("Service ready to accept requests")

    yield

    # === SHUTDOWN ===
    entry_count: int | None
    try:
        entry_count = store.count()
    except OSError as exc:
        logger.warning(
            "Could not count stored entries",
            extra={"storage_path": str(store.root), "reason": str(exc)},
        )
        entry_count = None

    logger.info(
        "Service shutting down",
        extra={
            "uptime_seconds": state.uptime_seconds,
            "uptime": state.uptime_formatted,
            "entry_count": entry_count,
        },
    )
