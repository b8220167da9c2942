"""
Service information endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from file_cache.config import get_settings
from file_cache.core.exceptions import ServiceError
from file_cache.core.state import get_app_state
from file_cache.schemas import InfoResponse, StorageInfo

router = APIRouter()


@router.get("/info", response_model=InfoResponse)
async def get_info() -> InfoResponse:
    """Get service information and configuration."""
    settings = get_settings()
    store = get_app_state().content_store
    if store is None:
        raise ServiceError(
            error="service_unavailable",
            message="Content store is not initialized",
            status_code=503,
            details={},
        )

    try:
        entry_count = await run_in_threadpool(store.count)
    except OSError as exc:
        raise ServiceError(
            error="storage_count_failed",
            message="Failed to count stored entries",
            status_code=503,
            details={
                "exception_type": exc.__class__.__name__,
                "reason": str(exc),
            },
        ) from exc

    return InfoResponse(
        service=settings.service.name,
        version=settings.service.version,
        storage=StorageInfo(
            path=str(store.root),
            content_type=settings.storage.content_type,
            entry_count=entry_count,
        ),
    )
