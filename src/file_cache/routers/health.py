"""
Health check endpoint.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from file_cache.core.state import get_app_state
from file_cache.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health. Degraded when the store is not initialized."""
    state = get_app_state()
    system_time = datetime.now(UTC).strftime("%Y-%m-%d %H:%M")

    return HealthResponse(
        status="healthy" if state.content_store is not None else "degraded",
        uptime_seconds=state.uptime_seconds,
        uptime=state.uptime_formatted,
        system_time=system_time,
    )
