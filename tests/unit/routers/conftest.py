"""
Fixtures for router unit tests.

The app is built without the real lifespan; app state holds a mocked
content store so no filesystem access happens.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator
    from pathlib import Path


@pytest.fixture
def mock_store(tmp_path: Path) -> MagicMock:
    """Create a mock content store."""
    store = MagicMock()
    store.root = tmp_path / "cache"
    store.count.return_value = 0
    return store


@pytest.fixture
def mock_app_state(mock_store: MagicMock) -> MagicMock:
    """Create mock app state holding the mock store."""
    state = MagicMock()
    state.content_store = mock_store
    state.uptime_seconds = 123.45
    state.uptime_formatted = "2m 3s"
    return state


@pytest.fixture
def test_client(
    test_config_file: Path,  # noqa: ARG001 - fixture needed for side effects
    mock_app_state: MagicMock,
) -> Iterator[TestClient]:
    """Create a test client with mocked dependencies."""
    from file_cache.config import get_settings  # noqa: PLC0415
    from file_cache.core.exceptions import register_exception_handlers  # noqa: PLC0415
    from file_cache.routers import files, health, info  # noqa: PLC0415

    @asynccontextmanager
    async def mock_lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield

    settings = get_settings()
    app = FastAPI(
        title=f"{settings.service.name} Service",
        version=settings.service.version,
        lifespan=mock_lifespan,
    )
    register_exception_handlers(app)
    app.include_router(health.router, tags=["Operations"])
    app.include_router(info.router, tags=["Operations"])
    app.include_router(files.router, tags=["Files"])

    with (
        patch("file_cache.routers.health.get_app_state", return_value=mock_app_state),
        patch("file_cache.routers.info.get_app_state", return_value=mock_app_state),
        patch("file_cache.routers.files.get_app_state", return_value=mock_app_state),
        TestClient(app, raise_server_exceptions=False) as client,
    ):
        yield client
