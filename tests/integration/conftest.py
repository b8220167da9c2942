"""
Shared fixtures for integration tests.

Integration tests run the real application, lifespan included, against a
content store rooted in a per-test temporary directory.
"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from file_cache.app import create_app
from file_cache.config import clear_settings_cache
from file_cache.core.state import reset_app_state

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


INTEGRATION_CONFIG_YAML = """
service:
  name: file-cache
  version: 0.1.0

storage:
  path: "{path}"
  env_var: FILE_CACHE_PATH
  chunk_size: 4096
  content_type: "application/octet-stream"

server:
  host: "127.0.0.1"
  port: 8005

logging:
  level: "WARNING"
  format: "json"
"""


@pytest.fixture
def write_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Callable[[Path], Path]:
    """Return a function that writes a config for a given store root and selects it."""

    def _write(store_root: Path) -> Path:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(INTEGRATION_CONFIG_YAML.format(path=store_root))
        monkeypatch.setenv("CONFIG_PATH", str(config_file))
        clear_settings_cache()
        return config_file

    return _write


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Root directory of the store used by the running app."""
    return tmp_path / "cache"


@pytest.fixture
def client(store_root: Path, write_config: Callable[[Path], Path]) -> Iterator[TestClient]:
    """
    Create test client with the real application.

    Uses context manager to trigger lifespan events (store creation).
    """
    write_config(store_root)
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    clear_settings_cache()
    reset_app_state()


@pytest.fixture
def hello_world_base64() -> str:
    """Base64 encoding of b"hello world"."""
    return base64.b64encode(b"hello world").decode("ascii")
