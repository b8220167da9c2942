"""
Shared fixtures for unit tests.

Provides test isolation fixtures to ensure clean state between tests.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from file_cache.config import clear_settings_cache
from file_cache.services.content_store import ContentStore, StoreOptions

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


TEST_CONFIG_YAML = """
service:
  name: file-cache
  version: 0.1.0

storage:
  path: "{path}"
  env_var: FILE_CACHE_PATH
  chunk_size: 65536
  content_type: "application/octet-stream"

server:
  host: "0.0.0.0"
  port: 8005

logging:
  level: "INFO"
  format: "json"
"""


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    """Ensure settings cache is cleared before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Root directory for a per-test content store."""
    return tmp_path / "cache"


@pytest.fixture
def store(store_root: Path) -> ContentStore:
    """Content store rooted in a fresh temporary directory."""
    return ContentStore(StoreOptions(root_dir=store_root))


@pytest.fixture
def test_config_file(tmp_path: Path) -> Iterator[Path]:
    """Write a valid config file and point CONFIG_PATH at it."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(TEST_CONFIG_YAML.format(path=tmp_path / "cache"))

    old_config_path = os.environ.get("CONFIG_PATH")
    os.environ["CONFIG_PATH"] = str(config_file)

    yield config_file

    if old_config_path:
        os.environ["CONFIG_PATH"] = old_config_path
    else:
        os.environ.pop("CONFIG_PATH", None)
