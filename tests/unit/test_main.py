"""Unit tests for the service entry point."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from file_cache.main import main

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def restore_service_logger() -> Iterator[None]:
    """Detach the handlers main() adds to the service logger."""
    yield
    service_logger = logging.getLogger("file-cache")
    service_logger.handlers.clear()
    service_logger.propagate = True


@pytest.mark.unit
class TestMain:
    """Tests for main()."""

    def test_runs_uvicorn_on_configured_address(
        self,
        test_config_file: Path,  # noqa: ARG002 - fixture needed for side effects
    ) -> None:
        """Server binds to the host and port from config."""
        with patch("file_cache.main.uvicorn.run") as mock_run:
            assert main() == 0

        kwargs = mock_run.call_args.kwargs
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 8005

    def test_logs_resolved_store_root(
        self,
        test_config_file: Path,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Launch log names the config file and the resolved store root."""
        with patch("file_cache.main.uvicorn.run"):
            main()

        records = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]
        launch = next(r for r in records if r["message"] == "Launching server")
        assert launch["extra"]["storage_path"] == str(tmp_path / "cache")
        assert launch["extra"]["config_path"] == str(test_config_file)

    def test_missing_config_exits_with_error(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """A missing config file is fatal before the server starts."""
        monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "missing.yaml"))

        with patch("file_cache.main.uvicorn.run") as mock_run:
            assert main() == 1

        mock_run.assert_not_called()
        assert "FATAL" in capsys.readouterr().err

    def test_invalid_log_level_exits_with_error(self, test_config_file: Path) -> None:
        """An unknown log level is reported as a configuration error."""
        test_config_file.write_text(
            test_config_file.read_text().replace('level: "INFO"', 'level: "LOUD"')
        )

        with patch("file_cache.main.uvicorn.run") as mock_run:
            assert main() == 1

        mock_run.assert_not_called()
