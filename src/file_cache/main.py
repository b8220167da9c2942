"""
Service entry point.
"""

from __future__ import annotations

import sys

import uvicorn

from file_cache.app import create_app
from file_cache.config import ConfigurationError, get_config_path, get_settings
from file_cache.logging import setup_logging
from file_cache.services.content_store import resolve_root_dir


def main() -> int:
    """Run the service with uvicorn."""
    try:
        settings = get_settings()
        logger = setup_logging(settings.logging.level, settings.service.name)
    except (ConfigurationError, ValueError) as e:
        print(f"FATAL: Configuration error\n{e}", file=sys.stderr)
        return 1

    # The root is created by the lifespan; here it is only resolved for the log
    logger.info(
        "Launching server",
        extra={
            "config_path": str(get_config_path()),
            "storage_path": str(resolve_root_dir(settings.storage.to_store_options())),
            "host": settings.server.host,
            "port": settings.server.port,
        },
    )

    app = create_app()

    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level="warning",
        access_log=False,
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
