"""API routers for the file cache service."""

from file_cache.routers import files, health, info

__all__ = ["files", "health", "info"]
