"""File cache - content-addressed file storage service."""

from file_cache.services import ContentStore, ErrorType, StoreError, StoreOptions, StoreResult

__all__ = ["ContentStore", "ErrorType", "StoreError", "StoreOptions", "StoreResult"]
