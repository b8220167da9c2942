"""Service layer components."""

from file_cache.services.content_store import ContentStore, StoreOptions
from file_cache.services.locks import KeyedLock
from file_cache.services.results import (
    DigestError,
    ErrorType,
    StoreError,
    StoreInitError,
    StoreResult,
)

__all__ = [
    "ContentStore",
    "DigestError",
    "ErrorType",
    "KeyedLock",
    "StoreError",
    "StoreInitError",
    "StoreOptions",
    "StoreResult",
]
