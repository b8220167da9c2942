"""Core infrastructure components."""

from file_cache.core.exceptions import ServiceError
from file_cache.core.state import AppState, get_app_state, init_app_state

__all__ = ["AppState", "ServiceError", "get_app_state", "init_app_state"]
