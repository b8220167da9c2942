"""
Result and error types shared by content store operations.

Every store operation produces a StoreResult. Operations that return a
value on success (read) raise StoreError built from the failed result, so
both paths carry the same error type and message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ErrorType(IntEnum):
    """Error categories, valued as the status codes callers map them to."""

    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 405
    INTERNAL = 500


@dataclass
class StoreResult:
    """
    Outcome of a store operation.

    Attributes:
        success: Whether the operation completed
        error_type: Error category when success is False
        error_msg: Human-readable error description
        digest: SHA-256 hex digest of the entry
        name: Stored file name
        ext: File extension without the leading dot (empty if none)
        dir: Entry directory path
        path: Full path of the stored file
    """

    success: bool = False
    error_type: ErrorType | None = None
    error_msg: str | None = None
    digest: str | None = None
    name: str | None = None
    ext: str | None = None
    dir: str | None = None
    path: str | None = None

    @classmethod
    def ok(cls, **fields: str) -> StoreResult:
        """Build a successful result."""
        return cls(success=True, **fields)

    @classmethod
    def fail(cls, error_type: ErrorType, error_msg: str, digest: str | None = None) -> StoreResult:
        """Build a failed result."""
        return cls(success=False, error_type=error_type, error_msg=error_msg, digest=digest)

    def raise_for_error(self) -> None:
        """Raise StoreError if this result is a failure."""
        if not self.success:
            raise StoreError.from_result(self)


class StoreError(Exception):
    """Raised by value-returning operations when the underlying result failed."""

    def __init__(self, error_type: ErrorType, error_msg: str) -> None:
        self.error_type = error_type
        self.error_msg = error_msg
        super().__init__(error_msg)

    @classmethod
    def from_result(cls, result: StoreResult) -> StoreError:
        """Wrap a failed result."""
        error_type = result.error_type if result.error_type is not None else ErrorType.INTERNAL
        return cls(error_type, result.error_msg or "Unknown content store error.")


class StoreInitError(Exception):
    """Raised when the store root directory cannot be created or accessed."""

    pass


class DigestError(Exception):
    """Raised when the digest of a source cannot be computed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Error creating hash for file '{source}': {reason}")
