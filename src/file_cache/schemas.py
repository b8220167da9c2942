"""
Pydantic request/response models for the file cache API.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response model for GET /health endpoint."""

    status: Literal["healthy", "degraded", "unhealthy"]
    """Service health status."""

    uptime_seconds: float
    """Uptime in seconds since service start."""

    uptime: str
    """Human-readable uptime."""

    system_time: str
    """Current system time in yyyy-mm-dd hh:mm format (UTC)."""


class StorageInfo(BaseModel):
    """Storage configuration for /info endpoint."""

    model_config = ConfigDict(extra="forbid")

    path: str
    """Resolved store root directory."""

    content_type: str
    """Media type served for stored files."""

    entry_count: int
    """Number of entries currently stored."""


class InfoResponse(BaseModel):
    """Response model for GET /info endpoint."""

    service: str
    """Service name."""

    version: str
    """Service version."""

    storage: StorageInfo
    """Storage configuration and status."""


class WriteFileRequest(BaseModel):
    """Request model for POST /files endpoint."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., min_length=1)
    """File content, encoded per `encoding`."""

    name: str = Field(..., min_length=1)
    """File name, or a bare extension such as "txt" to get a generated name."""

    encoding: str = "base64"
    """Encoding of `content`."""

    overwrite: bool = False
    """Replace an existing entry with the same digest."""


class WriteFileResponse(BaseModel):
    """Response model for POST /files endpoint."""

    model_config = ConfigDict(extra="forbid")

    digest: str
    """SHA-256 hex digest addressing the stored file."""

    name: str
    """Stored file name."""

    ext: str
    """Stored file extension without the leading dot."""


class FileInfoResponse(BaseModel):
    """Response model for GET /files/{digest}/meta endpoint."""

    model_config = ConfigDict(extra="forbid")

    digest: str
    name: str
    ext: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    """Machine-readable error code."""

    message: str
    """Human-readable error description."""

    details: dict[str, Any]
    """Additional error context."""
