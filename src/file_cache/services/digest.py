"""
SHA-256 digests over files and in-memory content.

Files are streamed in bounded chunks so arbitrarily large inputs never
have to fit in memory.
"""

from __future__ import annotations

import hashlib
import re
from typing import TYPE_CHECKING

from file_cache.services.results import DigestError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_CHUNK_SIZE = 64 * 1024

DIGEST_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def compute_digest(source: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Compute the lowercase hex SHA-256 digest of a file.

    Args:
        source: Path of the file to hash
        chunk_size: Number of bytes read per iteration

    Returns:
        64-character lowercase hex digest

    Raises:
        DigestError: If the file cannot be opened or read
    """
    if chunk_size <= 0:
        raise ValueError(f"Chunk size must be positive, got {chunk_size}")

    hasher = hashlib.sha256()
    try:
        with open(source, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                hasher.update(chunk)
    except OSError as exc:
        raise DigestError(str(source), f"{exc.__class__.__name__}: {exc}") from exc
    return hasher.hexdigest()


def digest_bytes(data: bytes) -> str:
    """Compute the lowercase hex SHA-256 digest of in-memory content."""
    return hashlib.sha256(data).hexdigest()


def is_valid_digest(value: str) -> bool:
    """Check whether a string has the shape of a SHA-256 hex digest."""
    return bool(DIGEST_PATTERN.match(value))
