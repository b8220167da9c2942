"""
Content-addressed file storage.

Each stored file is addressed by the SHA-256 digest of its bytes and
lives alone in a directory named after that digest:

    <root>/<digest>/<name>

In-memory content is first buffered into a staging file directly under
the root, then moved into its entry directory once the digest is known.
"""

from __future__ import annotations

import base64
import binascii
import errno
import logging
import os
import re
import shutil
import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from file_cache.services.digest import DEFAULT_CHUNK_SIZE, compute_digest, is_valid_digest
from file_cache.services.locks import KeyedLock
from file_cache.services.results import (
    DigestError,
    ErrorType,
    StoreError,
    StoreInitError,
    StoreResult,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_ENV_VAR = "FILE_CACHE_PATH"

SUPPORTED_ENCODINGS: frozenset[str] = frozenset(
    {"base64", "base64url", "hex", "utf-8", "utf8", "ascii", "latin-1", "latin1", "binary"}
)

_TEXT_CODECS = {
    "utf-8": "utf-8",
    "utf8": "utf-8",
    "ascii": "ascii",
    "latin-1": "latin-1",
    "latin1": "latin-1",
    "binary": "latin-1",
}

_STAGING_PATTERN = re.compile(r"^[0-9a-f]{32}$")


@dataclass(frozen=True)
class StoreOptions:
    """
    Construction options for a ContentStore.

    Attributes:
        root_dir: Explicit root directory; takes precedence over env_var
        env_var: Environment variable consulted when root_dir is unset
        chunk_size: Bytes read per iteration while hashing
    """

    root_dir: str | Path | None = None
    env_var: str = DEFAULT_ENV_VAR
    chunk_size: int = DEFAULT_CHUNK_SIZE


def resolve_root_dir(options: StoreOptions, environ: Mapping[str, str] | None = None) -> Path:
    """
    Resolve the store root from options, environment, or the temp directory.

    Returns:
        Absolute root path without a trailing separator
    """
    env = os.environ if environ is None else environ
    raw = options.root_dir or env.get(options.env_var) or os.path.realpath(tempfile.gettempdir())
    return Path(os.path.abspath(os.path.expanduser(str(raw))))


def decode_content(content: str | bytes | bytearray, encoding: str) -> bytes:
    """
    Decode caller content into raw bytes.

    Bytes are taken as-is. Strings are decoded per encoding.

    Raises:
        ValueError: If the encoding is unsupported or the content does not decode
    """
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)

    encoding_key = encoding.lower()
    if encoding_key not in SUPPORTED_ENCODINGS:
        raise ValueError(f"unsupported encoding '{encoding}'")

    if encoding_key in ("base64", "base64url"):
        compact = "".join(content.split())
        padded = compact + "=" * (-len(compact) % 4)
        try:
            if encoding_key == "base64url":
                return base64.b64decode(padded, altchars=b"-_", validate=True)
            return base64.b64decode(padded, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"content is not valid {encoding_key}: {exc}") from exc
    if encoding_key == "hex":
        return bytes.fromhex(content)
    return content.encode(_TEXT_CODECS[encoding_key])


def resolve_file_name(name: str) -> str:
    """
    Resolve the stored file name for written content.

    A name without an extension is taken as a bare extension and gets a
    generated base name, so "txt" and ".txt" both become "<hex>.txt".
    """
    if os.path.splitext(name)[1]:
        return name
    suffix = name if name.startswith(".") else f".{name}"
    return f"{uuid.uuid4().hex}{suffix}"


def file_extension(name: str) -> str:
    """Return the portion after the last dot of a file name, or ''."""
    return os.path.splitext(name)[1][1:]


def _is_bare_name(name: str) -> bool:
    if name in (".", ".."):
        return False
    separators = {os.sep, "/"} | ({os.altsep} if os.altsep else set())
    return not any(sep in name for sep in separators) and "\x00" not in name


def _remove_tree(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)


def _relocate(source: Path, dest: Path) -> None:
    try:
        os.replace(source, dest)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        shutil.move(str(source), str(dest))


class ContentStore:
    """
    File store addressed by SHA-256 content digest.

    All state lives on disk under the root directory. Mutations of a
    single digest are serialized in-process; the exclusive creation of
    an entry directory decides conflicts between writers.
    """

    def __init__(
        self,
        options: StoreOptions | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.options = options if options is not None else StoreOptions()
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._locks = KeyedLock()
        self.root = resolve_root_dir(self.options)

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            accessible = self.root.is_dir() and os.access(self.root, os.R_OK | os.W_OK | os.X_OK)
        except OSError as exc:
            raise StoreInitError(f"Could not access cache directory '{self.root}'.") from exc
        if not accessible:
            raise StoreInitError(f"Could not access cache directory '{self.root}'.")

    def entry_dir(self, digest: str) -> Path:
        """Directory holding the entry for a digest."""
        return self.root / digest

    def find(self, digest: str | None) -> StoreResult:
        """Locate the file stored under a digest. Never raises."""
        if not digest:
            return StoreResult.fail(
                ErrorType.BAD_REQUEST, "Cannot find file; hash parameter is required."
            )
        if not is_valid_digest(digest):
            return StoreResult.fail(ErrorType.NOT_FOUND, f"Hash '{digest}' not found.")

        entry_dir = self.entry_dir(digest)
        try:
            if not entry_dir.is_dir():
                return StoreResult.fail(ErrorType.NOT_FOUND, f"Hash '{digest}' not found.")
            names = os.listdir(entry_dir)
            single_file = len(names) == 1 and (entry_dir / names[0]).is_file()
        except OSError:
            self._logger.exception("Lookup failed", extra={"digest": digest})
            return StoreResult.fail(
                ErrorType.INTERNAL, f"Unknown error getting file for hash '{digest}'.", digest
            )

        if not single_file:
            self._logger.warning(
                "Corrupted entry", extra={"digest": digest, "entry_count": len(names)}
            )
            return StoreResult.fail(
                ErrorType.NOT_FOUND, "Hash found; could not read file from cache.", digest
            )

        name = names[0]
        return StoreResult.ok(
            digest=digest,
            name=name,
            ext=file_extension(name),
            dir=str(entry_dir),
            path=str(entry_dir / name),
        )

    def read(self, digest: str | None) -> bytes:
        """
        Read the full contents stored under a digest.

        Raises:
            StoreError: With the lookup's error type and message on failure
        """
        result = self.find(digest)
        result.raise_for_error()
        try:
            return Path(str(result.path)).read_bytes()
        except OSError as exc:
            raise StoreError(
                ErrorType.INTERNAL, f"Error reading file for hash '{digest}'."
            ) from exc

    def move(
        self,
        source: str | Path | None,
        name: str | None,
        overwrite: bool = False,
    ) -> StoreResult:
        """
        Ingest an existing file by renaming it into its entry directory.

        The source is consumed on success and left in place on any
        failure before the rename.
        """
        if not source:
            return StoreResult.fail(
                ErrorType.BAD_REQUEST, "Cannot move file; source parameter is required."
            )
        if not name:
            return StoreResult.fail(
                ErrorType.BAD_REQUEST, "Cannot move file; name parameter is required."
            )
        if not _is_bare_name(name):
            return StoreResult.fail(
                ErrorType.BAD_REQUEST, f"Cannot move file; invalid file name '{name}'."
            )

        try:
            digest = compute_digest(source, self.options.chunk_size)
        except DigestError:
            self._logger.exception("Digest failed", extra={"source": str(source)})
            return StoreResult.fail(
                ErrorType.INTERNAL, f"Error creating hash for file '{source}'."
            )

        with self._locks.hold(digest):
            return self._ingest(Path(source), digest, name, overwrite)

    def _ingest(self, source: Path, digest: str, name: str, overwrite: bool) -> StoreResult:
        entry_dir = self.entry_dir(digest)
        dest = entry_dir / name

        if overwrite:
            if entry_dir.resolve() in source.resolve().parents:
                return StoreResult.fail(
                    ErrorType.BAD_REQUEST,
                    f"Cannot move file; source is already cached under hash '{digest}'.",
                    digest,
                )
            try:
                _remove_tree(entry_dir)
            except OSError:
                self._logger.exception("Overwrite failed", extra={"digest": digest})
                return StoreResult.fail(
                    ErrorType.INTERNAL, f"Error replacing cached file. Hash '{digest}'.", digest
                )

        try:
            entry_dir.mkdir()
        except FileExistsError:
            self._logger.info("File already cached", extra={"digest": digest, "file_name": name})
            return StoreResult.fail(
                ErrorType.CONFLICT, f"File already cached. Hash '{digest}'.", digest
            )
        except OSError:
            self._logger.exception("Entry creation failed", extra={"digest": digest})
            return StoreResult.fail(ErrorType.INTERNAL, "Error moving file to cache.", digest)

        try:
            _relocate(source, dest)
        except OSError:
            self._logger.exception("Move failed", extra={"digest": digest, "file_name": name})
            try:
                entry_dir.rmdir()
            except OSError:
                self._logger.warning("Entry left behind", extra={"digest": digest})
            return StoreResult.fail(ErrorType.INTERNAL, "Error moving file to cache.", digest)

        if not dest.is_file():
            return StoreResult.fail(ErrorType.INTERNAL, "Error moving file to cache.", digest)

        self._logger.info(
            "File cached",
            extra={"digest": digest, "file_name": name, "overwrite": overwrite},
        )
        return StoreResult.ok(
            digest=digest,
            name=name,
            ext=file_extension(name),
            dir=str(entry_dir),
            path=str(dest),
        )

    def write(
        self,
        content: str | bytes | bytearray | None,
        name: str | None,
        encoding: str = "base64",
        overwrite: bool = False,
    ) -> StoreResult:
        """
        Store in-memory content.

        Content is buffered into a staging file under the root and then
        moved into place. The staging file is removed on every failure path.
        """
        if not content:
            return StoreResult.fail(
                ErrorType.BAD_REQUEST, "Cannot write file; content parameter is required."
            )
        if not name:
            return StoreResult.fail(
                ErrorType.BAD_REQUEST, "Cannot write file; name parameter is required."
            )
        if not _is_bare_name(name):
            return StoreResult.fail(
                ErrorType.BAD_REQUEST, f"Cannot write file; invalid file name '{name}'."
            )

        try:
            data = decode_content(content, encoding)
        except ValueError as exc:
            return StoreResult.fail(ErrorType.BAD_REQUEST, f"Cannot write file; {exc}.")
        if not data:
            return StoreResult.fail(
                ErrorType.BAD_REQUEST, "Cannot write file; content decodes to no bytes."
            )

        staging = self.root / uuid.uuid4().hex
        try:
            with open(staging, "xb") as f:
                f.write(data)
        except OSError:
            self._logger.exception("Staging failed", extra={"staging_path": str(staging)})
            self._discard(staging)
            return StoreResult.fail(
                ErrorType.INTERNAL, "Error writing content to cache. Could not stage content."
            )

        result = self.move(staging, resolve_file_name(name), overwrite)
        if not result.success:
            self._discard(staging)
            result.error_msg = f"Error writing content to cache. {result.error_msg}"
        return result

    def _discard(self, staging: Path) -> None:
        try:
            staging.unlink(missing_ok=True)
        except OSError:
            self._logger.warning("Staging file left behind", extra={"staging_path": str(staging)})

    def remove(self, digest: str | None) -> StoreResult:
        """Delete the entry stored under a digest."""
        if not digest:
            return StoreResult.fail(
                ErrorType.BAD_REQUEST, "Cannot remove file; hash parameter is required."
            )

        with self._locks.hold(digest):
            found = self.find(digest)
            if not found.success:
                if found.error_type is ErrorType.NOT_FOUND:
                    message = f"Could not remove file. Hash '{digest}', not found."
                else:
                    message = f"Could not remove file. {found.error_msg}"
                return StoreResult.fail(
                    found.error_type or ErrorType.INTERNAL, message, found.digest
                )

            entry_dir = Path(str(found.dir))
            try:
                shutil.rmtree(entry_dir)
            except FileNotFoundError:
                pass
            except OSError:
                self._logger.exception("Remove failed", extra={"digest": digest})
                return StoreResult.fail(
                    ErrorType.INTERNAL, f"Error removing file for hash '{digest}'.", digest
                )

            if entry_dir.exists():
                return StoreResult.fail(
                    ErrorType.INTERNAL, f"Error removing file for hash '{digest}'.", digest
                )

        self._logger.info("File removed", extra={"digest": digest, "file_name": found.name})
        return StoreResult.ok(digest=digest, name=str(found.name), dir=str(entry_dir))

    def count(self) -> int:
        """Return the number of entry directories under the root."""
        return sum(1 for p in self.root.iterdir() if p.is_dir() and is_valid_digest(p.name))

    def staging_files(self) -> list[Path]:
        """Return staging files currently present under the root."""
        return sorted(
            p for p in self.root.iterdir() if p.is_file() and _STAGING_PATTERN.match(p.name)
        )
