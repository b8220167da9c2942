"""
File storage endpoints.

Provides write/read/lookup/delete operations over the content store.
Files are addressed by the SHA-256 digest of their bytes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from fastapi import APIRouter, Response
from fastapi.concurrency import run_in_threadpool

from file_cache.config import get_settings
from file_cache.core.exceptions import ERROR_CODES, ServiceError, service_error_from_result
from file_cache.core.state import get_app_state
from file_cache.schemas import FileInfoResponse, WriteFileRequest, WriteFileResponse
from file_cache.services.results import StoreError

if TYPE_CHECKING:
    from file_cache.services.content_store import ContentStore

router = APIRouter()


def _get_content_store() -> ContentStore:
    """Get initialized content store or raise a service error."""
    store = get_app_state().content_store
    if store is None:
        raise ServiceError(
            error="service_unavailable",
            message="Content store is not initialized",
            status_code=503,
            details={},
        )
    return store


@router.post("/files", status_code=201, response_model=WriteFileResponse)
async def write_file(body: WriteFileRequest) -> WriteFileResponse:
    """Store encoded content and return its digest."""
    store = _get_content_store()
    result = await run_in_threadpool(
        store.write, body.content, body.name, body.encoding, body.overwrite
    )
    if not result.success:
        raise service_error_from_result(result)
    return WriteFileResponse(digest=str(result.digest), name=str(result.name), ext=str(result.ext))


@router.get("/files/{digest}/meta", response_model=FileInfoResponse)
async def get_file_info(digest: str) -> FileInfoResponse:
    """Look up the stored file name for a digest."""
    store = _get_content_store()
    result = await run_in_threadpool(store.find, digest)
    if not result.success:
        raise service_error_from_result(result)
    return FileInfoResponse(digest=digest, name=str(result.name), ext=str(result.ext))


@router.get("/files/{digest}")
async def read_file(digest: str) -> Response:
    """Retrieve the bytes stored under a digest."""
    settings = get_settings()
    store = _get_content_store()
    found = await run_in_threadpool(store.find, digest)
    if not found.success:
        raise service_error_from_result(found)
    try:
        data = await run_in_threadpool(store.read, digest)
    except StoreError as exc:
        raise ServiceError(
            error=ERROR_CODES[exc.error_type],
            message=exc.error_msg,
            status_code=int(exc.error_type),
            details={"digest": digest},
        ) from exc
    disposition = f"attachment; filename*=UTF-8''{quote(str(found.name))}"
    return Response(
        content=data,
        media_type=settings.storage.content_type,
        headers={"Content-Disposition": disposition},
    )


@router.delete("/files/{digest}", status_code=204)
async def delete_file(digest: str) -> Response:
    """Remove the entry stored under a digest."""
    store = _get_content_store()
    result = await run_in_threadpool(store.remove, digest)
    if not result.success:
        raise service_error_from_result(result)
    return Response(status_code=204)
