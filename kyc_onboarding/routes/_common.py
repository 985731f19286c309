# This project was developed with assistance from AI tools.
"""Shared helpers for the onboarding upload routes."""

import asyncio
import logging

from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.config import settings
from ..schemas.documents import UploadedFile
from ..schemas.envelope import ErrorCode
from ..services.audit import AuditLog
from ..services.storage import StorageError, StorageService

logger = logging.getLogger(__name__)


class KycHTTPException(StarletteHTTPException):
    """HTTP error carrying an envelope error code."""

    def __init__(self, status_code: int, code: ErrorCode, message: str):
        super().__init__(status_code=status_code, detail=message)
        self.code = code


def missing_applicant_id() -> KycHTTPException:
    return KycHTTPException(400, ErrorCode.INVALID_BODY, "Missing applicantId.")


async def simulate_latency(delay_ms: int) -> None:
    """Stand-in for the time a real verification provider would take."""
    if settings.SIMULATE_LATENCY and delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)


async def read_upload(file: UploadFile | str | None) -> UploadedFile | None:
    """Read a multipart part; empty or non-file parts count as absent."""
    if file is None or isinstance(file, str):
        return None
    data = await file.read()
    if not data:
        return None
    if len(data) > settings.upload_max_bytes:
        raise KycHTTPException(
            413,
            ErrorCode.FILE_TOO_LARGE,
            f"File exceeds maximum size of {settings.UPLOAD_MAX_SIZE_MB} MB.",
        )
    return UploadedFile(
        filename=file.filename or "",
        content=data,
        content_type=file.content_type or "application/octet-stream",
    )


async def persist_submission(
    storage: StorageService,
    audit: AuditLog,
    *,
    files: list[tuple[str, UploadedFile]],
    event_type: str,
    event_data: dict,
    failure_message: str,
) -> list[str]:
    """Store every ``(prefix, file)`` pair, then write one audit line.

    Any persistence failure is logged and surfaced as ``STORE_FAILED`` with
    ``failure_message``; the underlying cause never reaches the client.
    """
    try:
        stored = [
            str(await storage.save_file(prefix, upload.filename, upload.content))
            for prefix, upload in files
        ]
        await audit.write_event(event_type, {**event_data, "stored": stored})
    except (StorageError, OSError) as exc:
        logger.exception("Failed to persist %s submission", event_type)
        raise KycHTTPException(500, ErrorCode.STORE_FAILED, failure_message) from exc
    return stored
