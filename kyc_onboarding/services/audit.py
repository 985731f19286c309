# This project was developed with assistance from AI tools.
"""Submission audit log.

Appends one JSON line per accepted submission to an append-only log file.
Appends are serialized through an ``asyncio.Lock`` so concurrent requests
never interleave partial lines. Event payloads pass through ``mask_pii``
before they are written.
"""

import asyncio
import json
import logging
from datetime import UTC, datetime
from functools import partial
from pathlib import Path
from typing import Any

from ..core.config import Settings
from .pii import mask_pii

logger = logging.getLogger(__name__)


class AuditLog:
    """Append-only JSON-lines writer."""

    def __init__(self, log_file: Path):
        self._log_file = Path(log_file)
        self._lock = asyncio.Lock()

    @property
    def log_file(self) -> Path:
        return self._log_file

    def _append(self, line: str) -> None:
        self._log_file.parent.mkdir(parents=True, exist_ok=True)
        with self._log_file.open("a", encoding="utf-8") as fh:
            fh.write(line)

    async def write_event(self, event_type: str, event_data: dict[str, Any] | None = None) -> dict:
        """Write a single audit event.

        Args:
            event_type: Event category (e.g. 'register', 'selfie_upload').
            event_data: Arbitrary JSON-serializable payload; PII keys are masked.

        Returns:
            The record as written.
        """
        record = {
            "timestamp": datetime.now(UTC).isoformat(),
            "event": event_type,
            **mask_pii(event_data or {}),
        }
        line = json.dumps(record, default=str) + "\n"
        loop = asyncio.get_running_loop()
        async with self._lock:
            await loop.run_in_executor(None, partial(self._append, line))
        return record

    def read_events(self) -> list[dict]:
        """Return every event written so far (oldest first)."""
        if not self._log_file.exists():
            return []
        with self._log_file.open(encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_audit_log: AuditLog | None = None


def init_audit_log(cfg: Settings) -> AuditLog:
    """Initialise the singleton (called once from app lifespan)."""
    global _audit_log  # noqa: PLW0603
    _audit_log = AuditLog(cfg.audit_log_path)
    logger.info("AuditLog initialised (file=%s)", cfg.audit_log_path)
    return _audit_log


def get_audit_log() -> AuditLog:
    """Return the initialised AuditLog singleton."""
    if _audit_log is None:
        raise RuntimeError("AuditLog not initialised -- call init_audit_log() first")
    return _audit_log
