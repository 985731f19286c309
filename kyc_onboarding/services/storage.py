# This project was developed with assistance from AI tools.
"""Flat-file upload storage.

Uploaded selfies and documents are written under a server-local uploads
directory with randomized, collision-resistant names that keep the original
extension. Blocking file IO runs in a thread-pool executor for async
compatibility. The module exposes a singleton initialised at app startup via
``init_storage_service()``.
"""

import asyncio
import logging
import os
import re
import uuid
from functools import partial
from pathlib import Path

from ..core.config import Settings

logger = logging.getLogger(__name__)

_SAFE_NAME = re.compile(r"[^A-Za-z0-9._-]")
_DEFAULT_EXTENSION = ".bin"


class StorageError(Exception):
    """Raised when an upload cannot be persisted."""


class StorageService:
    """Writes uploads to ``uploads_dir``; never overwrites an existing file."""

    def __init__(self, uploads_dir: Path):
        self._uploads_dir = Path(uploads_dir)

    @property
    def uploads_dir(self) -> Path:
        return self._uploads_dir

    def ensure_dir(self) -> None:
        self._uploads_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def build_filename(prefix: str, filename: str | None) -> str:
        """Build ``{prefix}-{uuid4}{ext}``.

        Strips path components and unsafe characters from the prefix, which
        carries the client-supplied applicant id.
        """
        safe_prefix = _SAFE_NAME.sub("_", prefix).strip("._") or "upload"
        ext = os.path.splitext(os.path.basename(filename or ""))[1]
        ext = _SAFE_NAME.sub("", ext) or _DEFAULT_EXTENSION
        return f"{safe_prefix}-{uuid.uuid4()}{ext}"

    def _write(self, target: Path, file_data: bytes) -> None:
        self.ensure_dir()
        # "xb" refuses to clobber an existing file
        with target.open("xb") as fh:
            fh.write(file_data)

    async def save_file(self, prefix: str, filename: str | None, file_data: bytes) -> Path:
        """Persist ``file_data`` and return the stored path."""
        target = self._uploads_dir / self.build_filename(prefix, filename)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, partial(self._write, target, file_data))
        except OSError as exc:
            raise StorageError(f"Failed to write {target.name}") from exc
        logger.info("Stored upload %s (%d bytes)", target.name, len(file_data))
        return target

    def is_writable(self) -> bool:
        """Health check: the uploads directory exists (or can be created) and is writable."""
        try:
            self.ensure_dir()
        except OSError:
            return False
        return os.access(self._uploads_dir, os.W_OK)


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_service: StorageService | None = None


def init_storage_service(cfg: Settings) -> StorageService:
    """Initialise the singleton (called once from app lifespan)."""
    global _service  # noqa: PLW0603
    _service = StorageService(cfg.UPLOADS_DIR)
    _service.ensure_dir()
    logger.info("StorageService initialised (uploads_dir=%s)", cfg.UPLOADS_DIR)
    return _service


def get_storage_service() -> StorageService:
    """Return the initialised StorageService singleton."""
    if _service is None:
        raise RuntimeError("StorageService not initialised -- call init_storage_service() first")
    return _service
