# This project was developed with assistance from AI tools.
"""Camera and face-detection integration for the selfie step.

The detector is an external producer: any async iterable of ``FrameResult``
events. ``CameraSession`` consumes it in a cancellable task and keeps only
the latest frame, so the capture action reads a synchronous "face present"
flag and the detection library stays swappable.
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterable, Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

from ..schemas.documents import UploadedFile

logger = logging.getLogger(__name__)

CAMERA_READY_MESSAGE = "Camera ready. Capture a live selfie or switch to ID upload."
NO_CAMERA_MESSAGE = "No camera detected. Please upload ID front/back or a passport."
CAMERA_DENIED_MESSAGE = "Unable to access the camera. Upload ID front/back or a passport."
MEDIA_UNAVAILABLE_MESSAGE = "Media devices are unavailable in this environment."
CAMERA_START_FAILED_MESSAGE = "Unable to start camera. Please upload your ID instead."
NO_FACE_MESSAGE = "No face detected yet. Center your face and try again."
CAMERA_NOT_READY_MESSAGE = "Camera not ready. Please try again or upload ID."


@dataclass(frozen=True)
class MediaDeviceInfo:
    kind: str
    label: str = ""


async def detect_camera(
    enumerate_devices: Callable[[], Awaitable[list[MediaDeviceInfo]]] | None,
) -> str:
    """Describe camera availability for the selfie step."""
    if enumerate_devices is None:
        return MEDIA_UNAVAILABLE_MESSAGE
    try:
        devices = await enumerate_devices()
    except (OSError, RuntimeError):
        logger.warning("Camera enumeration failed", exc_info=True)
        return CAMERA_DENIED_MESSAGE
    if any(device.kind == "videoinput" for device in devices):
        return CAMERA_READY_MESSAGE
    return NO_CAMERA_MESSAGE


@dataclass(frozen=True)
class BoundingBox:
    top: float
    left: float
    width: float
    height: float


@dataclass(frozen=True)
class FrameResult:
    """One detector output: faces found in a frame plus its encoded snapshot."""

    faces: tuple[BoundingBox, ...] = field(default_factory=tuple)
    image: bytes | None = None

    @property
    def face_present(self) -> bool:
        return len(self.faces) > 0


class MediaStream(Protocol):
    def stop(self) -> None: ...


class CaptureError(Exception):
    """The selfie could not be captured; ``str(exc)`` is user-facing."""


class CameraSession:
    """Live camera feed with face detection.

    Usage::

        async with CameraSession(stream, detector_frames) as camera:
            ...
            selfie = camera.capture()
    """

    def __init__(self, stream: MediaStream, frames: AsyncIterable[FrameResult]):
        self._stream = stream
        self._frames = frames
        self._latest: FrameResult | None = None
        self._task: asyncio.Task | None = None
        self._released = False
        self.error: str | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def face_present(self) -> bool:
        return self._latest is not None and self._latest.face_present

    @property
    def faces_detected(self) -> int:
        return len(self._latest.faces) if self._latest else 0

    @property
    def bounding_boxes(self) -> tuple[BoundingBox, ...]:
        return self._latest.faces if self._latest else ()

    def start(self) -> None:
        if self._released:
            raise RuntimeError("CameraSession already stopped")
        if self._task is None:
            self._task = asyncio.create_task(self._consume(), name="camera-face-detection")

    async def _consume(self) -> None:
        try:
            async for frame in self._frames:
                self._latest = frame
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Face detection stream failed")
            self.error = CAMERA_START_FAILED_MESSAGE
            self._latest = None

    def capture(self, filename: str = "selfie.jpg") -> UploadedFile:
        """Snapshot the latest frame; requires a detected face."""
        if not self.face_present:
            raise CaptureError(NO_FACE_MESSAGE)
        if self._released or not self._latest.image:
            raise CaptureError(CAMERA_NOT_READY_MESSAGE)
        return UploadedFile(filename=filename, content=self._latest.image, content_type="image/jpeg")

    async def stop(self) -> None:
        """Cancel detection and release the media stream (idempotent)."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        if not self._released:
            self._released = True
            self._stream.stop()
        self._latest = None

    async def __aenter__(self) -> "CameraSession":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
