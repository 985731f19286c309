# This project was developed with assistance from AI tools.
"""Response envelope shared by every onboarding endpoint.

Every body is either ``{"data": ..., "error": null}`` or
``{"data": null, "error": {"code": ..., "message": ...}}``. A non-2xx status
always accompanies a non-null error.
"""

import enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorCode(str, enum.Enum):
    INVALID_BODY = "INVALID_BODY"
    MISSING_DOCUMENT = "MISSING_DOCUMENT"
    MISSING_MEDIA = "MISSING_MEDIA"
    MISSING_PRIMARY_ID = "MISSING_PRIMARY_ID"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    STORE_FAILED = "STORE_FAILED"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ApiError(BaseModel):
    """Machine-readable code plus a message safe to show the applicant."""

    code: str = Field(description="Stable error code, see ErrorCode.")
    message: str = Field(description="Human-readable explanation.")
    details: Any | None = Field(
        default=None,
        description="Optional structured detail (e.g. request validation errors).",
    )


class ApiEnvelope(BaseModel, Generic[T]):
    """Discriminated result: exactly one of ``data`` / ``error`` is set."""

    data: T | None = None
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.data is not None


def success(data: T) -> ApiEnvelope[T]:
    return ApiEnvelope(data=data, error=None)


def failure(code: ErrorCode | str, message: str, details: Any | None = None) -> ApiEnvelope:
    code_value = code.value if isinstance(code, ErrorCode) else code
    return ApiEnvelope(data=None, error=ApiError(code=code_value, message=message, details=details))
