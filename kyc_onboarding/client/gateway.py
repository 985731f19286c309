# This project was developed with assistance from AI tools.
"""Gateway client for the onboarding backend.

Wraps outbound requests and normalizes the ``{data, error}`` envelope: a call
either returns the typed ``data`` payload or raises ``KycRequestError``.
Callers never see a null-data success. The gateway owns no wizard state.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..core.config import settings
from ..schemas.documents import (
    AddressMeta,
    AddressResult,
    IdDocumentDraft,
    IdDocumentsResult,
    SelfieDraft,
    SelfieResult,
    UploadedFile,
)
from ..schemas.envelope import ApiEnvelope
from ..schemas.identity import IdentityForm, RegisterResult

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


class KycRequestError(Exception):
    """A backend call failed; ``str(exc)`` is safe to show the applicant."""

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


def _normalize_base_url(value: str) -> str:
    return value.rstrip("/")


class KycGateway:
    """Async client for the four onboarding endpoints.

    Args:
        base_url: Backend origin. ``None`` keeps URLs relative to ``client``'s own
            base URL (e.g. when talking to an in-process ASGI app).
        prefix: Path prefix the endpoints are mounted under.
        client: Optional pre-built ``httpx.AsyncClient`` (tests inject transports).
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        prefix: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self._base_url = _normalize_base_url(base_url) if base_url else ""
        self._prefix = "/" + (prefix if prefix is not None else settings.API_PREFIX).strip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.KYC_REQUEST_TIMEOUT_S
        )

    @classmethod
    def from_settings(cls) -> KycGateway:
        return cls(settings.KYC_API_BASE_URL, prefix=settings.API_PREFIX)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> KycGateway:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def kyc_url(self, path: str) -> str:
        """Build ``{base_url}{prefix}{path}``."""
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{self._prefix}{normalized_path}"

    async def request(
        self,
        path: str,
        fallback_message: str,
        *,
        method: str = "POST",
        **kwargs: Any,
    ) -> Any:
        """Send a request and return the envelope's ``data``.

        Raises:
            KycRequestError: on transport failure, non-2xx status, a non-null
                ``error``, an unparseable body, or null ``data``.
        """
        try:
            response = await self._client.request(method, self.kyc_url(path), **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", path, exc)
            raise KycRequestError(fallback_message) from exc

        try:
            envelope = ApiEnvelope[Any].model_validate(response.json())
        except (ValueError, ValidationError):
            envelope = None

        if not response.is_success or (envelope is not None and envelope.error is not None):
            error = envelope.error if envelope is not None else None
            raise KycRequestError(
                (error.message if error else "") or fallback_message,
                code=error.code if error else None,
                status_code=response.status_code,
            )

        if envelope is None or not envelope.ok:
            raise KycRequestError(fallback_message, status_code=response.status_code)

        return envelope.data

    async def _request_model(
        self, model: type[ResultT], path: str, fallback_message: str, **kwargs: Any
    ) -> ResultT:
        data = await self.request(path, fallback_message, **kwargs)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning("Unexpected %s payload from %s", model.__name__, path)
            raise KycRequestError(fallback_message) from exc

    # -- Endpoints --

    async def register(self, identity: IdentityForm) -> RegisterResult:
        return await self._request_model(
            RegisterResult,
            "/register",
            "Unable to register applicant.",
            json=identity.model_dump(by_alias=True),
        )

    async def upload_selfie(self, applicant_id: str, draft: SelfieDraft) -> SelfieResult:
        files: list[tuple[str, tuple[str, bytes, str]]] = []
        if draft.selfie:
            files.append(("selfie", draft.selfie.as_upload()))
        if draft.has_id_pair:
            files.append(("idFront", draft.id_front.as_upload()))
            files.append(("idBack", draft.id_back.as_upload()))
        if draft.passport:
            files.append(("passport", draft.passport.as_upload()))
        return await self._request_model(
            SelfieResult,
            "/selfie",
            "Selfie upload failed.",
            data={"applicantId": applicant_id},
            files=files,
        )

    async def upload_id_documents(
        self, applicant_id: str, documents: list[IdDocumentDraft]
    ) -> IdDocumentsResult:
        data = {"applicantId": applicant_id}
        files: list[tuple[str, tuple[str, bytes, str]]] = []
        for index, doc in enumerate(documents):
            data[f"docType_{index}"] = doc.doc_type
            if doc.front_file:
                files.append((f"front_{index}", doc.front_file.as_upload()))
            if doc.back_file:
                files.append((f"back_{index}", doc.back_file.as_upload()))
        return await self._request_model(
            IdDocumentsResult,
            "/id-docs",
            "ID upload failed.",
            data=data,
            files=files,
        )

    async def upload_address(
        self, applicant_id: str, document: UploadedFile, meta: AddressMeta
    ) -> AddressResult:
        return await self._request_model(
            AddressResult,
            "/address",
            "Proof-of-address upload failed.",
            data={
                "applicantId": applicant_id,
                "docType": meta.doc_type,
                "issuer": meta.issuer,
                "country": meta.country,
                "issueDate": meta.issue_date,
            },
            files=[("document", document.as_upload())],
        )
