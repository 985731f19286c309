# This project was developed with assistance from AI tools.
"""Proof-of-address upload route."""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..core.config import settings
from ..schemas.documents import AddressResult, ParsedAddress
from ..schemas.envelope import ApiEnvelope, ErrorCode, success
from ..services.audit import AuditLog, get_audit_log
from ..services.storage import StorageService, get_storage_service
from ._common import (
    KycHTTPException,
    missing_applicant_id,
    persist_submission,
    read_upload,
    simulate_latency,
)

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_COUNTRY = "US"


def _simulated_parse(country: str | None) -> ParsedAddress:
    """Mocked document parsing: a fixed address until OCR is wired in."""
    return ParsedAddress(
        line1="123 Market St",
        city="San Francisco",
        region="CA",
        postal_code="94105",
        country=country or DEFAULT_COUNTRY,
    )


@router.post("/address", response_model=ApiEnvelope[AddressResult])
async def upload_address(
    applicant_id: str | None = Form(None, alias="applicantId"),
    document: UploadFile | None = File(None),
    doc_type: str | None = Form(None, alias="docType"),
    issuer: str | None = Form(None),
    country: str | None = Form(None),
    issue_date: str | None = Form(None, alias="issueDate"),
    storage: StorageService = Depends(get_storage_service),
    audit: AuditLog = Depends(get_audit_log),
) -> ApiEnvelope[AddressResult]:
    """Store a proof-of-address document and return the parsed address."""
    if not applicant_id:
        raise missing_applicant_id()

    upload = await read_upload(document)
    if upload is None:
        raise KycHTTPException(400, ErrorCode.MISSING_DOCUMENT, "Upload a document.")

    if not doc_type or not issuer or not issue_date:
        raise KycHTTPException(
            400,
            ErrorCode.INVALID_BODY,
            "Document type, issuer, and issue date are required.",
        )

    await persist_submission(
        storage,
        audit,
        files=[(f"address-{applicant_id}", upload)],
        event_type="address_upload",
        event_data={
            "applicantId": applicant_id,
            "docType": doc_type,
            "issuer": issuer,
            "issueDate": issue_date,
            "size": upload.size,
        },
        failure_message="Failed to persist document.",
    )

    await simulate_latency(settings.ADDRESS_DELAY_MS)

    return success(
        AddressResult(
            parsed_address=_simulated_parse(country),
            issuer=issuer,
            status="submitted",
        )
    )
