# This project was developed with assistance from AI tools.
"""Selfie / biometric evidence upload route."""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..core.config import settings
from ..schemas.documents import SelfieDraft, SelfieResult
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

# Canned liveness scores until a real biometric provider is wired in
SELFIE_LIVENESS_SCORE = 0.94
DOCUMENT_LIVENESS_SCORE = 0.8


@router.post("/selfie", response_model=ApiEnvelope[SelfieResult])
async def upload_selfie(
    applicant_id: str | None = Form(None, alias="applicantId"),
    selfie: UploadFile | None = File(None),
    id_front: UploadFile | None = File(None, alias="idFront"),
    id_back: UploadFile | None = File(None, alias="idBack"),
    passport: UploadFile | None = File(None),
    storage: StorageService = Depends(get_storage_service),
    audit: AuditLog = Depends(get_audit_log),
) -> ApiEnvelope[SelfieResult]:
    """Accept a live selfie, or both sides of an ID, or a passport."""
    if not applicant_id:
        raise missing_applicant_id()

    draft = SelfieDraft(
        selfie=await read_upload(selfie),
        id_front=await read_upload(id_front),
        id_back=await read_upload(id_back),
        passport=await read_upload(passport),
    )
    if not draft.has_media:
        raise KycHTTPException(
            422,
            ErrorCode.MISSING_MEDIA,
            "Provide a selfie or upload both sides of the ID/passport.",
        )

    files = []
    if draft.selfie:
        files.append((f"selfie-{applicant_id}", draft.selfie))
    if draft.has_id_pair:
        files.append((f"id-front-{applicant_id}", draft.id_front))
        files.append((f"id-back-{applicant_id}", draft.id_back))
    if draft.passport:
        files.append((f"passport-{applicant_id}", draft.passport))

    await persist_submission(
        storage,
        audit,
        files=files,
        event_type="selfie_upload",
        event_data={
            "applicantId": applicant_id,
            "hasSelfie": draft.selfie is not None,
            "validIdPair": draft.has_id_pair,
            "hasPassport": draft.passport is not None,
        },
        failure_message="Failed to persist media.",
    )

    await simulate_latency(settings.SELFIE_DELAY_MS)

    score = SELFIE_LIVENESS_SCORE if draft.selfie else DOCUMENT_LIVENESS_SCORE
    return success(SelfieResult(liveness_score=score, match=True, next_step="id-docs"))
