# This project was developed with assistance from AI tools.
"""Applicant registration route (identity step)."""

import logging
import uuid

from fastapi import APIRouter, Depends

from ..core.config import settings
from ..schemas.envelope import ApiEnvelope, ErrorCode, success
from ..schemas.identity import IDENTITY_REQUIRED_FIELDS, IdentityForm, RegisterResult
from ..services.audit import AuditLog, get_audit_log
from ._common import KycHTTPException, simulate_latency

logger = logging.getLogger(__name__)

router = APIRouter()

OTP_CHANNELS = ["email", "sms"]


def _missing_fields(identity: IdentityForm) -> list[str]:
    """Required fields left blank, reported by their JSON (camelCase) names."""
    fields = IdentityForm.model_fields
    return [
        fields[name].alias or name
        for name in IDENTITY_REQUIRED_FIELDS
        if not getattr(identity, name).strip()
    ]


@router.post("/register", response_model=ApiEnvelope[RegisterResult])
async def register_applicant(
    payload: IdentityForm | None = None,
    audit: AuditLog = Depends(get_audit_log),
) -> ApiEnvelope[RegisterResult]:
    """Register an applicant and issue the opaque applicant id."""
    identity = payload or IdentityForm()
    missing = _missing_fields(identity)
    if missing:
        raise KycHTTPException(
            400,
            ErrorCode.INVALID_BODY,
            f"Missing fields: {', '.join(missing)}",
        )

    await simulate_latency(settings.REGISTER_DELAY_MS)

    applicant_id = f"app_{uuid.uuid4().hex}"
    try:
        await audit.write_event(
            "register",
            {
                "applicantId": applicant_id,
                "email": identity.email,
                "phone": identity.phone,
                "dob": identity.dob,
                "country": identity.address_country,
            },
        )
    except OSError as exc:
        logger.exception("Failed to record registration for %s", applicant_id)
        raise KycHTTPException(
            500, ErrorCode.STORE_FAILED, "Unable to register applicant."
        ) from exc
    logger.info("Registered applicant %s", applicant_id)
    return success(RegisterResult(applicant_id=applicant_id, otp_channels=list(OTP_CHANNELS)))
