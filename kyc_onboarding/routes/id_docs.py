# This project was developed with assistance from AI tools.
"""Identity document upload route.

Expects exactly two typed documents, each with a front and back image, sent
as indexed multipart parts ``docType_N`` / ``front_N`` / ``back_N``. At least
one of the two must be a primary identity document.
"""

import logging

from fastapi import APIRouter, Depends, Request

from ..schemas.documents import ID_DOCUMENT_SLOTS, IdDocumentDraft, IdDocumentsResult
from ..schemas.envelope import ApiEnvelope, ErrorCode, success
from ..services.audit import AuditLog, get_audit_log
from ..services.id_doc_types import MISSING_PRIMARY_MESSAGE, has_primary_document
from ..services.storage import StorageService, get_storage_service
from ._common import KycHTTPException, missing_applicant_id, persist_submission, read_upload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/id-docs", response_model=ApiEnvelope[IdDocumentsResult])
async def upload_id_documents(
    request: Request,
    storage: StorageService = Depends(get_storage_service),
    audit: AuditLog = Depends(get_audit_log),
) -> ApiEnvelope[IdDocumentsResult]:
    """Store both identity documents once every slot is complete."""
    form = await request.form()
    applicant_id = form.get("applicantId")
    if not isinstance(applicant_id, str) or not applicant_id:
        raise missing_applicant_id()

    documents: list[IdDocumentDraft] = []
    for index in range(ID_DOCUMENT_SLOTS):
        doc_type = form.get(f"docType_{index}")
        draft = IdDocumentDraft(
            doc_type=doc_type.strip() if isinstance(doc_type, str) else "",
            front_file=await read_upload(form.get(f"front_{index}")),
            back_file=await read_upload(form.get(f"back_{index}")),
        )
        if not draft.is_complete:
            raise KycHTTPException(
                400,
                ErrorCode.MISSING_DOCUMENT,
                f"Document {index + 1} needs a document type plus front and back images.",
            )
        documents.append(draft)

    if not has_primary_document(doc.doc_type for doc in documents):
        raise KycHTTPException(400, ErrorCode.MISSING_PRIMARY_ID, MISSING_PRIMARY_MESSAGE)

    files = []
    for index, doc in enumerate(documents):
        files.append((f"id-{index}-front-{applicant_id}", doc.front_file))
        files.append((f"id-{index}-back-{applicant_id}", doc.back_file))

    await persist_submission(
        storage,
        audit,
        files=files,
        event_type="id_docs_upload",
        event_data={
            "applicantId": applicant_id,
            "docTypes": [doc.doc_type for doc in documents],
        },
        failure_message="Failed to persist ID documents.",
    )

    return success(IdDocumentsResult(status="uploaded"))
