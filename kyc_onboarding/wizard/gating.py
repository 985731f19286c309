# This project was developed with assistance from AI tools.
"""Per-step predicates deciding whether "Next" may fire."""

from datetime import date

from ..schemas.documents import AddressMeta, IdDocumentDraft, SelfieDraft, UploadedFile
from ..schemas.identity import IdentityForm
from ..services.id_doc_types import id_documents_error
from ..services.identity_validation import is_identity_valid


def identity_ready(identity: IdentityForm, *, today: date | None = None) -> bool:
    return is_identity_valid(identity, today=today)


def selfie_ready(draft: SelfieDraft) -> bool:
    return draft.has_media


def id_documents_ready(documents: list[IdDocumentDraft]) -> bool:
    """Both drafts complete and at least one of them a primary document."""
    return id_documents_error(documents) is None


def address_ready(document: UploadedFile | None, meta: AddressMeta) -> bool:
    return bool(
        document is not None
        and meta.doc_type.strip()
        and meta.issuer.strip()
        and meta.issue_date.strip()
    )
