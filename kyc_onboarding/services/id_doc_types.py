# This project was developed with assistance from AI tools.
"""Identity document catalogue and primary-document classification.

At least one of the two documents uploaded on the id-docs step must be a
primary identity document: a passport, a driver's license, or a government
photo identification card.
"""

from collections.abc import Iterable

from ..schemas.documents import IdDocumentDraft

ID_DOC_TYPES: tuple[str, ...] = (
    "Passport",
    "Driver’s License",
    "Foreign Driver’s License",
    "Foreign Passport",
    "BC Driver’s License and Services Card",
    "Photo BC Services Card",
    "Permanent Resident (PR) Card",
    "Citizenship Card",
    "Secure Certificated of Indian Status Card",
    "National Institute of The Blind(CNIB) Identification Card",
    "Federal, Provincial or Municipal Identification Card",
    "Military Family Card",
    "Firearms Acquisition Certificate (FAC) or PAL",
    "Provincial or Territorial Health Cards",
    "Government Employment Card",
    "International Student Card",
    "Age of Majority Card",
    "Birth Certificate",
    "Baptismal Certificate",
    "Non-Photo BC Services Card",
    "Hunting License",
    "Fishing License",
    "Boating License",
    "LCBO/Age of Majority Card",
    "Outdoors Card",
    "Hospital Card",
    "Blood Donor Card",
    "Immigration Papers",
    "Student ID",
    "City/Municipal Library Card",
)

PRIMARY_ID_DOC_TYPES: frozenset[str] = frozenset(
    {
        "Passport",
        "Driver’s License",
        "Foreign Driver’s License",
        "Foreign Passport",
        "BC Driver’s License and Services Card",
        "Photo BC Services Card",
        "Permanent Resident (PR) Card",
        "Citizenship Card",
        "Secure Certificated of Indian Status Card",
        "National Institute of The Blind(CNIB) Identification Card",
        "Federal, Provincial or Municipal Identification Card",
        "Military Family Card",
        "Firearms Acquisition Certificate (FAC) or PAL",
        "Provincial or Territorial Health Cards",
        "Government Employment Card",
        "International Student Card",
        "Age of Majority Card",
        "LCBO/Age of Majority Card",
        "Student ID",
    }
)

# Labels outside the catalogue still count when they contain one of these
_PRIMARY_KEYWORDS = ("passport", "driver", "identification card")

INCOMPLETE_DOCUMENTS_MESSAGE = (
    "Upload front and back images for both documents and select document types."
)
MISSING_PRIMARY_MESSAGE = (
    "At least one uploaded document must be a passport, driver’s license, "
    "or identification card."
)


def is_primary_identity_doc_type(doc_type: str) -> bool:
    """Return True when ``doc_type`` names a primary identity document."""
    normalized = doc_type.strip()
    if not normalized:
        return False
    if normalized in PRIMARY_ID_DOC_TYPES:
        return True
    lowered = normalized.lower()
    return any(keyword in lowered for keyword in _PRIMARY_KEYWORDS)


def has_primary_document(doc_types: Iterable[str]) -> bool:
    return any(is_primary_identity_doc_type(doc_type) for doc_type in doc_types)


def id_documents_error(documents: list[IdDocumentDraft]) -> str | None:
    """Explain why the id-docs step cannot be submitted, or None when it can."""
    completed = [doc for doc in documents if doc.is_complete]
    if len(completed) < len(documents):
        return INCOMPLETE_DOCUMENTS_MESSAGE
    if not has_primary_document(doc.doc_type for doc in completed):
        return MISSING_PRIMARY_MESSAGE
    return None
