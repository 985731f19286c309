# This project was developed with assistance from AI tools.
"""Selfie, identity-document and proof-of-address schemas."""

from dataclasses import dataclass

from . import CamelModel

ID_DOCUMENT_SLOTS = 2


@dataclass(frozen=True)
class UploadedFile:
    """In-memory reference to a file picked or captured by the applicant."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    def as_upload(self) -> tuple[str, bytes, str]:
        """Return the ``(filename, content, content_type)`` tuple httpx expects."""
        return self.filename, self.content, self.content_type


@dataclass
class SelfieDraft:
    """Biometric evidence: a live selfie, or an ID pair, or a passport."""

    selfie: UploadedFile | None = None
    id_front: UploadedFile | None = None
    id_back: UploadedFile | None = None
    passport: UploadedFile | None = None

    @property
    def has_id_pair(self) -> bool:
        return self.id_front is not None and self.id_back is not None

    @property
    def has_media(self) -> bool:
        return self.selfie is not None or self.has_id_pair or self.passport is not None


@dataclass
class IdDocumentDraft:
    """One of the two identity documents uploaded on the id-docs step."""

    doc_type: str = ""
    front_file: UploadedFile | None = None
    back_file: UploadedFile | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.doc_type.strip()) and self.front_file is not None and self.back_file is not None


def empty_id_documents() -> list[IdDocumentDraft]:
    """Fresh drafts for every id-docs slot."""
    return [IdDocumentDraft() for _ in range(ID_DOCUMENT_SLOTS)]


class AddressMeta(CamelModel):
    """Metadata typed in alongside the proof-of-address document."""

    issuer: str = ""
    doc_type: str = ""
    country: str = ""
    issue_date: str = ""


class SelfieResult(CamelModel):
    liveness_score: float
    match: bool
    next_step: str


class IdDocumentsResult(CamelModel):
    status: str


class ParsedAddress(CamelModel):
    line1: str
    city: str
    region: str
    postal_code: str
    country: str


class AddressResult(CamelModel):
    """Response after uploading proof of address."""

    parsed_address: ParsedAddress
    issuer: str
    status: str
