# This project was developed with assistance from AI tools.
"""Tests for the identity document catalogue and primary-document rule."""

import pytest

from kyc_onboarding.schemas.documents import IdDocumentDraft, empty_id_documents
from kyc_onboarding.services.id_doc_types import (
    ID_DOC_TYPES,
    INCOMPLETE_DOCUMENTS_MESSAGE,
    MISSING_PRIMARY_MESSAGE,
    PRIMARY_ID_DOC_TYPES,
    has_primary_document,
    id_documents_error,
    is_primary_identity_doc_type,
)


class TestCatalogue:
    def test_primary_types_are_catalogued(self):
        assert PRIMARY_ID_DOC_TYPES <= set(ID_DOC_TYPES)

    def test_catalogue_has_no_duplicates(self):
        assert len(ID_DOC_TYPES) == len(set(ID_DOC_TYPES))


class TestPrimaryClassification:
    @pytest.mark.parametrize(
        "doc_type",
        ["Passport", "Driver’s License", "Citizenship Card", "Student ID", "  Passport  "],
    )
    def test_primary(self, doc_type):
        assert is_primary_identity_doc_type(doc_type)

    @pytest.mark.parametrize(
        "doc_type",
        ["Birth Certificate", "Hunting License", "Hospital Card", "", "   "],
    )
    def test_secondary(self, doc_type):
        assert not is_primary_identity_doc_type(doc_type)

    def test_keyword_match_outside_catalogue(self):
        assert is_primary_identity_doc_type("EU Passport Card")
        assert is_primary_identity_doc_type("Commercial driver permit")
        assert is_primary_identity_doc_type("Tribal Identification Card")

    def test_ascii_apostrophe_matches_by_keyword(self):
        assert "Driver's License" not in PRIMARY_ID_DOC_TYPES
        assert is_primary_identity_doc_type("Driver's License")

    def test_identification_card_keyword(self):
        assert is_primary_identity_doc_type("Some Identification Card")

    def test_library_card_is_secondary(self):
        assert not is_primary_identity_doc_type("Library Card")

    def test_has_primary_document(self):
        assert has_primary_document(["Birth Certificate", "Passport"])
        assert not has_primary_document(["Birth Certificate", "Hunting License"])
        assert not has_primary_document([])


class TestIdDocumentsError:
    def _complete(self, make_file, doc_type: str) -> IdDocumentDraft:
        return IdDocumentDraft(
            doc_type=doc_type,
            front_file=make_file("front.png"),
            back_file=make_file("back.png"),
        )

    def test_empty_drafts_incomplete(self):
        assert id_documents_error(empty_id_documents()) == INCOMPLETE_DOCUMENTS_MESSAGE

    def test_missing_back_image_incomplete(self, make_file):
        docs = [
            self._complete(make_file, "Passport"),
            IdDocumentDraft(doc_type="Birth Certificate", front_file=make_file()),
        ]
        assert id_documents_error(docs) == INCOMPLETE_DOCUMENTS_MESSAGE

    def test_two_secondary_documents_rejected(self, make_file):
        docs = [
            self._complete(make_file, "Birth Certificate"),
            self._complete(make_file, "Hunting License"),
        ]
        assert id_documents_error(docs) == MISSING_PRIMARY_MESSAGE

    def test_one_primary_document_accepted(self, make_file):
        docs = [
            self._complete(make_file, "Birth Certificate"),
            self._complete(make_file, "Passport"),
        ]
        assert id_documents_error(docs) is None
