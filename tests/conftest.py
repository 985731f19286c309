# This project was developed with assistance from AI tools.
"""Shared fixtures.

The app from ``kyc_onboarding.main`` is a module singleton. Storage and the
audit log are swapped for instances rooted in ``tmp_path`` through
``dependency_overrides``, which are cleared after every test.
"""

import pytest
from fastapi.testclient import TestClient

from kyc_onboarding.core.config import settings
from kyc_onboarding.main import app as real_app
from kyc_onboarding.schemas.documents import UploadedFile
from kyc_onboarding.schemas.identity import IdentityForm
from kyc_onboarding.services.audit import AuditLog, get_audit_log
from kyc_onboarding.services.storage import StorageService, get_storage_service


@pytest.fixture(autouse=True)
def _no_latency(monkeypatch):
    """Mocked verification responses return immediately in tests."""
    monkeypatch.setattr(settings, "SIMULATE_LATENCY", False)


@pytest.fixture
def storage(tmp_path) -> StorageService:
    return StorageService(tmp_path / "uploads")


@pytest.fixture
def audit_log(tmp_path) -> AuditLog:
    return AuditLog(tmp_path / "logs" / "api.log")


@pytest.fixture
def app(storage, audit_log):
    """Return the real FastAPI app wired to per-test storage and audit log."""
    real_app.dependency_overrides[get_storage_service] = lambda: storage
    real_app.dependency_overrides[get_audit_log] = lambda: audit_log
    yield real_app
    real_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    # No context manager: lifespan would initialise the cwd-relative singletons
    return TestClient(app)


@pytest.fixture
def identity() -> IdentityForm:
    """A complete, valid identity snapshot."""
    return IdentityForm(
        first_name="Ada",
        middle_name="King",
        last_name="Lovelace",
        email="ada@example.com",
        phone="+1 (415) 555-0100",
        dob="1990-12-10",
        gender="female",
        address_street="1 Analytical Way",
        address_city="San Francisco",
        address_region="CA",
        address_postal_code="94105",
        address_country="US",
    )


@pytest.fixture
def make_file():
    """Factory fixture: build an in-memory ``UploadedFile``."""

    def _make(name: str = "doc.png", content: bytes = b"\x89PNG-data", content_type="image/png"):
        return UploadedFile(filename=name, content=content, content_type=content_type)

    return _make
