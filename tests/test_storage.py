# This project was developed with assistance from AI tools.
"""Tests for the flat-file upload storage service."""

from unittest.mock import patch

import pytest

from kyc_onboarding.core.config import Settings
from kyc_onboarding.services import storage as storage_module
from kyc_onboarding.services.storage import StorageError, StorageService


class TestBuildFilename:
    def test_keeps_extension(self):
        name = StorageService.build_filename("selfie-app_1", "me.jpg")
        assert name.startswith("selfie-app_1-")
        assert name.endswith(".jpg")

    def test_default_extension(self):
        assert StorageService.build_filename("address-app_1", "scan").endswith(".bin")
        assert StorageService.build_filename("address-app_1", None).endswith(".bin")

    def test_names_are_unique(self):
        names = {StorageService.build_filename("p", "a.png") for _ in range(50)}
        assert len(names) == 50

    def test_strips_path_components(self):
        name = StorageService.build_filename("../../etc/app_1", "../../evil.png")
        assert "/" not in name
        assert not name.startswith(".")
        assert name.endswith(".png")


class TestSaveFile:
    @pytest.mark.asyncio
    async def test_writes_content(self, storage):
        path = await storage.save_file("selfie-app_1", "me.jpg", b"jpeg-bytes")
        assert path.parent == storage.uploads_dir
        assert path.read_bytes() == b"jpeg-bytes"

    @pytest.mark.asyncio
    async def test_creates_directory(self, tmp_path):
        service = StorageService(tmp_path / "nested" / "uploads")
        path = await service.save_file("p", "a.pdf", b"%PDF")
        assert path.exists()

    @pytest.mark.asyncio
    async def test_os_error_wrapped(self, storage):
        with patch.object(StorageService, "_write", side_effect=PermissionError("denied")):
            with pytest.raises(StorageError):
                await storage.save_file("p", "a.png", b"data")

    def test_is_writable(self, storage):
        assert storage.is_writable()
        assert storage.uploads_dir.is_dir()

    def test_not_writable_when_path_is_a_file(self, tmp_path):
        blocker = tmp_path / "uploads"
        blocker.write_text("not a directory")
        assert not StorageService(blocker).is_writable()


class TestSingleton:
    def test_get_before_init_raises(self, monkeypatch):
        monkeypatch.setattr(storage_module, "_service", None)
        with pytest.raises(RuntimeError):
            storage_module.get_storage_service()

    def test_init_creates_uploads_dir(self, monkeypatch, tmp_path):
        monkeypatch.setattr(storage_module, "_service", None)
        cfg = Settings(UPLOADS_DIR=tmp_path / "up")
        service = storage_module.init_storage_service(cfg)
        assert storage_module.get_storage_service() is service
        assert (tmp_path / "up").is_dir()
