# This project was developed with assistance from AI tools.
"""Tests for the append-only submission audit log."""

import asyncio
import json

import pytest

from kyc_onboarding.core.config import Settings
from kyc_onboarding.services import audit as audit_module


@pytest.mark.asyncio
async def test_write_event_appends_json_line(audit_log):
    record = await audit_log.write_event("register", {"applicantId": "app_1"})

    lines = audit_log.log_file.read_text().splitlines()
    assert len(lines) == 1
    written = json.loads(lines[0])
    assert written == record
    assert written["event"] == "register"
    assert written["applicantId"] == "app_1"
    assert "timestamp" in written


@pytest.mark.asyncio
async def test_pii_masked_before_write(audit_log):
    await audit_log.write_event(
        "register", {"email": "ada@example.com", "phone": "4155550100", "dob": "1990-12-10"}
    )

    raw = audit_log.log_file.read_text()
    assert "ada@example.com" not in raw
    assert "4155550100" not in raw
    event = audit_log.read_events()[0]
    assert event["email"] == "a***@example.com"
    assert event["dob"] == "1990-**-**"


@pytest.mark.asyncio
async def test_concurrent_writes_never_interleave(audit_log):
    await asyncio.gather(
        *(audit_log.write_event("selfie_upload", {"n": i, "pad": "x" * 2000}) for i in range(25))
    )

    events = audit_log.read_events()
    assert sorted(e["n"] for e in events) == list(range(25))


def test_read_events_without_file(audit_log):
    assert audit_log.read_events() == []


def test_get_before_init_raises(monkeypatch):
    monkeypatch.setattr(audit_module, "_audit_log", None)
    with pytest.raises(RuntimeError):
        audit_module.get_audit_log()


def test_init_uses_configured_path(monkeypatch, tmp_path):
    monkeypatch.setattr(audit_module, "_audit_log", None)
    cfg = Settings(LOGS_DIR=tmp_path / "logs", AUDIT_LOG_FILENAME="kyc.log")
    log = audit_module.init_audit_log(cfg)
    assert audit_module.get_audit_log() is log
    assert log.log_file == tmp_path / "logs" / "kyc.log"
