#!/usr/bin/env python3
# This project was developed with assistance from AI tools.
"""Live test suite for the KYC Onboarding API.

Validates the health endpoint, envelope error handling of every onboarding
endpoint, and a full wizard walkthrough (identity -> selfie -> id-docs ->
address -> success) driven through the gateway client against a running
server instance.

Prerequisites:
  - API server running (default http://localhost:8000), e.g.
    ``uvicorn kyc_onboarding.main:app``; SIMULATE_LATENCY=false speeds it up

Usage:
  ./scripts/live-tests.py                     # full suite
  ./scripts/live-tests.py --section errors    # only envelope error checks
  ./scripts/live-tests.py --base http://host:8000
"""

import argparse
import asyncio
import sys

import httpx

from kyc_onboarding.client import KycGateway
from kyc_onboarding.core.config import settings
from kyc_onboarding.schemas.documents import UploadedFile
from kyc_onboarding.wizard import KycFlow, StepId

BASE = "http://localhost:8000"
PREFIX = settings.API_PREFIX

# ---------------------------------------------------------------------------
# Test runner
# ---------------------------------------------------------------------------

PASS = 0
FAIL = 0
ERRORS: list[str] = []
SECTION = ""


def section(name: str):
    global SECTION
    SECTION = name
    print(f"\n{'=' * 60}")
    print(f"  {name}")
    print(f"{'=' * 60}\n")


def ok(name: str, passed: bool, detail: str = ""):
    global PASS, FAIL
    if passed:
        PASS += 1
        print(f"  PASS  {name}")
    else:
        FAIL += 1
        msg = f"[{SECTION}] {name}: {detail}" if detail else f"[{SECTION}] {name}"
        ERRORS.append(msg)
        print(f"  FAIL  {name} -- {detail}")


def is_error_envelope(body: dict, code: str) -> bool:
    return body.get("data") is None and (body.get("error") or {}).get("code") == code


def png(name: str) -> UploadedFile:
    return UploadedFile(filename=name, content=b"\x89PNG\r\n\x1a\nlive-test", content_type="image/png")


# ---------------------------------------------------------------------------
# 1. Health
# ---------------------------------------------------------------------------

async def test_health(c: httpx.AsyncClient):
    section("Health")

    r = await c.get("/health/")
    ok("GET /health/ returns 200", r.status_code == 200)
    data = r.json()
    ok("response is a list", isinstance(data, list))
    ok("API status is healthy",
       any(s.get("name") == "API" and s.get("status") == "healthy" for s in data))
    ok("Storage status is healthy",
       any(s.get("name") == "Storage" and s.get("status") == "healthy" for s in data))

    r = await c.get("/")
    ok("GET / root returns 200", r.status_code == 200)


# ---------------------------------------------------------------------------
# 2. Envelope errors
# ---------------------------------------------------------------------------

async def test_error_handling(c: httpx.AsyncClient):
    section("Envelope error handling")

    r = await c.post(f"{PREFIX}/register", json={"email": "a@b.co"})
    ok("register with missing fields returns 400", r.status_code == 400)
    ok("register error is INVALID_BODY", is_error_envelope(r.json(), "INVALID_BODY"))
    ok("message lists missing fields", "firstName" in r.json()["error"]["message"])

    r = await c.post(f"{PREFIX}/register", content=b"{not json",
                     headers={"Content-Type": "application/json"})
    ok("malformed JSON returns 400", r.status_code == 400)

    r = await c.post(f"{PREFIX}/selfie", data={})
    ok("selfie without applicantId returns 400", r.status_code == 400)

    r = await c.post(f"{PREFIX}/selfie", data={"applicantId": "app_live"})
    ok("selfie without media returns 422", r.status_code == 422)
    ok("selfie error is MISSING_MEDIA", is_error_envelope(r.json(), "MISSING_MEDIA"))

    files = []
    data = {"applicantId": "app_live"}
    for index, doc_type in enumerate(["Birth Certificate", "Hunting License"]):
        data[f"docType_{index}"] = doc_type
        files.append((f"front_{index}", ("f.png", b"front", "image/png")))
        files.append((f"back_{index}", ("b.png", b"back", "image/png")))
    r = await c.post(f"{PREFIX}/id-docs", data=data, files=files)
    ok("two secondary documents return 400", r.status_code == 400)
    ok("id-docs error is MISSING_PRIMARY_ID", is_error_envelope(r.json(), "MISSING_PRIMARY_ID"))

    r = await c.post(f"{PREFIX}/address", data={"applicantId": "app_live", "docType": "Bill"})
    ok("address without document returns 400", r.status_code == 400)
    ok("address error is MISSING_DOCUMENT", is_error_envelope(r.json(), "MISSING_DOCUMENT"))

    r = await c.get(f"{PREFIX}/nonexistent")
    ok("unknown path returns 404 envelope", r.status_code == 404
       and is_error_envelope(r.json(), "NOT_FOUND"))


# ---------------------------------------------------------------------------
# 3. Wizard walkthrough
# ---------------------------------------------------------------------------

async def test_wizard_walkthrough(c: httpx.AsyncClient):
    section("Wizard walkthrough (gateway client)")

    flow = KycFlow(KycGateway(client=c, prefix=PREFIX))

    flow.update_identity(
        first_name="Ada",
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
    ok("identity form is valid", flow.can_advance, str(flow.identity_field_errors))
    await flow.next()
    ok("identity -> selfie", flow.current_step is StepId.SELFIE, str(flow.current_error))
    ok("applicant id assigned", bool(flow.applicant_id))

    flow.set_selfie(UploadedFile("selfie.jpg", b"\xff\xd8\xffjpeg", "image/jpeg"))
    await flow.next()
    ok("selfie -> id-docs", flow.current_step is StepId.ID_DOCS, str(flow.current_error))
    ok("liveness score returned",
       flow.selfie_result is not None and flow.selfie_result.liveness_score > 0)

    flow.set_id_document(0, doc_type="Passport", front_file=png("p1.png"), back_file=png("p2.png"))
    flow.set_id_document(1, doc_type="Birth Certificate", front_file=png("b1.png"),
                         back_file=png("b2.png"))
    await flow.next()
    ok("id-docs -> address", flow.current_step is StepId.ADDRESS, str(flow.current_error))

    flow.set_address_document(UploadedFile("bill.pdf", b"%PDF-1.4 live", "application/pdf"))
    flow.update_address_meta(issuer="PG&E", doc_type="Utility bill", country="US",
                             issue_date="2026-09-01")
    await flow.next()
    ok("submit opens confirmation dialog", flow.confirm_open)
    await flow.confirm_address()
    ok("address -> success", flow.current_step is StepId.SUCCESS, str(flow.current_error))
    parsed = flow.parsed_address or {}
    ok("parsed address carries issuer", parsed.get("issuer") == "PG&E")

    flow.restart()
    ok("restart returns to identity", flow.current_step is StepId.IDENTITY
       and flow.applicant_id is None)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

async def main():
    parser = argparse.ArgumentParser(description="Live test suite for the KYC Onboarding API")
    parser.add_argument("--base", default=BASE, help="Server origin (default: %(default)s)")
    parser.add_argument("--section", choices=["errors", "wizard", "all"], default="all",
                        help="Which sections to run")
    args = parser.parse_args()

    async with httpx.AsyncClient(base_url=args.base, timeout=30) as c:

        # Pre-flight: make sure server is up
        try:
            r = await c.get("/health/")
            if r.status_code != 200:
                print(f"\n  Server returned {r.status_code} on /health/ -- is it running?")
                sys.exit(2)
        except httpx.ConnectError:
            print(f"\n  Cannot connect to server at {args.base} -- is it running?")
            sys.exit(2)

        await test_health(c)
        if args.section in ("errors", "all"):
            await test_error_handling(c)
        if args.section in ("wizard", "all"):
            await test_wizard_walkthrough(c)

    # Summary
    print(f"\n{'=' * 60}")
    print(f"  RESULTS: {PASS} passed, {FAIL} failed")
    print(f"{'=' * 60}")

    if ERRORS:
        print("\nFailures:")
        for e in ERRORS:
            print(f"  - {e}")

    sys.exit(0 if FAIL == 0 else 1)


if __name__ == "__main__":
    asyncio.run(main())
