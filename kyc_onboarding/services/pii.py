# This project was developed with assistance from AI tools.
"""PII masking utilities.

Applicant contact details and date of birth never reach the submission log or
server log lines in clear text. ``mask_pii`` walks any JSON-compatible value
and masks known fields by key, so new audit events get coverage without
per-call masking logic.
"""

import re
from collections.abc import Callable
from typing import Any


def mask_email(value: str | None) -> str | None:
    """Mask email to j***@example.com (first character and domain visible)."""
    if value is None:
        return None
    local, sep, domain = value.strip().partition("@")
    if not sep or not local:
        return "***"
    return f"{local[0]}***@{domain}"


def mask_phone(value: str | None) -> str | None:
    """Mask phone to ***-1234 (last 4 digits visible)."""
    if value is None:
        return None
    digits = re.sub(r"\D", "", value)
    if len(digits) >= 4:
        return f"***-{digits[-4:]}"
    return "***-****"


def mask_dob(value: str | None) -> str | None:
    """Keep only the birth year: 1990-12-10 becomes 1990-**-**."""
    if value is None:
        return None
    year = value.strip()[:4]
    return f"{year}-**-**" if len(year) == 4 and year.isdigit() else "****-**-**"


# Keys cover both snake_case attributes and camelCase wire names
_PII_FIELD_MASKERS: dict[str, Callable[[str | None], str | None]] = {
    "email": mask_email,
    "phone": mask_phone,
    "dob": mask_dob,
    "date_of_birth": mask_dob,
    "dateOfBirth": mask_dob,
}


def _mask_entry(key: str, value: Any) -> Any:
    masker = _PII_FIELD_MASKERS.get(key)
    if masker is not None and (value is None or isinstance(value, str)):
        return masker(value)
    return mask_pii(value)


def mask_pii(obj: Any) -> Any:
    """Return a copy of a JSON-compatible value with PII fields masked by key."""
    if isinstance(obj, dict):
        return {key: _mask_entry(key, value) for key, value in obj.items()}
    if isinstance(obj, list | tuple):
        return [mask_pii(item) for item in obj]
    return obj
