# This project was developed with assistance from AI tools.
"""Field-level validation for the identity step.

Pure functions mapping an ``IdentityForm`` snapshot to per-field error
messages. Each field is checked independently and reports only its first
violated rule. An empty mapping means the form may be submitted.
"""

import re
from collections.abc import Callable
from datetime import date

from ..schemas.identity import IdentityForm

NAME_MAX_LENGTH = 80
STREET_MAX_LENGTH = 120
PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15
POSTAL_CODE_MIN_LENGTH = 3
POSTAL_CODE_MAX_LENGTH = 20
MAX_AGE_YEARS = 130

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

IdentityFieldErrors = dict[str, str]


def _has_value(value: str) -> bool:
    return bool(value.strip())


def _digits_only(value: str) -> str:
    return re.sub(r"\D", "", value)


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def _check_first_name(value: str, today: date) -> str | None:
    if not _has_value(value):
        return "First name is required."
    if len(value.strip()) > NAME_MAX_LENGTH:
        return "First name is too long."
    return None


def _check_middle_name(value: str, today: date) -> str | None:
    if _has_value(value) and len(value.strip()) > NAME_MAX_LENGTH:
        return "Middle name is too long."
    return None


def _check_last_name(value: str, today: date) -> str | None:
    if not _has_value(value):
        return "Last name is required."
    if len(value.strip()) > NAME_MAX_LENGTH:
        return "Last name is too long."
    return None


def _check_email(value: str, today: date) -> str | None:
    if not _has_value(value):
        return "Email is required."
    if not _EMAIL_RE.fullmatch(value.strip()):
        return "Enter a valid email address."
    return None


def _check_phone(value: str, today: date) -> str | None:
    if not _has_value(value):
        return "Phone is required."
    digits = _digits_only(value)
    if not PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
        return "Enter a valid phone number."
    return None


def _check_dob(value: str, today: date) -> str | None:
    if not _has_value(value):
        return "Date of birth is required."
    cleaned = value.strip()
    if not _ISO_DATE_RE.fullmatch(cleaned):
        return "Enter a valid date of birth."
    try:
        born = date.fromisoformat(cleaned)
    except ValueError:
        # e.g. 2001-02-30
        return "Enter a valid date of birth."
    if born > today:
        return "Date of birth cannot be in the future."
    if born < _years_before(today, MAX_AGE_YEARS):
        return "Enter a valid date of birth."
    return None


def _check_gender(value: str, today: date) -> str | None:
    if not _has_value(value):
        return "Gender is required."
    return None


def _check_street(value: str, today: date) -> str | None:
    if not _has_value(value):
        return "Street address is required."
    if len(value.strip()) > STREET_MAX_LENGTH:
        return "Street address is too long."
    return None


def _required(message: str) -> Callable[[str, date], str | None]:
    def check(value: str, today: date) -> str | None:
        return None if _has_value(value) else message

    return check


def _check_postal_code(value: str, today: date) -> str | None:
    if not _has_value(value):
        return "Postal code is required."
    if not POSTAL_CODE_MIN_LENGTH <= len(value.strip()) <= POSTAL_CODE_MAX_LENGTH:
        return "Enter a valid postal code."
    return None


_VALIDATORS: dict[str, Callable[[str, date], str | None]] = {
    "first_name": _check_first_name,
    "middle_name": _check_middle_name,
    "last_name": _check_last_name,
    "email": _check_email,
    "phone": _check_phone,
    "dob": _check_dob,
    "gender": _check_gender,
    "address_street": _check_street,
    "address_city": _required("City is required."),
    "address_region": _required("State/Province is required."),
    "address_postal_code": _check_postal_code,
    "address_country": _required("Country is required."),
}


def validate_identity(identity: IdentityForm, *, today: date | None = None) -> IdentityFieldErrors:
    """Validate every identity field.

    Args:
        identity: Current form snapshot.
        today: Reference day for date-of-birth bounds (defaults to ``date.today()``).

    Returns:
        Mapping of field name (snake_case attribute) to message; empty when valid.
    """
    reference = today or date.today()
    errors: IdentityFieldErrors = {}
    for field_name, check in _VALIDATORS.items():
        message = check(getattr(identity, field_name), reference)
        if message is not None:
            errors[field_name] = message
    return errors


def is_identity_valid(identity: IdentityForm, *, today: date | None = None) -> bool:
    return not validate_identity(identity, today=today)


def format_full_name(identity: IdentityForm) -> str:
    """Join first, middle and last name, skipping blanks."""
    parts = (identity.first_name, identity.middle_name, identity.last_name)
    return " ".join(part.strip() for part in parts if part.strip())


def format_physical_address(identity: IdentityForm) -> str:
    """Render the identity address as a single comma-separated line."""
    locality = ", ".join(
        part
        for part in (
            identity.address_city.strip(),
            identity.address_region.strip(),
            identity.address_postal_code.strip(),
        )
        if part
    )
    parts = (identity.address_street.strip(), locality, identity.address_country.strip())
    return ", ".join(part for part in parts if part)
