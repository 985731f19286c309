# This project was developed with assistance from AI tools.
"""Identity step request/response schemas."""

from pydantic import Field

from . import CamelModel


class IdentityForm(CamelModel):
    """Applicant identity snapshot collected on the first wizard step.

    Every field is free text; rules live in ``services.identity_validation``.
    """

    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    dob: str = Field(default="", description="ISO date, YYYY-MM-DD.")
    gender: str = ""
    address_street: str = ""
    address_city: str = ""
    address_region: str = ""
    address_postal_code: str = ""
    address_country: str = ""


# Fields the register endpoint refuses to accept empty (middle name is optional)
IDENTITY_REQUIRED_FIELDS: tuple[str, ...] = (
    "email",
    "phone",
    "first_name",
    "last_name",
    "dob",
    "gender",
    "address_street",
    "address_city",
    "address_region",
    "address_postal_code",
    "address_country",
)


class RegisterResult(CamelModel):
    """Response after registering an applicant."""

    applicant_id: str
    otp_channels: list[str] = Field(default_factory=list)
