"""
Onboarding Forms - Step Validation.

Step 1 collects account credentials. Steps 2 and 3 render whichever
components the admin assigned to that page, and each component brings
its own required fields:
- about_me: non-blank text
- address: street, city, state and zip all filled
- birthdate: a selected date that is not in the future
"""

import logging
import re
from datetime import date

from pydantic import BaseModel, Field, field_validator

from zealthy.models import ComponentType

logger = logging.getLogger(__name__)


EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6
# bcrypt only hashes the first 72 bytes and refuses longer input
MAX_PASSWORD_BYTES = 72
ABOUT_ME_MAX_LENGTH = 500

ERROR_MESSAGES = {
    "email": "Please enter a valid email address",
    "password": f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
    "password_too_long": f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
    "about_me": "Please tell us about yourself",
    "about_me_too_long": f"About me must be {ABOUT_ME_MAX_LENGTH} characters or less",
    "address": "Please fill in all address fields",
    "birthdate": "Please select your birth date",
    "birthdate_future": "Birth date cannot be in the future",
}


# =============================================================================
# Form Models
# =============================================================================


class AccountForm(BaseModel):
    """Step 1: account credentials."""

    email: str = ""
    password: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str | None) -> str:
        return (v or "").strip()


class Address(BaseModel):
    """Address component. Flattened into four user columns on save."""

    street_address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""

    @field_validator("street_address", "city", "state", "zip", mode="before")
    @classmethod
    def none_to_blank(cls, v: str | None) -> str:
        return v or ""

    @property
    def is_complete(self) -> bool:
        return all(part.strip() for part in (self.street_address, self.city, self.state, self.zip))

    @property
    def is_empty(self) -> bool:
        return not any(part.strip() for part in (self.street_address, self.city, self.state, self.zip))


class StepData(BaseModel):
    """Field values collected on pages 2 and 3."""

    about_me: str | None = Field(default=None)
    address: Address | None = None
    birthdate: date | None = None

    @field_validator("birthdate", mode="before")
    @classmethod
    def blank_birthdate(cls, v):
        """Date inputs post an empty string when cleared."""
        if v == "":
            return None
        return v


# =============================================================================
# Validation
# =============================================================================


def validate_account(form: AccountForm) -> dict[str, str]:
    """Validate step 1 credentials. Returns errors keyed by field."""
    errors = {}

    if not form.email or not EMAIL_PATTERN.search(form.email):
        errors["email"] = ERROR_MESSAGES["email"]
    if not form.password or len(form.password) < MIN_PASSWORD_LENGTH:
        errors["password"] = ERROR_MESSAGES["password"]
    elif len(form.password.encode()) > MAX_PASSWORD_BYTES:
        errors["password"] = ERROR_MESSAGES["password_too_long"]

    return errors


def validate_component(
    component: ComponentType,
    data: StepData,
    today: date | None = None,
) -> str | None:
    """Return the error message for one component, or None if it passes."""
    if component == ComponentType.ABOUT_ME:
        if not data.about_me or not data.about_me.strip():
            return ERROR_MESSAGES["about_me"]
        if len(data.about_me) > ABOUT_ME_MAX_LENGTH:
            return ERROR_MESSAGES["about_me_too_long"]

    elif component == ComponentType.ADDRESS:
        if data.address is None or not data.address.is_complete:
            return ERROR_MESSAGES["address"]

    elif component == ComponentType.BIRTHDATE:
        if data.birthdate is None:
            return ERROR_MESSAGES["birthdate"]
        if data.birthdate > (today or date.today()):
            return ERROR_MESSAGES["birthdate_future"]

    return None


def validate_page(
    components: list[ComponentType],
    data: StepData,
    today: date | None = None,
) -> dict[str, str]:
    """Validate every component assigned to a page."""
    errors = {}
    for component in components:
        message = validate_component(ComponentType(component), data, today=today)
        if message:
            errors[ComponentType(component).value] = message
    return errors


def validate_step(
    step: int,
    config: dict[int, list[ComponentType]],
    account: AccountForm | None = None,
    data: StepData | None = None,
    today: date | None = None,
) -> tuple[bool, dict[str, str]]:
    """
    Validate the fields required to leave a step.

    Args:
        step: Step being submitted (1-3; anything else has no form)
        config: Page -> components mapping
        account: Step 1 credentials
        data: Step 2/3 collected values
        today: Reference date for birthdate checks (defaults to today)

    Returns:
        (is_valid, errors keyed by field)
    """
    if step == 1:
        errors = validate_account(account or AccountForm())
    elif step in (2, 3):
        errors = validate_page(config.get(step, []), data or StepData(), today=today)
    else:
        errors = {}

    if errors:
        logger.info(f"Step {step} validation failed: {sorted(errors)}")

    return (len(errors) == 0, errors)
