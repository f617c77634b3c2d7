"""
Zealthy - Database Entity Models.

These models map to the Supabase tables `users` and `onboarding_config`.
They are used for:
- Type-safe database operations
- API request/response validation
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ComponentType(str, Enum):
    """Form sections an admin can place on onboarding pages 2 and 3."""
    ABOUT_ME = "about_me"
    ADDRESS = "address"
    BIRTHDATE = "birthdate"


# =============================================================================
# Core Entities
# =============================================================================


class User(BaseModel):
    """
    A user going through onboarding.

    Created at step 1, updated on every step advance, terminal once
    `completed` is set (current_step == 4).
    """

    id: str
    email: str
    password_hash: str | None = Field(default=None, exclude=True)

    # Profile fields collected on pages 2 and 3
    about_me: str | None = None
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    birthdate: date | None = None

    current_step: int = Field(default=1, ge=1, le=4)
    completed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OnboardingConfigRow(BaseModel):
    """One (page, component) assignment row in onboarding_config."""

    id: str | None = None
    page_number: int = Field(ge=2, le=3)
    component_name: ComponentType
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Page Configuration
# =============================================================================

# Configurable onboarding pages (page 1 is always the account form)
ONBOARDING_PAGES = (2, 3)

# Used when the config table is unreadable or a page comes back empty
DEFAULT_PAGE_COMPONENTS: dict[int, ComponentType] = {
    2: ComponentType.ABOUT_ME,
    3: ComponentType.ADDRESS,
}


def default_onboarding_config() -> dict[int, list[ComponentType]]:
    """Fresh copy of the fallback page config."""
    return {page: [component] for page, component in DEFAULT_PAGE_COMPONENTS.items()}
