"""
Zealthy - Supabase Client.

Low-level database access. All queries go through here.

Every operation catches store failures, logs them and returns a failure
signal (None, False, [] or the default config) instead of raising.
"""

import logging
from datetime import datetime, timezone

import bcrypt
from supabase import Client, create_client

from zealthy.config import settings
from zealthy.models import (
    ONBOARDING_PAGES,
    DEFAULT_PAGE_COMPONENTS,
    ComponentType,
    OnboardingConfigRow,
    User,
    default_onboarding_config,
)

logger = logging.getLogger(__name__)

# Supabase refuses an unfiltered delete; no row carries the nil UUID
_NIL_UUID = "00000000-0000-0000-0000-000000000000"

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


# =============================================================================
# User Operations
# =============================================================================


async def create_user(email: str, password: str) -> User | None:
    """Create a user at step 1. The password is stored as a bcrypt hash."""
    client = get_client()

    try:
        password_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()
        response = (
            client.table("users")
            .insert({"email": email, "password_hash": password_hash})
            .execute()
        )
        return User(**response.data[0])
    except Exception as e:
        logger.error(f"Error creating user: {e}")
        return None


async def get_user_by_email(email: str) -> User | None:
    """Get a user by email, or None if missing or unreadable."""
    client = get_client()

    try:
        response = client.table("users").select("*").eq("email", email).limit(1).execute()
        if not response.data:
            return None
        return User(**response.data[0])
    except Exception as e:
        logger.warning(f"Error fetching user {email}: {e}")
        return None


async def update_user(user_id: str, updates: dict) -> User | None:
    """Update user fields and stamp updated_at."""
    client = get_client()
    data = {**updates, "updated_at": datetime.now(timezone.utc).isoformat()}

    try:
        response = client.table("users").update(data).eq("id", user_id).execute()
        if not response.data:
            logger.error(f"Error updating user {user_id}: no row returned")
            return None
        return User(**response.data[0])
    except Exception as e:
        logger.error(f"Error updating user {user_id}: {e}")
        return None


async def get_all_users() -> list[User]:
    """List all users, newest first."""
    client = get_client()

    try:
        response = client.table("users").select("*").order("created_at", desc=True).execute()
        return [User(**row) for row in response.data or []]
    except Exception as e:
        logger.error(f"Error fetching users: {e}")
        return []


# =============================================================================
# Onboarding Config Operations
# =============================================================================


async def get_onboarding_config() -> dict[int, list[ComponentType]]:
    """
    Read the page -> components mapping.

    Falls back to the default config when the table can't be read, and
    backfills the default component into any page that comes back empty.
    """
    client = get_client()

    try:
        response = client.table("onboarding_config").select("*").order("page_number").execute()
        rows = [OnboardingConfigRow(**row) for row in response.data or []]
    except Exception as e:
        logger.error(f"Error fetching config: {e}")
        return default_onboarding_config()

    config: dict[int, list[ComponentType]] = {page: [] for page in ONBOARDING_PAGES}
    for row in rows:
        components = config.setdefault(row.page_number, [])
        if row.component_name not in components:
            components.append(row.component_name)

    for page, component in DEFAULT_PAGE_COMPONENTS.items():
        if not config[page]:
            config[page].append(component)

    return config


async def update_onboarding_config(config: dict[int, list[ComponentType]]) -> bool:
    """
    Replace the page -> components mapping.

    Deletes every existing row, then inserts the new ones. Not atomic: a
    failed insert leaves the table empty and readers fall back to defaults.
    """
    client = get_client()

    rows = [
        {"page_number": page, "component_name": ComponentType(component).value}
        for page, components in config.items()
        for component in components
    ]

    try:
        client.table("onboarding_config").delete().neq("id", _NIL_UUID).execute()
        client.table("onboarding_config").insert(rows).execute()
    except Exception as e:
        logger.error(f"Error updating config: {e}")
        return False

    logger.info(f"Onboarding config saved: {len(rows)} assignments")
    return True
