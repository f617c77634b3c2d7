"""
Zealthy - Database Client.

Provides Supabase access for users and onboarding config.
"""

from zealthy.db.client import get_client

__all__ = [
    "get_client",
]
