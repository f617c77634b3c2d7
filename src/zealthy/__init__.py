"""
Zealthy - Configurable user onboarding.

Pieces:
- Onboarding wizard: account creation followed by two admin-configurable pages
- Admin panel: assigns form components to onboarding pages
- Data dashboard: lists users and their onboarding progress
"""

__version__ = "1.0.0"
