"""
Zealthy Onboarding.

Step logic for the onboarding wizard, kept separate from the web and
database layers:

1. Account - email and password
2. Page two - admin-assigned components
3. Page three - admin-assigned components
4. Complete
"""

from .components import PageAssignments, ConfigError
from .forms import AccountForm, Address, StepData, validate_step
from .state import OnboardingSession, OnboardingStep, StepResult

__all__ = [
    "PageAssignments",
    "ConfigError",
    "AccountForm",
    "Address",
    "StepData",
    "validate_step",
    "OnboardingSession",
    "OnboardingStep",
    "StepResult",
]
