"""
Onboarding API Endpoints.

Drives the wizard: account creation, resuming, submitting pages 2 and 3,
and stepping back. The users table holds progress, so every request
rebuilds an OnboardingSession from the stored user record.
"""

import logging

import bcrypt
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from zealthy.db import client as db
from zealthy.models import ComponentType, User
from zealthy.web.notices import GENERIC_ERROR, Notice, notice_error

from .components import get_component_options
from .forms import AccountForm, StepData, validate_step
from .state import (
    PAGE_TITLES,
    TOTAL_STEPS,
    OnboardingSession,
    OnboardingStep,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


WELCOME_BACK = Notice(title="Welcome back!", description="We've restored your progress.")
COMPLETED = Notice(title="Welcome!", description="Your onboarding has been completed successfully.")


# =============================================================================
# Request/Response Models
# =============================================================================


class AccountRequest(BaseModel):
    """Step 1: account credentials."""
    email: str = ""
    password: str = ""


class StepRequest(BaseModel):
    """Steps 2 and 3: collected component values."""
    email: str
    step: int | None = Field(default=None, ge=2, le=3)  # Step the client is showing
    data: StepData = Field(default_factory=StepData)


class BackRequest(BaseModel):
    """Go back one page."""
    email: str
    step: int | None = Field(default=None, ge=1, le=3)


class ConfigResponse(BaseModel):
    """Page layout for rendering the wizard."""
    pages: dict[int, list[ComponentType]]
    components: list[dict]


class StepResponse(BaseModel):
    """Where the user is now and what to render."""
    success: bool
    current_step: int
    completed: bool
    title: str | None = None
    components: list[ComponentType] = []
    total_steps: int = TOTAL_STEPS
    session: dict
    notice: Notice | None = None


# =============================================================================
# Helpers
# =============================================================================


def build_step_response(
    session: OnboardingSession,
    config: dict[int, list[ComponentType]],
    notice: Notice | None = None,
) -> StepResponse:
    return StepResponse(
        success=True,
        current_step=int(session.current_step),
        completed=session.is_complete,
        title=PAGE_TITLES.get(session.current_step),
        components=session.components_for_step(config),
        session=session.to_dict(),
        notice=notice,
    )


def password_matches(user: User, password: str) -> bool:
    """Check a submitted password against the stored bcrypt hash."""
    if not user.password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), user.password_hash.encode())
    except ValueError as e:
        logger.warning(f"Unreadable password hash for user {user.id}: {e}")
        return False


def validation_error(errors: dict[str, str]) -> HTTPException:
    return HTTPException(status_code=422, detail={"errors": errors})


async def load_active_user(email: str) -> User:
    """Fetch a user whose onboarding is still in progress."""
    user = await db.get_user_by_email(email)
    if user is None:
        raise notice_error(404, "Not found", "No onboarding in progress for this email.")
    if user.completed:
        raise notice_error(409, "Already completed", "Your onboarding has already been completed.")
    return user


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/config", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Components assigned to pages 2 and 3."""
    config = await db.get_onboarding_config()
    return ConfigResponse(pages=config, components=get_component_options())


@router.get("/users/{email}", response_model=StepResponse)
async def resume_onboarding(email: str) -> StepResponse:
    """Restore an unfinished onboarding by email."""
    user = await load_active_user(email)
    config = await db.get_onboarding_config()
    return build_step_response(OnboardingSession.from_user(user), config, notice=WELCOME_BACK)


@router.post("/account", response_model=StepResponse)
async def submit_account(request: AccountRequest) -> StepResponse:
    """
    Step 1: create the account (or pick up an existing one) and move to step 2.

    An existing user who is already past step 1 is resumed where they left off;
    one who has finished gets a 409.
    """
    account = AccountForm(email=request.email, password=request.password)
    is_valid, errors = validate_step(OnboardingStep.ACCOUNT, {}, account=account)
    if not is_valid:
        raise validation_error(errors)

    config = await db.get_onboarding_config()
    user = await db.get_user_by_email(account.email)

    if user is None:
        user = await db.create_user(account.email, account.password)
        if user is None:
            raise notice_error(500, "Error", "Failed to create account. Please try again.")
        logger.info(f"Created user {user.id}")
    else:
        if not password_matches(user, account.password):
            raise notice_error(401, "Error", "Invalid email or password")
        if user.completed:
            raise notice_error(409, "Already completed", "Your onboarding has already been completed.")
        if user.current_step > OnboardingStep.ACCOUNT:
            return build_step_response(OnboardingSession.from_user(user), config, notice=WELCOME_BACK)

    session = OnboardingSession.from_user(user)
    result = session.advance(config, account=account)
    if not result.success:
        raise validation_error(result.errors)

    updated = await db.update_user(user.id, result.updates)
    if updated is None:
        raise notice_error(500, "Error", GENERIC_ERROR)

    return build_step_response(OnboardingSession.from_user(updated), config)


@router.post("/step", response_model=StepResponse)
async def submit_step(request: StepRequest) -> StepResponse:
    """Steps 2 and 3: validate assigned components, save them and advance."""
    user = await load_active_user(request.email)
    session = OnboardingSession.from_user(user)

    if request.step is not None:
        if request.step > session.current_step:
            raise notice_error(400, "Error", f"Step {request.step} is not available yet.")
        session.current_step = OnboardingStep(request.step)

    if session.current_step == OnboardingStep.ACCOUNT:
        raise notice_error(400, "Error", "Please create your account first.")

    session.merge(request.data)
    config = await db.get_onboarding_config()

    result = session.advance(config)
    if not result.success:
        raise validation_error(result.errors)

    updated = await db.update_user(user.id, result.updates)
    if updated is None:
        raise notice_error(500, "Error", GENERIC_ERROR)

    logger.info(f"User {user.id} advanced to step {result.next_step}")

    session = OnboardingSession.from_user(updated)
    notice = COMPLETED if session.is_complete else None
    return build_step_response(session, config, notice=notice)


@router.post("/back", response_model=StepResponse)
async def go_back(request: BackRequest) -> StepResponse:
    """Previous page. Nothing is saved; the next submit overwrites progress."""
    user = await load_active_user(request.email)
    session = OnboardingSession.from_user(user)

    if request.step is not None and request.step < session.current_step:
        session.current_step = OnboardingStep(request.step)
    session.back()

    config = await db.get_onboarding_config()
    return build_step_response(session, config)
