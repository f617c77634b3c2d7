"""
Onboarding State Management.

Tracks a user's progress through the wizard and the field values collected
so far. The user record in the `users` table is the source of truth: a
session is rebuilt from it on every request and produces the column
updates that advancing a step should write back.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum

from zealthy.models import ComponentType, User

from .forms import AccountForm, Address, StepData, validate_step


class OnboardingStep(IntEnum):
    """Wizard steps. Values match users.current_step."""
    ACCOUNT = 1      # Email & password
    PAGE_TWO = 2     # First configurable page
    PAGE_THREE = 3   # Second configurable page
    COMPLETE = 4     # Done


STEP_LABELS = {
    OnboardingStep.ACCOUNT: "Email & Password",
    OnboardingStep.PAGE_TWO: "Personal Info",
    OnboardingStep.PAGE_THREE: "Additional Details",
}

PAGE_TITLES = {
    OnboardingStep.ACCOUNT: "Create Your Account",
    OnboardingStep.PAGE_TWO: "Personal Information",
    OnboardingStep.PAGE_THREE: "Additional Details",
}

# Steps shown in the progress indicator (COMPLETE has no form)
TOTAL_STEPS = 3


def get_step_label(step: int, completed: bool = False) -> str:
    """Progress label shown on the data dashboard."""
    if completed:
        return "Completed"
    try:
        return STEP_LABELS.get(OnboardingStep(step), "Unknown")
    except ValueError:
        return "Unknown"


def get_next_step(step: OnboardingStep) -> OnboardingStep:
    """Step that follows `step`. COMPLETE is terminal."""
    if step >= OnboardingStep.COMPLETE:
        return OnboardingStep.COMPLETE
    return OnboardingStep(step + 1)


@dataclass
class StepResult:
    """Outcome of trying to advance a step."""
    success: bool
    errors: dict[str, str] = field(default_factory=dict)
    updates: dict = field(default_factory=dict)  # Columns to write to users
    next_step: OnboardingStep | None = None


@dataclass
class OnboardingSession:
    """
    One user's pass through the wizard.

    Holds the current step and collected form data. Nothing here touches
    the database; callers persist StepResult.updates themselves.
    """
    user_id: str = ""
    email: str = ""
    current_step: OnboardingStep = OnboardingStep.ACCOUNT
    completed: bool = False
    form_data: StepData = field(default_factory=StepData)

    @classmethod
    def from_user(cls, user: User) -> "OnboardingSession":
        """Restore progress from a stored user record."""
        address = Address(
            street_address=user.street_address,
            city=user.city,
            state=user.state,
            zip=user.zip,
        )
        return cls(
            user_id=user.id,
            email=user.email,
            current_step=OnboardingStep(user.current_step),
            completed=user.completed,
            form_data=StepData(
                about_me=user.about_me,
                address=None if address.is_empty else address,
                birthdate=user.birthdate,
            ),
        )

    @property
    def is_complete(self) -> bool:
        return self.completed or self.current_step == OnboardingStep.COMPLETE

    def merge(self, data: StepData) -> None:
        """Overlay submitted values on what was collected so far."""
        submitted = data.model_dump(exclude_unset=True)
        if submitted:
            self.form_data = self.form_data.model_copy(
                update={key: getattr(data, key) for key in submitted}
            )

    def components_for_step(self, config: dict[int, list[ComponentType]]) -> list[ComponentType]:
        """Components rendered on the current step (empty for steps 1 and 4)."""
        return list(config.get(int(self.current_step), []))

    def collected_updates(self) -> dict:
        """Non-empty collected values as users-table columns."""
        updates: dict = {}
        data = self.form_data

        if data.about_me:
            updates["about_me"] = data.about_me
        if data.address is not None and not data.address.is_empty:
            updates.update(data.address.model_dump())
        if data.birthdate is not None:
            updates["birthdate"] = data.birthdate.isoformat()

        return updates

    def validate(
        self,
        config: dict[int, list[ComponentType]],
        account: AccountForm | None = None,
        today: date | None = None,
    ) -> tuple[bool, dict[str, str]]:
        return validate_step(
            int(self.current_step),
            config,
            account=account,
            data=self.form_data,
            today=today,
        )

    def advance(
        self,
        config: dict[int, list[ComponentType]],
        account: AccountForm | None = None,
        today: date | None = None,
    ) -> StepResult:
        """
        Validate the current step and compute the updates for the next one.

        Does not move current_step; call `apply` once the updates are saved.
        """
        if self.is_complete:
            return StepResult(success=False, errors={"step": "Onboarding is already complete"})

        is_valid, errors = self.validate(config, account=account, today=today)
        if not is_valid:
            return StepResult(success=False, errors=errors)

        next_step = get_next_step(self.current_step)
        updates: dict = {"current_step": int(next_step)}

        if self.current_step != OnboardingStep.ACCOUNT:
            updates.update(self.collected_updates())
        if next_step == OnboardingStep.COMPLETE:
            updates["completed"] = True

        return StepResult(success=True, updates=updates, next_step=next_step)

    def apply(self, result: StepResult) -> None:
        """Move to the step a successful StepResult points at."""
        if result.success and result.next_step is not None:
            self.current_step = result.next_step
            self.completed = result.next_step == OnboardingStep.COMPLETE

    def back(self) -> OnboardingStep:
        """Step back one page (never below step 1). Not persisted."""
        if self.current_step > OnboardingStep.ACCOUNT and not self.is_complete:
            self.current_step = OnboardingStep(self.current_step - 1)
        return self.current_step

    def to_dict(self) -> dict:
        """Serialize for API responses."""
        return {
            "user_id": self.user_id,
            "email": self.email,
            "current_step": int(self.current_step),
            "completed": self.completed,
            "form_data": self.form_data.model_dump(mode="json"),
        }
