"""Data dashboard endpoints: every user and how far they got."""

from fastapi import APIRouter
from pydantic import BaseModel

from onboarding.state import get_step_label
from zealthy.db import client as db
from zealthy.models import User

router = APIRouter(prefix="/data", tags=["data"])


class UserRow(User):
    step_label: str


class UserStats(BaseModel):
    total: int
    completed: int
    in_progress: int
    completion_rate: int  # Percent, rounded


class UsersResponse(BaseModel):
    users: list[UserRow]
    stats: UserStats


def compute_stats(users: list[User]) -> UserStats:
    total = len(users)
    completed = sum(1 for u in users if u.completed)
    return UserStats(
        total=total,
        completed=completed,
        in_progress=total - completed,
        completion_rate=round(completed / total * 100) if total else 0,
    )


@router.get("/users", response_model=UsersResponse)
async def list_users() -> UsersResponse:
    """All users, newest first, with progress labels."""
    users = await db.get_all_users()
    rows = [
        UserRow(**u.model_dump(), step_label=get_step_label(u.current_step, u.completed))
        for u in users
    ]
    return UsersResponse(users=rows, stats=compute_stats(users))
