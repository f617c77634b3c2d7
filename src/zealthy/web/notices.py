"""
User-facing notices.

The frontend shows these as toasts. Failures are raised as HTTPException
with the notice in `detail`, so clients read the same shape either way.
"""

from typing import Literal

from fastapi import HTTPException
from pydantic import BaseModel


class Notice(BaseModel):
    """Toast shown to the user."""
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


GENERIC_ERROR = "Something went wrong. Please try again."


def notice_error(status_code: int, title: str, description: str, **extra) -> HTTPException:
    """Build an HTTPException whose detail carries a destructive notice."""
    notice = Notice(title=title, description=description, variant="destructive")
    return HTTPException(
        status_code=status_code,
        detail={"notice": notice.model_dump(), **extra},
    )
