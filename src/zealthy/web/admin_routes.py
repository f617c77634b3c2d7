"""
Admin panel API endpoints.

The admin edits a draft page config client-side: each edit posts the
current draft plus the operation and gets back the new draft (or a
notice explaining the rejection). Saving replaces the stored config.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from onboarding.components import ConfigError, PageAssignments, get_component_options
from zealthy.db import client as db
from zealthy.models import ComponentType
from zealthy.web.notices import Notice, notice_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


# =============================================================================
# Request/Response Models
# =============================================================================


class ConfigPayload(BaseModel):
    """A full page -> components mapping."""
    pages: dict[int, list[ComponentType]]


class MoveRequest(ConfigPayload):
    component: ComponentType
    from_page: int
    to_page: int


class PlacementRequest(ConfigPayload):
    """Add or remove a component on one page."""
    component: ComponentType
    page: int


class AdminConfigResponse(BaseModel):
    pages: dict[int, list[ComponentType]]
    unassigned: list[ComponentType]
    components: list[dict]
    notice: Notice | None = None


# =============================================================================
# Helpers
# =============================================================================


def to_response(assignments: PageAssignments, notice: Notice | None = None) -> AdminConfigResponse:
    return AdminConfigResponse(
        pages=assignments.to_config(),
        unassigned=assignments.unassigned(),
        components=get_component_options(),
        notice=notice,
    )


def load_draft(payload: ConfigPayload) -> PageAssignments:
    try:
        return PageAssignments(payload.pages)
    except ConfigError as e:
        raise notice_error(400, e.title, e.description)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/config", response_model=AdminConfigResponse)
async def get_config() -> AdminConfigResponse:
    """Current stored config."""
    config = await db.get_onboarding_config()
    return to_response(PageAssignments(config))


@router.put("/config", response_model=AdminConfigResponse)
async def save_config(payload: ConfigPayload) -> AdminConfigResponse:
    """Replace the stored config. Every page needs at least one component."""
    assignments = load_draft(payload)

    errors = assignments.validate()
    if errors:
        logger.info(f"Rejected config: {errors}")
        raise notice_error(
            400,
            "Invalid configuration",
            "Each page must have at least one component.",
            errors=errors,
        )

    if not await db.update_onboarding_config(assignments.to_config()):
        raise notice_error(500, "Error", "Failed to save configuration. Please try again.")

    return to_response(
        assignments,
        notice=Notice(
            title="Configuration saved",
            description="Onboarding flow has been updated successfully.",
        ),
    )


@router.post("/config/move", response_model=AdminConfigResponse)
async def move_component(request: MoveRequest) -> AdminConfigResponse:
    assignments = load_draft(request)
    try:
        assignments.move(request.component, request.from_page, request.to_page)
    except ConfigError as e:
        raise notice_error(400, e.title, e.description)
    return to_response(assignments)


@router.post("/config/add", response_model=AdminConfigResponse)
async def add_component(request: PlacementRequest) -> AdminConfigResponse:
    assignments = load_draft(request)
    try:
        assignments.add(request.component, request.page)
    except ConfigError as e:
        raise notice_error(400, e.title, e.description)
    return to_response(assignments)


@router.post("/config/remove", response_model=AdminConfigResponse)
async def remove_component(request: PlacementRequest) -> AdminConfigResponse:
    assignments = load_draft(request)
    try:
        assignments.remove(request.component, request.page)
    except ConfigError as e:
        raise notice_error(400, e.title, e.description)
    return to_response(assignments)
