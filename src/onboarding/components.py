"""
Onboarding Components - Page Assignment Store.

Admins decide which form components appear on onboarding pages 2 and 3.
The store enforces two rules across every edit:
- A page is never left empty
- A component sits on at most one page
"""

import logging

from zealthy.models import ONBOARDING_PAGES, ComponentType

logger = logging.getLogger(__name__)


# =============================================================================
# Component Metadata
# =============================================================================

ALL_COMPONENTS: list[ComponentType] = list(ComponentType)

COMPONENT_LABELS = {
    ComponentType.ABOUT_ME: "About Me",
    ComponentType.ADDRESS: "Address Information",
    ComponentType.BIRTHDATE: "Date of Birth",
}

COMPONENT_DESCRIPTIONS = {
    ComponentType.ABOUT_ME: "Large text area for users to describe themselves",
    ComponentType.ADDRESS: "Address collection fields (street, city, state, zip)",
    ComponentType.BIRTHDATE: "Date picker for birth date selection",
}

PAGE_EMPTY_MESSAGE = "Each page must have at least one component."


def get_component_options() -> list[dict]:
    """Component metadata for admin panel rendering."""
    return [
        {
            "id": c.value,
            "label": COMPONENT_LABELS[c],
            "description": COMPONENT_DESCRIPTIONS[c],
        }
        for c in ALL_COMPONENTS
    ]


class ConfigError(ValueError):
    """An edit was rejected. Carries a user-facing title and description."""

    def __init__(self, description: str, title: str = "Cannot remove component"):
        super().__init__(description)
        self.title = title
        self.description = description


# =============================================================================
# Page Assignments
# =============================================================================


def _coerce_component(component: ComponentType | str) -> ComponentType:
    try:
        return ComponentType(component)
    except ValueError:
        raise ConfigError(f"Unknown component: {component}", title="Invalid component")


def _coerce_page(page: int | str) -> int:
    try:
        page_number = int(page)
    except (TypeError, ValueError):
        raise ConfigError(f"Unknown page: {page}", title="Invalid page")
    if page_number not in ONBOARDING_PAGES:
        raise ConfigError(f"Unknown page: {page}", title="Invalid page")
    return page_number


class PageAssignments:
    """
    Mapping of page number (2 or 3) to an ordered list of components.

    Edits return nothing and mutate in place; a rejected edit raises
    ConfigError and leaves the assignments untouched.
    """

    def __init__(self, pages: dict | None = None):
        self._pages: dict[int, list[ComponentType]] = {page: [] for page in ONBOARDING_PAGES}

        for page, components in (pages or {}).items():
            page_number = _coerce_page(page)
            for component in components:
                c = _coerce_component(component)
                if c not in self._pages[page_number]:
                    self._pages[page_number].append(c)

    def to_config(self) -> dict[int, list[ComponentType]]:
        """Copy of the mapping, safe to hand to the store."""
        return {page: list(components) for page, components in self._pages.items()}

    def components_for(self, page: int) -> list[ComponentType]:
        return list(self._pages[_coerce_page(page)])

    def page_of(self, component: ComponentType | str) -> int | None:
        """Page hosting the component, or None if unassigned."""
        c = _coerce_component(component)
        for page, components in self._pages.items():
            if c in components:
                return page
        return None

    def unassigned(self) -> list[ComponentType]:
        """Components on no page, in declaration order."""
        assigned = {c for components in self._pages.values() for c in components}
        return [c for c in ALL_COMPONENTS if c not in assigned]

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def move(self, component: ComponentType | str, from_page: int, to_page: int) -> None:
        """Move a component between pages, appending it to the destination."""
        c = _coerce_component(component)
        source = _coerce_page(from_page)
        target = _coerce_page(to_page)

        if c not in self._pages[source]:
            raise ConfigError(
                f"{COMPONENT_LABELS[c]} is not on page {source}.",
                title="Cannot move component",
            )
        if source == target:
            return
        if len(self._pages[source]) <= 1:
            raise ConfigError(PAGE_EMPTY_MESSAGE, title="Cannot move component")

        self._pages[source].remove(c)
        if c not in self._pages[target]:
            self._pages[target].append(c)
        logger.debug(f"Moved {c.value} from page {source} to page {target}")

    def add(self, component: ComponentType | str, page: int) -> None:
        """Place a component on a page, pulling it off any other page first."""
        c = _coerce_component(component)
        target = _coerce_page(page)

        current = self.page_of(c)
        if current == target:
            return
        if current is not None and len(self._pages[current]) <= 1:
            raise ConfigError(PAGE_EMPTY_MESSAGE, title="Cannot add component")

        if current is not None:
            self._pages[current].remove(c)
        self._pages[target].append(c)
        logger.debug(f"Added {c.value} to page {target}")

    def remove(self, component: ComponentType | str, page: int) -> None:
        """Unassign a component. Rejected if it would empty the page."""
        c = _coerce_component(component)
        target = _coerce_page(page)

        if len(self._pages[target]) <= 1:
            raise ConfigError(PAGE_EMPTY_MESSAGE)
        if c not in self._pages[target]:
            raise ConfigError(f"{COMPONENT_LABELS[c]} is not on page {target}.")

        self._pages[target].remove(c)
        logger.debug(f"Removed {c.value} from page {target}")

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> list[str]:
        """Return a list of invariant violations (empty when valid)."""
        errors = []

        for page, components in self._pages.items():
            if not components:
                errors.append(f"Page {page} has no components")

        seen: set[ComponentType] = set()
        for components in self._pages.values():
            for c in components:
                if c in seen:
                    errors.append(f"{COMPONENT_LABELS[c]} is on more than one page")
                seen.add(c)

        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validate()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PageAssignments):
            return NotImplemented
        return self._pages == other._pages

    def __repr__(self) -> str:
        pages = {page: [c.value for c in components] for page, components in self._pages.items()}
        return f"PageAssignments({pages})"
