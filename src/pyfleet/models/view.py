"""Value objects pushed to, and returned for, the presentation layer."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from pyfleet.models.actor import Actor, Capabilities, TeamMember
from pyfleet.models.record import VehicleRecord


class Tab(StrEnum):
    VEHICLES = "vehicles"
    TEAM = "team"


class Section(StrEnum):
    REGISTER = "register"
    LISTING = "listing"
    TEAM = "team"


class FeedbackLevel(StrEnum):
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


class VisibleSlice(BaseModel):
    """One page of the records an actor may see."""

    model_config = ConfigDict(frozen=True)

    items: tuple[VehicleRecord, ...] = ()
    page: int = 1
    total_pages: int = 1
    total_items: int = 0

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


class IntentResult(BaseModel):
    """Outcome of a user intent.

    Failures carry a user-facing ``message``; nothing is raised past the
    session boundary.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    message: str = ""
    level: FeedbackLevel = FeedbackLevel.SUCCESS
    record: VehicleRecord | None = None
    errors: tuple[str, ...] = ()

    @classmethod
    def success(cls, message: str = "", *, record: VehicleRecord | None = None) -> IntentResult:
        return cls(ok=True, message=message, level=FeedbackLevel.SUCCESS, record=record)

    @classmethod
    def failure(
        cls,
        message: str,
        *,
        level: FeedbackLevel = FeedbackLevel.DANGER,
        errors: tuple[str, ...] = (),
    ) -> IntentResult:
        return cls(ok=False, message=message, level=level, errors=errors)


class ViewState(BaseModel):
    """Everything a view needs to render the current screen."""

    model_config = ConfigDict(frozen=True)

    actor: Actor
    capabilities: Capabilities
    slice: VisibleSlice
    team: tuple[TeamMember, ...] = ()
    tab: Tab = Tab.VEHICLES
    section: Section = Section.LISTING
    editing_id: int | None = None
    editing_record: VehicleRecord | None = None
    search_term: str = ""
    responsible_filter: str = ""
    roster: tuple[str, ...] = ()
