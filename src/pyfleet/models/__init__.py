"""Data models for fleet records, actors and view state."""

from pyfleet.models._base import FleetBaseModel, UtcTimestamp, ensure_utc
from pyfleet.models.actor import DEFAULT_ROSTER, Actor, Capabilities, Role, Roster, TeamMember, capabilities
from pyfleet.models.record import Comment, HistoryAction, HistoryEntry, VehicleFields, VehicleRecord
from pyfleet.models.view import FeedbackLevel, IntentResult, Section, Tab, ViewState, VisibleSlice

__all__ = [
    "DEFAULT_ROSTER",
    "Actor",
    "Capabilities",
    "Comment",
    "FeedbackLevel",
    "FleetBaseModel",
    "HistoryAction",
    "HistoryEntry",
    "IntentResult",
    "Role",
    "Roster",
    "Section",
    "Tab",
    "TeamMember",
    "UtcTimestamp",
    "VehicleFields",
    "VehicleRecord",
    "ViewState",
    "VisibleSlice",
    "capabilities",
    "ensure_utc",
]
