"""pyfleet - Permission-aware vehicle fleet record manager."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfleet")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfleet.comments import CommentService
from pyfleet.config import FleetConfig
from pyfleet.exceptions import (
    CommentTooLongError,
    FleetConfigError,
    FleetError,
    PermissionDeniedError,
    PersistenceError,
    RecordNotFoundError,
    RecordValidationError,
    UnknownActorError,
)
from pyfleet.models import (
    DEFAULT_ROSTER,
    Actor,
    Capabilities,
    Comment,
    FeedbackLevel,
    HistoryAction,
    HistoryEntry,
    IntentResult,
    Role,
    Roster,
    Section,
    Tab,
    TeamMember,
    VehicleFields,
    VehicleRecord,
    ViewState,
    VisibleSlice,
    capabilities,
)
from pyfleet.query import visible_slice
from pyfleet.session import FleetSession, FleetView
from pyfleet.storage import FileStorage, KeyValueStorage, MemoryStorage
from pyfleet.store import RecordStore

__all__ = [
    "__version__",
    "DEFAULT_ROSTER",
    "Actor",
    "Capabilities",
    "Comment",
    "CommentService",
    "CommentTooLongError",
    "FeedbackLevel",
    "FileStorage",
    "FleetConfig",
    "FleetConfigError",
    "FleetError",
    "FleetSession",
    "FleetView",
    "HistoryAction",
    "HistoryEntry",
    "IntentResult",
    "KeyValueStorage",
    "MemoryStorage",
    "PermissionDeniedError",
    "PersistenceError",
    "RecordNotFoundError",
    "RecordStore",
    "RecordValidationError",
    "Role",
    "Roster",
    "Section",
    "Tab",
    "TeamMember",
    "UnknownActorError",
    "VehicleFields",
    "VehicleRecord",
    "ViewState",
    "VisibleSlice",
    "capabilities",
    "visible_slice",
]
