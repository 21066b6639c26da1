"""Custom exception hierarchy for pyfleet."""

from __future__ import annotations

from collections.abc import Iterable


class FleetError(Exception):
    """Base exception for all pyfleet errors."""


class FleetConfigError(FleetError):
    """Invalid or missing configuration."""


class PermissionDeniedError(FleetError):
    """The acting user's role lacks the capability for the operation."""

    def __init__(
        self,
        message: str,
        *,
        actor: str = "",
        capability: str = "",
    ) -> None:
        self.actor = actor
        self.capability = capability
        super().__init__(message)


class RecordValidationError(FleetError):
    """One or more field constraints were violated.

    Every violation found is carried in :attr:`messages`, not only the
    first one, so a form can report them all at once.
    """

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages: list[str] = list(messages)
        super().__init__(", ".join(self.messages))


class RecordNotFoundError(FleetError):
    """The operation targets a record id that is not in the store."""

    def __init__(self, record_id: int) -> None:
        self.record_id = record_id
        super().__init__(f"Vehicle {record_id} not found")


class CommentTooLongError(FleetError):
    """Comment text exceeds the configured length cap."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Comment too long. Maximum {limit} characters.")


class PersistenceError(FleetError):
    """Reading or writing the persisted record collection failed."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class UnknownActorError(FleetError):
    """No actor with the given name exists in the roster."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown user: {name!r}")
