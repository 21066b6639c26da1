"""Vehicle record, comments and the audit history."""

from __future__ import annotations

from enum import StrEnum

from pydantic import ConfigDict, Field, field_validator

from pyfleet.models._base import FleetBaseModel, UtcTimestamp


class HistoryAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    COMMENT_ADDED = "comment_added"


class HistoryEntry(FleetBaseModel):
    """One line of a record's audit trail."""

    action: HistoryAction
    author: str
    timestamp: UtcTimestamp


class Comment(FleetBaseModel):
    """A free-text annotation left on a record."""

    text: str
    author: str
    timestamp: UtcTimestamp


class VehicleFields(FleetBaseModel):
    """The user-editable part of a vehicle record.

    Accepts form input: surrounding whitespace is stripped and ``year``
    may arrive as a numeric string.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    brand: str
    model: str
    year: int
    color: str
    registration_number: str = Field(min_length=1)


class VehicleRecord(VehicleFields):
    """A vehicle in the fleet.

    ``comments`` and ``history`` are tuples on a frozen model: once written
    they cannot be changed in place. :meth:`with_fields` and
    :meth:`with_comment` return new records whose history is the old
    history plus exactly one entry.
    """

    id: int
    owner: str
    comments: tuple[Comment, ...] = ()
    history: tuple[HistoryEntry, ...] = ()

    @field_validator("id")
    @classmethod
    def _positive_id(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("id must be positive")
        return value

    def to_fields(self) -> VehicleFields:
        """The editable fields, e.g. to pre-fill an edit form."""
        return VehicleFields(
            brand=self.brand,
            model=self.model,
            year=self.year,
            color=self.color,
            registration_number=self.registration_number,
        )

    def with_fields(self, fields: VehicleFields, entry: HistoryEntry) -> VehicleRecord:
        return self.model_copy(
            update={
                **fields.model_dump(),
                "history": (*self.history, entry),
            }
        )

    def with_comment(self, comment: Comment, entry: HistoryEntry) -> VehicleRecord:
        return self.model_copy(
            update={
                "comments": (*self.comments, comment),
                "history": (*self.history, entry),
            }
        )
