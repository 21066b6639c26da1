"""Base model shared by every persisted pyfleet model.

:class:`FleetBaseModel` provides:

* ``alias_generator=to_camel`` so the persisted document uses camelCase
  keys (``registrationNumber``) while Python code uses snake_case.
* ``frozen=True``: records, comments and history entries are values.
  A mutation builds a new instance instead of editing one in place.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UtcTimestamp = Annotated[datetime, AfterValidator(ensure_utc)]
"""Annotated type that normalizes timestamps to timezone-aware UTC."""


class FleetBaseModel(BaseModel):
    """Base for immutable, camelCase-serialized models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_document(self) -> dict[str, Any]:
        """JSON-compatible dict with camelCase keys, as persisted."""
        return self.model_dump(mode="json", by_alias=True)
