"""Field constraint checks for vehicle records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from pyfleet.exceptions import RecordValidationError
from pyfleet.models.record import VehicleFields, VehicleRecord


def coerce_fields(fields: VehicleFields | Mapping[str, Any]) -> VehicleFields:
    """Turn form input into :class:`VehicleFields`.

    Type errors are reported as :class:`RecordValidationError` with one
    message per offending field.
    """
    if isinstance(fields, VehicleRecord):
        return fields.to_fields()
    if isinstance(fields, VehicleFields):
        return fields
    try:
        return VehicleFields.model_validate(dict(fields))
    except ValidationError as exc:
        messages = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"]) or "fields"
            messages.append(f"{location}: {error['msg']}")
        raise RecordValidationError(messages) from exc


def check_fields(
    fields: VehicleFields,
    existing: Iterable[VehicleRecord],
    *,
    current_year: int,
    min_year: int,
    exclude_id: int | None = None,
) -> list[str]:
    """Return every constraint violation of *fields*; empty when valid.

    ``exclude_id`` removes the record being updated from the uniqueness
    check so a record never collides with itself.
    """
    errors: list[str] = []

    max_year = current_year + 1
    if not min_year <= fields.year <= max_year:
        errors.append(f"Year must be between {min_year} and {max_year}")

    if any(
        record.registration_number == fields.registration_number
        for record in existing
        if record.id != exclude_id
    ):
        errors.append("Registration number already exists")

    return errors
