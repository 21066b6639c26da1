from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pyfleet.models.record import Comment, HistoryAction, HistoryEntry, VehicleFields, VehicleRecord

_TS = datetime(2026, 1, 1, tzinfo=UTC)


def _record() -> VehicleRecord:
    return VehicleRecord(
        id=1,
        brand="Fiat",
        model="Uno",
        year=2015,
        color="red",
        registration_number="ABC1D23",
        owner="Felipe",
        history=(HistoryEntry(action=HistoryAction.CREATED, author="Felipe", timestamp=_TS),),
    )


def test_fields_strip_whitespace_and_coerce_year() -> None:
    fields = VehicleFields.model_validate(
        {"brand": " Fiat ", "model": "Uno", "year": "2015", "color": "red", "registration_number": " X1 "}
    )
    assert fields.brand == "Fiat"
    assert fields.year == 2015
    assert fields.registration_number == "X1"


def test_empty_registration_rejected() -> None:
    with pytest.raises(ValidationError):
        VehicleFields(brand="a", model="b", year=2000, color="c", registration_number="   ")


def test_record_is_frozen() -> None:
    record = _record()
    with pytest.raises(ValidationError):
        record.year = 2000  # type: ignore[misc]


def test_with_comment_returns_new_record_and_keeps_original() -> None:
    record = _record()
    comment = Comment(text="ok", author="Tiago", timestamp=_TS)
    entry = HistoryEntry(action=HistoryAction.COMMENT_ADDED, author="Tiago", timestamp=_TS)

    updated = record.with_comment(comment, entry)

    assert updated is not record
    assert record.comments == ()
    assert len(record.history) == 1
    assert updated.comments == (comment,)
    assert [h.action for h in updated.history] == [HistoryAction.CREATED, HistoryAction.COMMENT_ADDED]


def test_with_fields_replaces_fields_and_appends_history() -> None:
    record = _record()
    entry = HistoryEntry(action=HistoryAction.UPDATED, author="Tiago", timestamp=_TS)
    fields = VehicleFields(brand="VW", model="Gol", year=2020, color="blue", registration_number="ZZZ9Z99")

    updated = record.with_fields(fields, entry)

    assert updated.to_fields() == fields
    assert updated.owner == "Felipe"
    assert updated.history == (*record.history, entry)


def test_document_uses_camel_case_keys() -> None:
    document = _record().to_document()
    assert document["registrationNumber"] == "ABC1D23"
    assert document["history"][0]["action"] == "created"
    json.dumps(document)


def test_naive_timestamps_become_utc() -> None:
    entry = HistoryEntry(action=HistoryAction.CREATED, author="a", timestamp=datetime(2026, 1, 1))
    assert entry.timestamp.tzinfo is not None
    assert entry.timestamp == _TS


def test_record_parses_from_camel_case_document() -> None:
    record = _record()
    assert VehicleRecord.model_validate(record.to_document()) == record
