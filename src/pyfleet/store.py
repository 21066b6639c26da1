"""In-memory record store with whole-collection persistence.

This is the only component allowed to change the record collection.
Each successful mutation serializes the full collection to the storage
collaborator before the new collection replaces the in-memory one, so a
failed write leaves the store exactly as it was.

Not thread-safe. The registration uniqueness check and the insert that
follows it are a check-then-act pair; sharing a store between threads
would require holding one lock around both.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import TypeAdapter

from pyfleet._constants import MIN_YEAR, STORAGE_KEY
from pyfleet.exceptions import PermissionDeniedError, PersistenceError, RecordNotFoundError, RecordValidationError
from pyfleet.models.actor import Actor
from pyfleet.models.record import HistoryAction, HistoryEntry, VehicleFields, VehicleRecord
from pyfleet.storage import KeyValueStorage
from pyfleet.validation import check_fields, coerce_fields

_logger = logging.getLogger(__name__)

_DOCUMENT = TypeAdapter(list[VehicleRecord])


def _utcnow() -> datetime:
    return datetime.now(UTC)


def require(actor: Actor, capability: str) -> None:
    """Raise :class:`PermissionDeniedError` unless *actor* has *capability*."""
    if not getattr(actor.capabilities, capability):
        _logger.warning("Denied %s for %s (%s)", capability, actor.name, actor.role)
        raise PermissionDeniedError(
            f"{actor.name} ({actor.role}) is not allowed to perform this action",
            actor=actor.name,
            capability=capability,
        )


def dump_records(records: list[VehicleRecord]) -> str:
    """Serialize records to the persisted JSON document."""
    return _DOCUMENT.dump_json(records, by_alias=True).decode("utf-8")


def parse_records(document: str) -> list[VehicleRecord]:
    """Parse a persisted JSON document back into records."""
    return _DOCUMENT.validate_json(document)


class RecordStore:
    """Owns the vehicle records and every mutation applied to them."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = STORAGE_KEY,
        min_year: int = MIN_YEAR,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._key = key
        self._min_year = min_year
        self._clock = clock
        self._records: dict[int, VehicleRecord] = {}
        self._last_id = 0
        self._load_failed = False

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __iter__(self) -> Iterator[VehicleRecord]:
        return iter(list(self._records.values()))

    def records(self) -> list[VehicleRecord]:
        """All records in insertion order."""
        return list(self._records.values())

    def get(self, record_id: int) -> VehicleRecord:
        try:
            return self._records[record_id]
        except KeyError:
            raise RecordNotFoundError(record_id) from None

    def now(self) -> datetime:
        return self._clock()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load_all(self) -> list[VehicleRecord]:
        """Replace the in-memory collection with the persisted one.

        A missing document leaves the store empty. After a failed load the
        store refuses writes until a load succeeds, so the unreadable
        document is never overwritten.
        """
        self._load_failed = True
        try:
            document = self._storage.get(self._key)
        except OSError as exc:
            _logger.warning("Reading records under %r failed", self._key)
            raise PersistenceError(f"Could not read records: {exc}", key=self._key) from exc
        if document is None:
            _logger.debug("No persisted records under %r", self._key)
            self._records = {}
            self._load_failed = False
            return []
        try:
            loaded = parse_records(document)
        except ValueError as exc:
            raise PersistenceError(f"Persisted records under {self._key!r} are unreadable: {exc}", key=self._key) from exc

        records: dict[int, VehicleRecord] = {}
        registrations: set[str] = set()
        for record in loaded:
            if record.id in records:
                raise PersistenceError(f"Persisted records repeat id {record.id}", key=self._key)
            if record.registration_number in registrations:
                raise PersistenceError(
                    f"Persisted records repeat registration number {record.registration_number!r}", key=self._key
                )
            records[record.id] = record
            registrations.add(record.registration_number)

        self._records = records
        self._last_id = max(self._last_id, max(self._records, default=0))
        self._load_failed = False
        _logger.debug("Loaded %d records from %r", len(self._records), self._key)
        return self.records()

    def _commit(self, records: dict[int, VehicleRecord]) -> None:
        if self._load_failed:
            raise PersistenceError(
                f"Persisted records under {self._key!r} could not be loaded; refusing to overwrite them",
                key=self._key,
            )
        document = dump_records(list(records.values()))
        try:
            self._storage.set(self._key, document)
        except PersistenceError:
            _logger.warning("Persisting %d records under %r failed", len(records), self._key)
            raise
        except OSError as exc:
            _logger.warning("Persisting %d records under %r failed", len(records), self._key)
            raise PersistenceError(f"Could not persist records: {exc}", key=self._key) from exc
        self._records = records

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _next_id(self) -> int:
        candidate = int(self._clock().timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def _validate(self, fields: VehicleFields, *, exclude_id: int | None = None) -> None:
        errors = check_fields(
            fields,
            self._records.values(),
            current_year=self._clock().year,
            min_year=self._min_year,
            exclude_id=exclude_id,
        )
        if errors:
            raise RecordValidationError(errors)

    def create(self, actor: Actor, fields: VehicleFields | Mapping[str, Any]) -> VehicleRecord:
        """Register a new vehicle owned by *actor*."""
        require(actor, "can_edit")
        parsed = coerce_fields(fields)
        self._validate(parsed)

        now = self._clock()
        record = VehicleRecord(
            **parsed.model_dump(),
            id=self._next_id(),
            owner=actor.name,
            comments=(),
            history=(HistoryEntry(action=HistoryAction.CREATED, author=actor.name, timestamp=now),),
        )
        self._commit({**self._records, record.id: record})
        _logger.debug("Created vehicle %s (%s) by %s", record.id, record.registration_number, actor.name)
        return record

    def update(self, actor: Actor, record_id: int, fields: VehicleFields | Mapping[str, Any]) -> VehicleRecord:
        """Replace the editable fields of a record, keeping owner and comments."""
        require(actor, "can_edit")
        current = self.get(record_id)
        parsed = coerce_fields(fields)
        self._validate(parsed, exclude_id=record_id)

        entry = HistoryEntry(action=HistoryAction.UPDATED, author=actor.name, timestamp=self._clock())
        record = current.with_fields(parsed, entry)
        self._commit({**self._records, record_id: record})
        _logger.debug("Updated vehicle %s by %s", record_id, actor.name)
        return record

    def delete(self, actor: Actor, record_id: int) -> None:
        """Remove a record permanently."""
        require(actor, "can_delete")
        self.get(record_id)
        remaining = {rid: record for rid, record in self._records.items() if rid != record_id}
        self._commit(remaining)
        _logger.debug("Deleted vehicle %s by %s", record_id, actor.name)

    def replace(self, record: VehicleRecord) -> None:
        """Store a new version of an existing record.

        Used by collaborators that build the new version themselves (comments).
        """
        self.get(record.id)
        self._commit({**self._records, record.id: record})
