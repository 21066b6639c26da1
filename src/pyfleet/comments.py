"""Comments on vehicle records."""

from __future__ import annotations

import logging

from pyfleet._constants import MAX_COMMENT_LENGTH
from pyfleet.exceptions import CommentTooLongError, RecordValidationError
from pyfleet.models.actor import Actor
from pyfleet.models.record import Comment, HistoryAction, HistoryEntry, VehicleRecord
from pyfleet.store import RecordStore, require

_logger = logging.getLogger(__name__)


class CommentService:
    """Adds permission-gated, length-capped comments through a :class:`RecordStore`."""

    def __init__(self, store: RecordStore, *, max_length: int = MAX_COMMENT_LENGTH) -> None:
        self._store = store
        self._max_length = max_length

    @property
    def max_length(self) -> int:
        return self._max_length

    def add_comment(self, actor: Actor, record_id: int, text: str) -> VehicleRecord:
        """Append a comment and its history entry in a single store write."""
        require(actor, "can_add_comments")
        if len(text) > self._max_length:
            raise CommentTooLongError(len(text), self._max_length)
        if not text.strip():
            raise RecordValidationError(["Comment must not be empty"])

        current = self._store.get(record_id)
        now = self._store.now()
        record = current.with_comment(
            Comment(text=text, author=actor.name, timestamp=now),
            HistoryEntry(action=HistoryAction.COMMENT_ADDED, author=actor.name, timestamp=now),
        )
        self._store.replace(record)
        _logger.debug("Comment added to vehicle %s by %s (%d chars)", record_id, actor.name, len(text))
        return record
