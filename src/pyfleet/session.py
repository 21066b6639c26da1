"""Interactive session: turns view intents into core operations.

A :class:`FleetSession` holds the per-user screen state (active actor,
search term, responsible filter, page, tab, form mode) and forwards each
intent to the record store, the comment service or the query engine.
Every intent returns an :class:`IntentResult`; core errors never escape
past this layer.

Usage::

    session = FleetSession.open(FleetConfig.from_env(), view=my_view)
    session.select_actor("Tiago")
    session.create_record({"brand": "Fiat", "model": "Uno", "year": 2010,
                           "color": "red", "registration_number": "ABC1D23"})
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Protocol

from pyfleet._constants import (
    MSG_COMMENTED,
    MSG_CONFIRM_DELETE,
    MSG_CREATED,
    MSG_DELETED,
    MSG_PERMISSION_DENIED,
    MSG_UPDATED,
)
from pyfleet.comments import CommentService
from pyfleet.config import FleetConfig
from pyfleet.exceptions import FleetError, PermissionDeniedError, RecordValidationError
from pyfleet.models.actor import DEFAULT_ROSTER, Actor, Roster
from pyfleet.models.record import VehicleFields
from pyfleet.models.view import FeedbackLevel, IntentResult, Section, Tab, ViewState, VisibleSlice
from pyfleet.query import change_page, total_pages, visible_records, visible_slice
from pyfleet.store import RecordStore, require

_logger = logging.getLogger(__name__)

FieldsInput = VehicleFields | Mapping[str, Any]


class FleetView(Protocol):
    """Presentation collaborator driven by a :class:`FleetSession`."""

    def render(self, state: ViewState) -> None: ...

    def show_feedback(self, message: str, level: FeedbackLevel) -> None: ...

    def confirm(self, message: str) -> bool: ...


class FleetSession:
    """One user's interaction with the fleet records."""

    def __init__(
        self,
        store: RecordStore,
        *,
        roster: Roster = DEFAULT_ROSTER,
        config: FleetConfig | None = None,
        comments: CommentService | None = None,
        view: FleetView | None = None,
    ) -> None:
        self._store = store
        self._roster = roster
        self._config = config or FleetConfig()
        self._comments = comments or CommentService(store, max_length=self._config.max_comment_length)
        self._view = view
        self._actor: Actor = roster.default
        self._search_term = ""
        self._responsible = ""
        self._page = 1
        self._tab = Tab.VEHICLES
        self._section = Section.LISTING
        self._editing_id: int | None = None

    @classmethod
    def open(
        cls,
        config: FleetConfig,
        *,
        roster: Roster = DEFAULT_ROSTER,
        view: FleetView | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> FleetSession:
        """Build the store described by *config*, load it and start a session."""
        store_kwargs: dict[str, Any] = {"key": config.storage_key, "min_year": config.min_year}
        if clock is not None:
            store_kwargs["clock"] = clock
        store = RecordStore(config.open_storage(), **store_kwargs)
        session = cls(store, roster=roster, config=config, view=view)
        session.load()
        return session

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def actor(self) -> Actor:
        return self._actor

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def page(self) -> int:
        return self._page

    @property
    def editing_id(self) -> int | None:
        return self._editing_id

    def attach_view(self, view: FleetView | None) -> None:
        self._view = view

    def state(self) -> ViewState:
        """Snapshot of everything the view renders."""
        current = self._current_slice()
        editing_record = None
        if self._editing_id is not None and self._editing_id in self._store:
            editing_record = self._store.get(self._editing_id)
        return ViewState(
            actor=self._actor,
            capabilities=self._actor.capabilities,
            slice=current,
            team=tuple(self._roster.team()),
            tab=self._tab,
            section=self._section,
            editing_id=self._editing_id,
            editing_record=editing_record,
            search_term=self._search_term,
            responsible_filter=self._responsible,
            roster=tuple(self._roster.names()),
        )

    def _current_slice(self) -> VisibleSlice:
        current = visible_slice(
            self._actor,
            self._store.records(),
            self._search_term,
            self._responsible,
            self._page,
            self._config.page_size,
        )
        self._page = current.page
        return current

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _run(self, action: Callable[[], IntentResult]) -> IntentResult:
        try:
            result = action()
        except RecordValidationError as exc:
            result = IntentResult.failure(str(exc), errors=tuple(exc.messages))
        except PermissionDeniedError:
            result = IntentResult.failure(MSG_PERMISSION_DENIED)
        except FleetError as exc:
            result = IntentResult.failure(str(exc))
        self._notify(result)
        return result

    def _notify(self, result: IntentResult) -> None:
        if self._view is None:
            return
        self._view.render(self.state())
        if result.message:
            self._view.show_feedback(result.message, result.level)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def load(self) -> IntentResult:
        """Restore persisted records into the store."""

        def action() -> IntentResult:
            records = self._store.load_all()
            _logger.debug("Session loaded %d records", len(records))
            return IntentResult.success()

        return self._run(action)

    def select_actor(self, name: str) -> IntentResult:
        def action() -> IntentResult:
            self._actor = self._roster.get(name)
            self._page = 1
            if not self._actor.can_edit():
                self._clear_editing()
            _logger.info("Active user is now %s (%s)", self._actor.name, self._actor.role)
            return IntentResult.success()

        return self._run(action)

    def create_record(self, fields: FieldsInput) -> IntentResult:
        return self._run(lambda: self._create(fields))

    def edit_record(self, record_id: int, fields: FieldsInput) -> IntentResult:
        return self._run(lambda: self._update(record_id, fields))

    def begin_edit(self, record_id: int) -> IntentResult:
        """Switch the form to edit mode for *record_id*."""

        def action() -> IntentResult:
            require(self._actor, "can_edit")
            record = self._store.get(record_id)
            self._editing_id = record_id
            self._tab = Tab.VEHICLES
            self._section = Section.REGISTER
            return IntentResult.success(record=record)

        return self._run(action)

    def cancel_edit(self) -> IntentResult:
        def action() -> IntentResult:
            self._clear_editing()
            return IntentResult.success()

        return self._run(action)

    def submit_form(self, fields: FieldsInput) -> IntentResult:
        """Create or update, depending on whether the form is in edit mode."""
        editing_id = self._editing_id
        if editing_id is None:
            return self._run(lambda: self._create(fields))
        return self._run(lambda: self._update(editing_id, fields))

    def delete_record(self, record_id: int) -> IntentResult:
        def action() -> IntentResult:
            require(self._actor, "can_delete")
            self._store.get(record_id)
            if self._view is not None and not self._view.confirm(MSG_CONFIRM_DELETE):
                return IntentResult.failure("Deletion cancelled", level=FeedbackLevel.WARNING)
            self._store.delete(self._actor, record_id)
            if self._editing_id == record_id:
                self._clear_editing()
            return IntentResult.success(MSG_DELETED)

        return self._run(action)

    def add_comment(self, record_id: int, text: str) -> IntentResult:
        def action() -> IntentResult:
            record = self._comments.add_comment(self._actor, record_id, text)
            return IntentResult.success(MSG_COMMENTED, record=record)

        return self._run(action)

    def set_filter(self, search_term: str = "", responsible: str = "") -> IntentResult:
        def action() -> IntentResult:
            self._search_term = search_term
            self._responsible = responsible
            self._page = 1
            return IntentResult.success()

        return self._run(action)

    def set_page(self, page: int) -> IntentResult:
        def action() -> IntentResult:
            visible = visible_records(self._actor, self._store.records(), self._search_term, self._responsible)
            pages = total_pages(len(visible), self._config.page_size)
            new_page = change_page(self._page, page, pages)
            if new_page != page:
                return IntentResult.failure(f"Page {page} does not exist (1-{pages})", level=FeedbackLevel.WARNING)
            self._page = new_page
            return IntentResult.success()

        return self._run(action)

    def switch_tab(self, tab: Tab | str) -> IntentResult:
        def action() -> IntentResult:
            try:
                selected = Tab(tab)
            except ValueError:
                return IntentResult.failure(f"Unknown tab: {tab}", level=FeedbackLevel.WARNING)
            self._tab = selected
            self._section = Section.LISTING if selected is Tab.VEHICLES else Section.TEAM
            return IntentResult.success()

        return self._run(action)

    def show_section(self, section: Section | str) -> IntentResult:
        def action() -> IntentResult:
            try:
                selected = Section(section)
            except ValueError:
                return IntentResult.failure(f"Unknown section: {section}", level=FeedbackLevel.WARNING)
            self._section = selected
            self._tab = Tab.TEAM if selected is Section.TEAM else Tab.VEHICLES
            return IntentResult.success()

        return self._run(action)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _create(self, fields: FieldsInput) -> IntentResult:
        record = self._store.create(self._actor, fields)
        return IntentResult.success(MSG_CREATED, record=record)

    def _update(self, record_id: int, fields: FieldsInput) -> IntentResult:
        record = self._store.update(self._actor, record_id, fields)
        if record_id == self._editing_id:
            self._clear_editing()
            self._section = Section.LISTING
        return IntentResult.success(MSG_UPDATED, record=record)

    def _clear_editing(self) -> None:
        self._editing_id = None
        if self._section is Section.REGISTER:
            self._section = Section.LISTING
