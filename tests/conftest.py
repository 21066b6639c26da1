from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from pyfleet.models.actor import DEFAULT_ROSTER, Actor
from pyfleet.models.view import FeedbackLevel, ViewState
from pyfleet.storage import MemoryStorage
from pyfleet.store import RecordStore


@dataclass
class FakeClock:
    """Starts at a fixed instant and advances one second per reading."""

    current: datetime = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)
    step: timedelta = timedelta(seconds=1)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@dataclass
class FakeView:
    confirm_answer: bool = True
    renders: list[ViewState] = field(default_factory=list)
    feedback: list[tuple[str, FeedbackLevel]] = field(default_factory=list)
    confirmations: list[str] = field(default_factory=list)

    def render(self, state: ViewState) -> None:
        self.renders.append(state)

    def show_feedback(self, message: str, level: FeedbackLevel) -> None:
        self.feedback.append((message, level))

    def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        return self.confirm_answer


def vehicle_fields(registration: str = "ABC1D23", **overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "brand": "Fiat",
        "model": "Uno",
        "year": 2015,
        "color": "red",
        "registration_number": registration,
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage, clock: FakeClock) -> RecordStore:
    return RecordStore(storage, clock=clock)


@pytest.fixture
def admin() -> Actor:
    return DEFAULT_ROSTER.get("Felipe")


@pytest.fixture
def operator() -> Actor:
    return DEFAULT_ROSTER.get("Tiago")


@pytest.fixture
def consultant() -> Actor:
    return DEFAULT_ROSTER.get("Pedro")


@pytest.fixture
def make_fields() -> Any:
    return vehicle_fields


@pytest.fixture
def view() -> FakeView:
    return FakeView()
