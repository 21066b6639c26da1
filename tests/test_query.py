from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pyfleet.models.actor import Actor
from pyfleet.models.record import HistoryAction, HistoryEntry, VehicleRecord
from pyfleet.query import change_page, matches_search, paginate, total_pages, visible_records, visible_slice

_TS = datetime(2026, 1, 1, tzinfo=UTC)


def _record(index: int, owner: str = "Felipe", **overrides: object) -> VehicleRecord:
    values: dict[str, object] = {
        "id": index + 1,
        "brand": "Fiat",
        "model": "Uno",
        "year": 2010,
        "color": "red",
        "registration_number": f"REG{index:04d}",
        "owner": owner,
        "history": (HistoryEntry(action=HistoryAction.CREATED, author=owner, timestamp=_TS),),
    }
    values.update(overrides)
    return VehicleRecord.model_validate(values)


@pytest.fixture
def fleet() -> list[VehicleRecord]:
    owners = ["Tiago", "Felipe", "Tiago", "Felipe", "Felipe", "Tiago", "Felipe", "Felipe", "Felipe", "Felipe"]
    return [_record(i, owner) for i, owner in enumerate(owners)]


# ------------------------------------------------------------------
# Visibility
# ------------------------------------------------------------------


class TestVisibility:
    @pytest.mark.parametrize("term", ["", "fiat", "nothing-matches", "REG0001"])
    def test_operator_sees_only_own_records_regardless_of_search(
        self, fleet: list[VehicleRecord], operator: Actor, term: str
    ) -> None:
        result = visible_slice(operator, fleet, search_term=term, responsible="Felipe")
        assert result.total_items == 3
        assert all(record.owner == "Tiago" for record in result.items)

    @pytest.mark.parametrize(("term", "owner"), [("", ""), ("fiat", ""), ("", "Felipe"), ("REG", "Tiago")])
    def test_consultant_always_sees_nothing(
        self, fleet: list[VehicleRecord], consultant: Actor, term: str, owner: str
    ) -> None:
        result = visible_slice(consultant, fleet, search_term=term, responsible=owner)
        assert result.items == ()
        assert result.total_items == 0
        assert result.total_pages == 1

    def test_admin_sees_everything_without_filters(self, fleet: list[VehicleRecord], admin: Actor) -> None:
        assert visible_records(admin, fleet) == fleet

    def test_admin_search_is_case_insensitive(self, admin: Actor) -> None:
        records = [_record(0, brand="Volkswagen"), _record(1, brand="Fiat")]
        assert visible_records(admin, records, "VOLKS") == [records[0]]

    def test_admin_responsible_filter_is_exact(self, fleet: list[VehicleRecord], admin: Actor) -> None:
        result = visible_records(admin, fleet, responsible="Tiago")
        assert len(result) == 3
        assert visible_records(admin, fleet, responsible="Tia") == []

    def test_admin_search_and_filter_combine(self, fleet: list[VehicleRecord], admin: Actor) -> None:
        result = visible_records(admin, fleet, "REG0002", "Tiago")
        assert [record.registration_number for record in result] == ["REG0002"]
        assert visible_records(admin, fleet, "REG0002", "Felipe") == []


def test_matches_search_covers_year_owner_and_color() -> None:
    record = _record(0, owner="Tiago", color="Silver", year=1998)
    assert matches_search(record, "1998")
    assert matches_search(record, "tiago")
    assert matches_search(record, "silv")
    assert matches_search(record, "")
    assert not matches_search(record, "   ")
    assert not matches_search(record, " tiago")
    assert not matches_search(record, "diesel")


# ------------------------------------------------------------------
# Pagination
# ------------------------------------------------------------------


class TestPagination:
    def test_twelve_records_make_three_pages(self) -> None:
        records = [_record(i) for i in range(12)]
        assert paginate(records, 1).items == tuple(records[0:5])
        last = paginate(records, 3)
        assert last.items == tuple(records[10:12])
        assert last.total_pages == 3
        assert last.has_next is False
        assert last.has_previous is True

    def test_page_outside_range_is_a_no_op(self) -> None:
        assert change_page(3, 4, 3) == 3
        assert change_page(2, 0, 3) == 2
        assert change_page(1, 3, 3) == 3

    def test_empty_list_has_one_page(self) -> None:
        assert total_pages(0) == 1
        assert paginate([], 1).total_pages == 1

    def test_page_past_end_is_clamped(self) -> None:
        records = [_record(i) for i in range(6)]
        result = paginate(records, 5)
        assert result.page == 2
        assert result.items == (records[5],)

    def test_custom_page_size(self) -> None:
        records = [_record(i) for i in range(7)]
        assert total_pages(len(records), 3) == 3
        assert paginate(records, 3, page_size=3).items == (records[6],)

    def test_non_positive_page_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            total_pages(3, 0)
