"""Derive the record list an actor sees: visibility, search, filter, pages.

Visibility is decided by role before anything else:

* admins see every record, narrowed by the search term and the
  responsible (owner) filter;
* operators see only the records they own, and search/filter do not apply;
* consultants see no records at all.

The consultant rule is kept as the application has always behaved, even
though the role is described as view-only.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from pyfleet._constants import DEFAULT_PAGE_SIZE
from pyfleet.models.actor import Actor, Role
from pyfleet.models.record import VehicleRecord
from pyfleet.models.view import VisibleSlice


def _searchable_values(record: VehicleRecord) -> tuple[str, ...]:
    return (
        str(record.id),
        record.brand,
        record.model,
        str(record.year),
        record.color,
        record.registration_number,
        record.owner,
    )


def matches_search(record: VehicleRecord, term: str) -> bool:
    """Case-insensitive substring match against any scalar field."""
    needle = term.lower()
    if not needle:
        return True
    return any(needle in value.lower() for value in _searchable_values(record))


def visible_records(
    actor: Actor,
    records: Iterable[VehicleRecord],
    search_term: str = "",
    responsible: str = "",
) -> list[VehicleRecord]:
    """Records *actor* may see, in store order, before pagination."""
    if actor.role is Role.CONSULTANT:
        return []
    if actor.role is Role.OPERATOR:
        return [record for record in records if record.owner == actor.name]
    return [
        record
        for record in records
        if matches_search(record, search_term) and (not responsible or record.owner == responsible)
    ]


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages for *count* items; never less than one."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(count / page_size))


def change_page(current: int, requested: int, pages: int) -> int:
    """Return *requested* when it is a valid page, else stay on *current*."""
    if 1 <= requested <= pages:
        return requested
    return current


def paginate(
    items: list[VehicleRecord],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> VisibleSlice:
    """Cut one page out of *items*.

    A page past the end (the list shrank since it was chosen) is clamped
    to the last page, and anything below 1 to the first.
    """
    pages = total_pages(len(items), page_size)
    page = min(max(page, 1), pages)
    start = (page - 1) * page_size
    return VisibleSlice(
        items=tuple(items[start : start + page_size]),
        page=page,
        total_pages=pages,
        total_items=len(items),
    )


def visible_slice(
    actor: Actor,
    records: Iterable[VehicleRecord],
    search_term: str = "",
    responsible: str = "",
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> VisibleSlice:
    """The page of records *actor* sees for the given search and filter."""
    return paginate(visible_records(actor, records, search_term, responsible), page, page_size)
