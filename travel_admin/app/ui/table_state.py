from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from travel_admin.app.domain.models.record import Record

SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class SortEntry:
    field_key: str
    direction: SortDirection


@dataclass
class PaginationState:
    page_index: int = 0
    page_size: int = 10


class TableStateEngine:
    """Sorting, column filters and pagination over a read-only collection.

    Rows are derived on demand: filters (ANDed) first, then a stable sort
    where ties keep collection order, then the page slice. The page index is
    clamped back into range whenever the filtered set shrinks.
    """

    def __init__(self, rows: Sequence[Record] = (), page_size: int = 10) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._rows: tuple[Record, ...] = tuple(rows)
        self.sort_spec: tuple[SortEntry, ...] = ()
        self.filter_spec: dict[str, str] = {}
        self.pagination = PaginationState(page_index=0, page_size=page_size)

    @property
    def rows(self) -> tuple[Record, ...]:
        return self._rows

    def set_collection(self, rows: Sequence[Record]) -> None:
        self._rows = tuple(rows)
        self._clamp_page_index()

    def reset(self) -> None:
        self.sort_spec = ()
        self.filter_spec = {}
        self.pagination.page_index = 0

    # sorting

    def sort_direction(self, field_key: str) -> SortDirection | None:
        entry = next((item for item in self.sort_spec if item.field_key == field_key), None)
        return entry.direction if entry else None

    def set_sort(self, field_key: str, multi: bool = False) -> SortDirection | None:
        current = self.sort_direction(field_key)
        following: SortDirection | None = {None: "asc", "asc": "desc", "desc": None}[current]

        if multi:
            entries = list(self.sort_spec)
            index = next((i for i, item in enumerate(entries) if item.field_key == field_key), None)
            if following is None:
                entries = [item for item in entries if item.field_key != field_key]
            elif index is None:
                entries.append(SortEntry(field_key, following))
            else:
                entries[index] = SortEntry(field_key, following)
            self.sort_spec = tuple(entries)
        else:
            self.sort_spec = (SortEntry(field_key, following),) if following else ()

        self._clamp_page_index()
        return following

    # filtering

    def filter_value(self, field_key: str) -> str:
        return self.filter_spec.get(field_key, "")

    def set_filter(self, field_key: str, value: str | None) -> None:
        if value is None or value == "":
            self.filter_spec.pop(field_key, None)
        else:
            self.filter_spec[field_key] = str(value)
        self._clamp_page_index()

    def filtered_rows(self) -> list[Record]:
        rows = list(self._rows)
        for field_key, probe in self.filter_spec.items():
            needle = probe.lower()
            rows = [row for row in rows if needle in _as_text(row.get(field_key)).lower()]
        return rows

    def sorted_rows(self) -> list[Record]:
        rows = self.filtered_rows()
        # Lowest priority first; list.sort is stable so earlier keys win ties.
        for entry in reversed(self.sort_spec):
            rows.sort(key=lambda row: _sort_key(row.get(entry.field_key)), reverse=entry.direction == "desc")
            rows.sort(key=lambda row: _is_empty(row.get(entry.field_key)))
        return rows

    def filtered_count(self) -> int:
        return len(self.filtered_rows())

    # pagination

    def page_count(self) -> int:
        return max(1, math.ceil(self.filtered_count() / self.pagination.page_size))

    def visible_rows(self) -> list[Record]:
        start = self.pagination.page_index * self.pagination.page_size
        return self.sorted_rows()[start : start + self.pagination.page_size]

    def set_page_index(self, page_index: int) -> int:
        self.pagination.page_index = min(max(0, page_index), self.page_count() - 1)
        return self.pagination.page_index

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.pagination.page_size = page_size
        self._clamp_page_index()

    def first_page(self) -> int:
        return self.set_page_index(0)

    def last_page(self) -> int:
        return self.set_page_index(self.page_count() - 1)

    def next_page(self) -> int:
        return self.set_page_index(self.pagination.page_index + 1)

    def previous_page(self) -> int:
        return self.set_page_index(self.pagination.page_index - 1)

    def can_previous_page(self) -> bool:
        return self.pagination.page_index > 0

    def can_next_page(self) -> bool:
        return self.pagination.page_index < self.page_count() - 1

    def _clamp_page_index(self) -> None:
        self.set_page_index(self.pagination.page_index)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _sort_key(value: Any) -> tuple[int, Any]:
    # Empty values always end up last, see sorted_rows.
    if _is_empty(value):
        return (2, 0)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, _as_text(value).lower())
