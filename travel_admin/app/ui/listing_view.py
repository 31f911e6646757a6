from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from travel_admin.app.domain.models.record import Record

EMPTY_VALUE = "—"
SENSITIVE_KEYS = {"token", "secret", "password"}
SORT_INDICATORS = {"asc": "▲", "desc": "▼", None: "↕"}

CellRenderer = Callable[[Record], str]


@dataclass(frozen=True)
class ColumnDef:
    """Declarative column: which field it shows and how a cell is rendered."""

    field_key: str
    label: str
    sortable: bool = True
    render_cell: CellRenderer | None = None

    def render(self, record: Record) -> str:
        if self.render_cell is not None:
            return self.render_cell(record)
        if any(token in self.field_key.lower() for token in SENSITIVE_KEYS):
            return EMPTY_VALUE
        return normalize_value(record.get(self.field_key))


@dataclass(frozen=True)
class HeaderBinding:
    field_key: str
    label: str
    sortable: bool
    sort_direction: str | None

    @property
    def indicator(self) -> str:
        if not self.sortable:
            return ""
        return SORT_INDICATORS[self.sort_direction]


@dataclass(frozen=True)
class RowBinding:
    record_id: str
    cells: dict[str, str]
    delete_pending: bool = False


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        clean = value.strip()
        return clean or EMPTY_VALUE
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.astimezone().strftime("%Y-%m-%d %H:%M:%S %z")
    return str(value)


def bind_row(record: Record, columns: list[ColumnDef], delete_pending: bool = False) -> RowBinding:
    return RowBinding(
        record_id=record.id,
        cells={column.field_key: column.render(record) for column in columns},
        delete_pending=delete_pending,
    )
