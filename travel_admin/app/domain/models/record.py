from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

Primitive = str | int | float | bool | None


class Record(BaseModel):
    """One administrative entity: an id plus flat primitive fields."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _reject_nested_fields(self) -> "Record":
        nested = sorted(key for key, value in (self.model_extra or {}).items() if isinstance(value, (dict, list, tuple, set)))
        if nested:
            raise ValueError(f"record fields must be primitive values, nested: {nested}")
        return self

    def get(self, field_key: str, default: Primitive = None) -> Primitive:
        if field_key == "id":
            return self.id
        return (self.model_extra or {}).get(field_key, default)

    def as_dict(self) -> dict[str, Primitive]:
        return {"id": self.id, **(self.model_extra or {})}


def to_records(rows: Iterable[Record | Mapping[str, Any]]) -> tuple[Record, ...]:
    return tuple(row if isinstance(row, Record) else Record.model_validate(dict(row)) for row in rows)
