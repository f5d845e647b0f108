"""Schema types for record/row conversion."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass


class DataType(enum.StrEnum):
    """Scalar column types understood by the storage engine."""

    INTEGER = "integer"
    DOUBLE = "double"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    TIMESTAMP = "timestamp"
    STRING = "string"


@dataclass(frozen=True)
class Field:
    """Schema for a single storage column."""

    name: str
    type: DataType = DataType.STRING
    nullable: bool = True


class Schema:
    """Ordered, immutable field list with O(1) lookup by storage name.

    Field order defines the positional layout of storage rows.
    """

    def __init__(self, fields: Iterable[Field]) -> None:
        self._fields = tuple(fields)
        self._index: dict[str, Field] = {f.name: f for f in self._fields}

    @property
    def fields(self) -> list[Field]:
        return list(self._fields)

    @property
    def names(self) -> list[str]:
        return [f.name for f in self._fields]

    def find_field(self, name: str) -> Field | None:
        return self._index.get(name)

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash(self._fields)

    def __repr__(self) -> str:
        return f"Schema({list(self._fields)!r})"
