"""Conversion between application records and schema-positioned storage rows."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pymap2row._errors import ERR_MSG_INVALID_ROW, InvalidRowError
from pymap2row.keys import KeyFunc
from pymap2row.schema import Schema

Record = Mapping[str, Any]
Row = tuple[Any, ...]


def to_storage_value(value: Any) -> Any:
    """Convert symbolic tokens to plain strings; pass other scalars through."""
    if isinstance(value, enum.Enum):
        return value.name
    return value


def record_to_row(record: Record, schema: Schema, encode: KeyFunc) -> Row:
    """Convert an application record to a storage row laid out by ``schema``.

    Keys are matched to field names case-insensitively after ``encode``.
    Fields with no matching key get ``None``; keys with no matching field
    are ignored. When several keys encode to the same name ignoring case,
    the last one in the record's iteration order wins.
    """
    by_name = {encode(key).lower(): value for key, value in record.items()}
    return tuple(to_storage_value(by_name.get(f.name.lower())) for f in schema)


def row_to_record(row: Sequence[Any], schema: Schema, decode: KeyFunc) -> dict[str, Any]:
    """Convert a storage row back to an application record.

    Null slots are omitted rather than mapped to ``None``, so a record that
    lacked an optional key round-trips without gaining it.

    Raises:
        InvalidRowError: If the row length differs from the schema length.
    """
    if len(row) != len(schema):
        raise InvalidRowError(
            ERR_MSG_INVALID_ROW,
            f"row has {len(row)} values but schema has {len(schema)} fields",
        )
    return {
        decode(f.name): value
        for f, value in zip(schema, row)
        if value is not None
    }


def records_to_rows(
    records: Iterable[Record], schema: Schema, encode: KeyFunc
) -> list[Row]:
    """Apply :func:`record_to_row` to each record, preserving order."""
    return [record_to_row(r, schema, encode) for r in records]


def rows_to_records(
    rows: Iterable[Sequence[Any]], schema: Schema, decode: KeyFunc
) -> list[dict[str, Any]]:
    """Apply :func:`row_to_record` to each row, preserving order."""
    return [row_to_record(r, schema, decode) for r in rows]
