"""Schema resolution: inference from sample records and derivation from types."""

from __future__ import annotations

import dataclasses
import datetime
import enum
import logging
import types
import typing
import uuid
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from pymap2row._errors import (
    ERR_MSG_EMPTY_INPUT,
    ERR_MSG_INVALID_SCHEMA,
    ERR_MSG_UNSUPPORTED_TYPE,
    EmptyInputError,
    InvalidSchemaError,
    UnsupportedTypeError,
)
from pymap2row.keys import KeyFunc
from pymap2row.schema import DataType, Field, Schema

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_date(value: Any) -> bool:
    return isinstance(value, datetime.date) and not isinstance(value, datetime.datetime)


# Checked in order; the first matching predicate wins.
_VALUE_TYPES: tuple[tuple[Callable[[Any], bool], DataType], ...] = (
    (_is_integer, DataType.INTEGER),
    (lambda v: isinstance(v, float), DataType.DOUBLE),
    (lambda v: isinstance(v, Decimal), DataType.DECIMAL),
    (lambda v: isinstance(v, bool), DataType.BOOLEAN),
    (_is_date, DataType.DATE),
    (lambda v: isinstance(v, datetime.datetime), DataType.TIMESTAMP),
)


def value_data_type(value: Any) -> DataType:
    """Return the storage type for a sample value, defaulting to STRING."""
    for predicate, data_type in _VALUE_TYPES:
        if predicate(value):
            return data_type
    return DataType.STRING


def infer_schema(records: Iterable[Mapping[str, Any]], encode: KeyFunc) -> Schema:
    """Infer a schema from the first record of ``records``.

    Field order follows the sample's key order. Every inferred field is
    nullable because a single sample cannot prove a column is never null.

    Args:
        records: Application records; only the first one is inspected.
        encode: Key function producing storage names from application keys.

    Returns:
        The inferred :class:`~pymap2row.schema.Schema`.

    Raises:
        EmptyInputError: If there is no sample record.
    """
    sample = next(iter(records), None)
    if sample is None:
        raise EmptyInputError(ERR_MSG_EMPTY_INPUT, "no sample record to infer from")

    schema = Schema(
        Field(name=encode(key), type=value_data_type(value), nullable=True)
        for key, value in sample.items()
    )
    logger.debug("inferred schema with %d fields: %s", len(schema), schema.names)
    return schema


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------

_SCALAR_TYPES: dict[Any, DataType] = {
    bool: DataType.BOOLEAN,
    int: DataType.INTEGER,
    float: DataType.DOUBLE,
    Decimal: DataType.DECIMAL,
    str: DataType.STRING,
    uuid.UUID: DataType.STRING,
    datetime.datetime: DataType.TIMESTAMP,
    datetime.date: DataType.DATE,
    Any: DataType.STRING,
    type(None): DataType.STRING,
}

_REQUIREDNESS_WRAPPERS = (typing.Required, typing.NotRequired)


def _is_class(obj: Any) -> bool:
    # Parameterized generics such as list[int] are not classes.
    return isinstance(obj, type) and typing.get_origin(obj) is None


def _unsupported(annotation: Any, field_name: str) -> UnsupportedTypeError:
    return UnsupportedTypeError(
        ERR_MSG_UNSUPPORTED_TYPE,
        f"field {field_name!r} has unsupported type {annotation!r}",
    )


def _literal_data_type(values: tuple[Any, ...]) -> DataType | None:
    if all(_is_integer(v) for v in values):
        return DataType.INTEGER
    if all(isinstance(v, float) for v in values):
        return DataType.DOUBLE
    if all(isinstance(v, str) for v in values):
        return DataType.STRING
    return None


def _strip_wrappers(annotation: Any) -> Any:
    while typing.get_origin(annotation) in (typing.Annotated, *_REQUIREDNESS_WRAPPERS):
        annotation = typing.get_args(annotation)[0]
    return annotation


def _split_optional(annotation: Any) -> tuple[Any, bool]:
    """Return ``(inner, admits_none)`` for ``T | None`` style annotations."""
    origin = typing.get_origin(annotation)
    if origin is not typing.Union and origin is not types.UnionType:
        return annotation, False
    args = typing.get_args(annotation)
    non_none = [a for a in args if a is not type(None)]
    if len(non_none) == len(args):
        return annotation, False
    if len(non_none) == 1:
        return non_none[0], True
    return typing.Union[tuple(non_none)], True


def annotation_data_type(annotation: Any, field_name: str = "") -> DataType:
    """Map a field annotation (without ``None``) to a storage type.

    Raises:
        UnsupportedTypeError: For nested, collection, union or unknown types.
    """
    annotation = _strip_wrappers(annotation)

    if typing.get_origin(annotation) is typing.Literal:
        data_type = _literal_data_type(typing.get_args(annotation))
        if data_type is None:
            raise _unsupported(annotation, field_name)
        return data_type

    if _is_class(annotation) and issubclass(annotation, enum.Enum):
        return DataType.STRING

    try:
        return _SCALAR_TYPES[annotation]
    except (KeyError, TypeError) as exc:
        raise _unsupported(annotation, field_name) from exc


def _record_annotations(type_description: Any) -> list[tuple[str, Any, bool]]:
    """Return ``(name, annotation, declared_optional)`` per declared field."""
    if _is_class(type_description) and issubclass(type_description, BaseModel):
        return [
            (name, info.annotation, False)
            for name, info in type_description.model_fields.items()
        ]

    if typing.is_typeddict(type_description):
        hints = typing.get_type_hints(type_description, include_extras=True)
        optional_keys = type_description.__optional_keys__
        return [(name, hint, name in optional_keys) for name, hint in hints.items()]

    if _is_class(type_description) and dataclasses.is_dataclass(type_description):
        hints = typing.get_type_hints(type_description, include_extras=True)
        return [
            (f.name, hints[f.name], False) for f in dataclasses.fields(type_description)
        ]

    raise InvalidSchemaError(
        ERR_MSG_INVALID_SCHEMA,
        f"expected a dataclass, TypedDict or pydantic model type, got {type_description!r}",
    )


def derive_schema(type_description: Any, encode: KeyFunc) -> Schema:
    """Derive a schema from a flat record type.

    Supports dataclass types, ``TypedDict`` types and pydantic models such as::

        class Employee(TypedDict):
            id: int
            name: str
            age: NotRequired[int]

    A field is nullable iff it is declared optional: its annotation admits
    ``None`` or, for ``TypedDict``, its key is not required.

    Args:
        type_description: The record type.
        encode: Key function producing storage names from field names.

    Returns:
        The derived :class:`~pymap2row.schema.Schema`.

    Raises:
        InvalidSchemaError: If the type is not a flat record type.
        UnsupportedTypeError: If a field type cannot be stored as a scalar.
    """
    fields: list[Field] = []
    for name, annotation, declared_optional in _record_annotations(type_description):
        inner, admits_none = _split_optional(_strip_wrappers(annotation))
        fields.append(
            Field(
                name=encode(name),
                type=annotation_data_type(inner, name),
                nullable=declared_optional or admits_none,
            )
        )

    schema = Schema(fields)
    logger.debug(
        "derived schema with %d fields from %s",
        len(schema),
        getattr(type_description, "__name__", type_description),
    )
    return schema
