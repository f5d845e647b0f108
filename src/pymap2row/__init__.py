"""pymap2row - Convert application records to and from remote table rows."""

from __future__ import annotations

__version__ = "0.1.0"

from pymap2row._convert import (
    record_to_row,
    records_to_rows,
    row_to_record,
    rows_to_records,
)
from pymap2row._errors import (
    ConversionError,
    EmptyInputError,
    InvalidConfigError,
    InvalidRowError,
    InvalidSchemaError,
    UnsupportedColumnNameError,
    UnsupportedOperationError,
    UnsupportedTypeError,
)
from pymap2row._resolver import derive_schema, infer_schema
from pymap2row.column import ParsedColumnName, normalize_column_name, parse_column_name
from pymap2row.keys import DEFAULT_KEY_MAPPER, IDENTITY_KEY_MAPPER, KeyMapper
from pymap2row.schema import DataType, Field, Schema
from pymap2row.session import Session, SessionConfig, create_session, load_config
from pymap2row.table import RemoteTable, TableFacade

__all__ = [
    "derive_schema",
    "infer_schema",
    "record_to_row",
    "records_to_rows",
    "row_to_record",
    "rows_to_records",
    "normalize_column_name",
    "parse_column_name",
    "create_session",
    "load_config",
    "ParsedColumnName",
    "DataType",
    "Field",
    "Schema",
    "KeyMapper",
    "DEFAULT_KEY_MAPPER",
    "IDENTITY_KEY_MAPPER",
    "RemoteTable",
    "TableFacade",
    "Session",
    "SessionConfig",
    "ConversionError",
    "EmptyInputError",
    "InvalidConfigError",
    "InvalidRowError",
    "InvalidSchemaError",
    "UnsupportedColumnNameError",
    "UnsupportedOperationError",
    "UnsupportedTypeError",
]
