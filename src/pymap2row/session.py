"""Session wrapper tying a remote session to a key mapper.

The remote session itself is opened by a caller-supplied factory, so this
module carries no driver dependency.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from pymap2row._convert import Record, Row, records_to_rows, rows_to_records
from pymap2row._errors import (
    ERR_MSG_EMPTY_INPUT,
    ERR_MSG_INVALID_CONFIG,
    EmptyInputError,
    InvalidConfigError,
)
from pymap2row._resolver import derive_schema, infer_schema
from pymap2row.keys import DEFAULT_KEY_MAPPER, KeyMapper
from pymap2row.schema import Schema
from pymap2row.table import RemoteTable, TableFacade

logger = logging.getLogger(__name__)


class SessionConfig(BaseModel):
    """Connection parameters for a remote session.

    Unknown keys are rejected. ``password`` is masked in ``repr`` and
    ``str``; use :meth:`to_options` to hand it to the session builder.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    url: str = Field(min_length=1)
    user: str = Field(min_length=1)
    password: SecretStr
    role: str | None = Field(default=None, min_length=1)
    warehouse: str | None = Field(default=None, min_length=1)
    db: str | None = Field(default=None, min_length=1)
    schema_name: str | None = Field(default=None, min_length=1, alias="schema")
    insecure_mode: bool | None = Field(default=None, alias="insecureMode")

    @field_validator("password")
    @classmethod
    def _password_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("must be a non-empty string")
        return value

    def to_options(self) -> dict[str, str]:
        """Return the config as flat builder options with the password unmasked."""
        options: dict[str, str] = {}
        for key, value in self.model_dump(by_alias=True, exclude_none=True).items():
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            elif isinstance(value, bool):
                value = str(value).lower()
            options[key] = str(value)
        return options


def validate_config(data: Mapping[str, Any]) -> SessionConfig:
    """Validate a config mapping.

    Raises:
        InvalidConfigError: If the mapping does not describe a valid config.
    """
    try:
        return SessionConfig.model_validate(dict(data))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors(include_input=False, include_url=False)
        )
        raise InvalidConfigError(
            ERR_MSG_INVALID_CONFIG,
            f"invalid config: {problems}",
            wrapped=exc,
        ) from exc


def load_config(path: str | os.PathLike[str]) -> SessionConfig:
    """Load and validate a TOML config file."""
    with open(path, "rb") as fh:
        data = tomllib.load(fh)
    return validate_config(data)


@runtime_checkable
class CollectableTable(RemoteTable, Protocol):
    """Remote table that can also fetch its rows."""

    def collect(self) -> list[Sequence[Any]]: ...


class RawSession(Protocol):
    """Minimal protocol for a remote session."""

    def create_table(self, rows: list[Row], schema: Schema) -> CollectableTable: ...
    def table(self, name: str) -> CollectableTable: ...
    def close(self) -> None: ...


SessionFactory = Callable[[dict[str, str]], RawSession]
"""Opens a remote session from flat builder options."""


class Session:
    """A remote session plus the key mapper used for every conversion."""

    def __init__(self, raw: RawSession, key_mapper: KeyMapper) -> None:
        self._raw = raw
        self._key_mapper = key_mapper

    @property
    def key_mapper(self) -> KeyMapper:
        return self._key_mapper

    def unwrap(self) -> RawSession:
        return self._raw

    def _wrap(self, table: CollectableTable) -> TableFacade:
        return TableFacade(table, self._key_mapper)

    def schema_from_type(self, type_description: Any) -> Schema:
        """Derive a schema from a record type using this session's key mapper."""
        return derive_schema(type_description, self._key_mapper.encode)

    def create_dataframe(
        self, records: Iterable[Record], schema: Schema | None = None
    ) -> TableFacade:
        """Create a remote table from application records.

        Args:
            records: Application records.
            schema: Explicit schema; inferred from the first record if omitted.

        Returns:
            A :class:`~pymap2row.table.TableFacade` over the new table.

        Raises:
            EmptyInputError: If ``records`` is empty.
        """
        records = list(records)
        if not records:
            raise EmptyInputError(ERR_MSG_EMPTY_INPUT, "cannot create table from empty data")
        encode = self._key_mapper.encode
        if schema is None:
            schema = infer_schema(records, encode)
        rows = records_to_rows(records, schema, encode)
        return self._wrap(self._raw.create_table(rows, schema))

    def table(self, name: str) -> TableFacade:
        return self._wrap(self._raw.table(name))

    def collect(self, table: TableFacade) -> list[dict[str, Any]]:
        """Fetch all rows of ``table`` as application records."""
        raw_table = table.unwrap()
        return rows_to_records(raw_table.collect(), raw_table.schema(), self._key_mapper.decode)

    def close(self) -> None:
        self._raw.close()
        logger.debug("session closed")

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_session(
    config: SessionConfig | Mapping[str, Any] | str | os.PathLike[str],
    factory: SessionFactory,
    *,
    key_mapper: KeyMapper | None = None,
) -> Session:
    """Open a session.

    Args:
        config: A validated config, a config mapping, or a TOML file path.
        factory: Opens the remote session from flat builder options.
        key_mapper: Key functions for this session. Defaults to
            :data:`~pymap2row.keys.DEFAULT_KEY_MAPPER`.

    Returns:
        A :class:`Session`.

    Raises:
        InvalidConfigError: If the config is invalid.
    """
    if isinstance(config, (str, os.PathLike)):
        config = load_config(config)
    elif not isinstance(config, SessionConfig):
        config = validate_config(config)

    raw = factory(config.to_options())
    logger.debug("session opened for %s as %s", config.url, config.user)
    return Session(raw, key_mapper or DEFAULT_KEY_MAPPER)
