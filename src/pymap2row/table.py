"""Read-only, name-based view over a remote table's columns."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, NoReturn, Protocol, runtime_checkable

from pymap2row._errors import (
    ERR_MSG_READ_ONLY,
    UnsupportedColumnNameError,
    UnsupportedOperationError,
)
from pymap2row.column import normalize_column_name
from pymap2row.keys import KeyMapper
from pymap2row.schema import Schema


@runtime_checkable
class RemoteTable(Protocol):
    """Minimal protocol for a remote table (or dataframe) handle."""

    def schema(self) -> Schema: ...
    def col(self, name: str) -> Any: ...


class TableFacade:
    """Callable, indexable and iterable view over a remote table's columns.

    ``facade("name")``, ``facade["name"]`` and ``facade.get("name")`` all
    resolve an application key to a column reference through
    ``key_mapper.encode``, returning ``None`` when the table has no such
    column. Iteration yields decoded keys in schema order; ``keys()``,
    ``values()`` and ``items()`` derive from the same ordered pairs.

    The live schema is read on every call, so results always reflect the
    remote table's current state.
    """

    def __init__(self, table: RemoteTable, key_mapper: KeyMapper) -> None:
        self._table = table
        self._key_mapper = key_mapper

    @property
    def key_mapper(self) -> KeyMapper:
        return self._key_mapper

    def unwrap(self) -> RemoteTable:
        return self._table

    # --- Resolution ---

    def _names(self) -> list[tuple[str, str]]:
        """Return ``(normalized, raw)`` storage names in live schema order."""
        return [(normalize_column_name(n), n) for n in self._table.schema().names]

    def _find(self, key: str) -> str | None:
        """Return the raw column name for ``key``, or ``None``.

        Exact storage names win; aggregate names such as ``"COUNT(DEPT)"``
        are also reachable through their normalized form. Names that cannot
        be normalized are only reachable exactly.
        """
        name = self._key_mapper.encode(key)
        raw_names = self._table.schema().names
        if name in raw_names:
            return name
        for raw in raw_names:
            try:
                normalized = normalize_column_name(raw)
            except UnsupportedColumnNameError:
                continue
            if normalized == name:
                return raw
        return None

    def _resolve(self, key: str) -> Any | None:
        raw = self._find(key)
        if raw is None:
            return None
        return self._table.col(raw)

    def _entries(self) -> list[tuple[str, Any]]:
        decode = self._key_mapper.decode
        return [
            (decode(normalized), self._table.col(raw))
            for normalized, raw in self._names()
        ]

    def __call__(self, key: str) -> Any | None:
        return self._resolve(key)

    def __getitem__(self, key: str) -> Any | None:
        return self._resolve(key)

    def get(self, key: str, default: Any = None) -> Any:
        column = self._resolve(key)
        return default if column is None else column

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self._find(key) is not None

    # --- Iteration views ---

    def __len__(self) -> int:
        return len(self._table.schema())

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def keys(self) -> list[str]:
        return [key for key, _ in self._entries()]

    def values(self) -> list[Any]:
        return [column for _, column in self._entries()]

    def items(self) -> list[tuple[str, Any]]:
        return self._entries()

    # --- Mutation is not supported ---

    def _read_only(self, operation: str) -> NoReturn:
        raise UnsupportedOperationError(
            ERR_MSG_READ_ONLY,
            f"{operation} is not supported on {type(self).__name__}",
        )

    def __setitem__(self, key: str, value: Any) -> NoReturn:
        self._read_only("item assignment")

    def __delitem__(self, key: str) -> NoReturn:
        self._read_only("item deletion")

    def pop(self, key: str, *default: Any) -> NoReturn:
        self._read_only("pop")

    def popitem(self) -> NoReturn:
        self._read_only("popitem")

    def clear(self) -> NoReturn:
        self._read_only("clear")

    def update(self, *args: Any, **kwargs: Any) -> NoReturn:
        self._read_only("update")

    def setdefault(self, key: str, default: Any = None) -> NoReturn:
        self._read_only("setdefault")

    # --- Identity ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableFacade):
            return NotImplemented
        return self._table == other._table and self._key_mapper == other._key_mapper

    def __hash__(self) -> int:
        return hash((self._table, self._key_mapper))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self._table!r}, key_mapper={self._key_mapper!r})"
