"""Column-name parsing and normalization for computed/aggregate columns.

Storage engines name aggregate result columns after the expression that
produced them, wrapped in double quotes, e.g. ``"COUNT(DEPT)"``. These are
normalized to ``COUNT-DEPT`` so they can be decoded into application keys
like any other column name.
"""

from __future__ import annotations

from dataclasses import dataclass

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from pymap2row._errors import ERR_MSG_UNSUPPORTED_COLUMN_NAME, UnsupportedColumnNameError

_AGGREGATE_GRAMMAR = r"""
    start: FUNC "(" ARGS ")"

    FUNC: /\w+/
    ARGS: /.+(?=\)\Z)/
"""


class _AggregateName(Transformer):
    """Joins ``FUNC(ARGS)`` into ``FUNC-ARGS``."""

    def start(self, children: list[Token]) -> str:
        func, args = children
        return f"{func}-{args}"


_aggregate_parser = Lark(_AGGREGATE_GRAMMAR, parser="lalr", transformer=_AggregateName())


@dataclass(frozen=True)
class ParsedColumnName:
    """A raw column name split by whether it was quote-wrapped.

    Exactly one of ``quoted`` (the interior text) and ``unquoted`` (the
    name verbatim) is set.
    """

    name: str
    quoted: str | None = None
    unquoted: str | None = None


def parse_column_name(name: str | None) -> ParsedColumnName | None:
    """Split a raw column name into its quoted interior or unquoted form."""
    if name is None:
        return None
    if len(name) >= 2 and name.startswith('"') and name.endswith('"'):
        return ParsedColumnName(name=name, quoted=name[1:-1])
    return ParsedColumnName(name=name, unquoted=name)


def normalize_column_name(name: str | None) -> str | None:
    """Return the canonical token for a raw column name.

    Unquoted names are returned unchanged. Quoted aggregate names become
    ``FUNC-ARGS``::

        >>> normalize_column_name('"COUNT(DEPT)"')
        'COUNT-DEPT'

    Raises:
        UnsupportedColumnNameError: If a quoted name is not of the form
            ``FUNC(ARGS)``.
    """
    parsed = parse_column_name(name)
    if parsed is None:
        return None
    if parsed.unquoted is not None:
        return parsed.unquoted
    try:
        return _aggregate_parser.parse(parsed.quoted)
    except UnexpectedInput as exc:
        raise UnsupportedColumnNameError(
            ERR_MSG_UNSUPPORTED_COLUMN_NAME,
            f"quoted column name {name!r} is not an aggregate expression",
            wrapped=exc,
        ) from exc
