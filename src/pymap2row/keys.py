"""Key mapping between application keys and storage-engine column names."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyFunc = Callable[[str], str]
"""Translates one field name into the other side's naming convention."""


@dataclass(frozen=True)
class KeyMapper:
    """Pair of caller-supplied, mutually inverse key functions.

    ``encode`` turns an application key into a storage-engine name and
    ``decode`` turns a storage-engine name back into an application key.
    The pair is never checked for invertibility; each conversion relies on
    it only for the names it actually touches.
    """

    decode: KeyFunc
    encode: KeyFunc


DEFAULT_KEY_MAPPER = KeyMapper(decode=str.lower, encode=str.upper)
"""Fallback used by :func:`~pymap2row.session.create_session` only.

Storage engines such as Snowflake fold unquoted identifiers to upper case,
while application records conventionally use lower-case keys.
"""

IDENTITY_KEY_MAPPER = KeyMapper(decode=str, encode=str)
"""Leaves names untouched in both directions."""
