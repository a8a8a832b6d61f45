"""Typed access to parsed TOML tables.

A missing key reads as None so that callers fall back to defaults with
``or``. A key holding a value of the wrong type raises ``ValueError`` naming
the offending ``section.key``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

StrDict = dict[str, object]


def as_str_dict(obj: object) -> StrDict | None:
    """``obj`` as a string-keyed dict, or None if it is anything else."""
    if not isinstance(obj, dict):
        return None
    table = cast(dict[object, object], obj)
    if not all(isinstance(key, str) for key in table):
        return None
    return cast(StrDict, table)


def _typed[V](table: Mapping[str, object], key: str, kind: type[V], where: str) -> V | None:
    value = table.get(key)
    if value is None:
        return None
    # bool is an int subclass; TOML keeps them apart.
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"{where}{key} must be of type {kind.__name__}, got {value!r}")
    return value


def get_str(table: Mapping[str, object], key: str, where: str = "") -> str | None:
    """Stripped string value; blank strings read as missing."""
    value = _typed(table, key, str, where)
    if value is None:
        return None
    return value.strip() or None


def get_int(table: Mapping[str, object], key: str, where: str = "") -> int | None:
    return _typed(table, key, int, where)


def get_bool(table: Mapping[str, object], key: str, where: str = "") -> bool | None:
    return _typed(table, key, bool, where)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Nested table ``[key]``.

    Raises:
        ValueError: If ``key`` holds something other than a table.
    """
    value = table.get(key)
    if value is None:
        return None
    nested = as_str_dict(value)
    if nested is None:
        raise ValueError(f"[{key}] must be a table")
    return nested
