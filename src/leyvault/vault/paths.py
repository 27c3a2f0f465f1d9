# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dotted-path navigation over nested document tables."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Final

PATH_SEPARATOR: Final[str] = "."

_MISSING: Final = object()


def split_path(path: str) -> list[str]:
    """Return the keys addressed by ``path``."""

    return path.split(PATH_SEPARATOR)


def combine_path(base: str, sub_path: str) -> str:
    """Join ``base`` and ``sub_path``; an empty side yields the other."""

    if not base:
        return sub_path
    if not sub_path:
        return base
    return f"{base}{PATH_SEPARATOR}{sub_path}"


def lookup(data: Mapping[str, Any], path: str) -> Any:
    """Return the value at ``path`` or ``None`` when any step is missing."""

    current: Any = data
    for key in split_path(path):
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]
    return current


def parent_table(data: MutableMapping[str, Any], path: str) -> tuple[MutableMapping[str, Any], str]:
    """Return the table holding the last key of ``path``, creating tables on the way.

    Intermediate values that are not tables are replaced with empty tables.
    """

    *parents, final_key = split_path(path)
    current = data
    for key in parents:
        nxt = current.get(key, _MISSING)
        if not isinstance(nxt, MutableMapping):
            nxt = {}
            current[key] = nxt
        current = nxt
    return current, final_key


def assign(data: MutableMapping[str, Any], path: str, value: Any) -> None:
    """Store ``value`` at ``path``; ``None`` removes the key."""

    if value is None:
        *parents, key = split_path(path)
        holder = lookup(data, PATH_SEPARATOR.join(parents)) if parents else data
        if isinstance(holder, MutableMapping):
            holder.pop(key, None)
        return
    table, key = parent_table(data, path)
    table[key] = value


__all__ = ["PATH_SEPARATOR", "assign", "combine_path", "lookup", "parent_table", "split_path"]
