# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Conversions between raw document values and Python types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from ..view import ConfigView

ValueT = TypeVar("ValueT")


class TypeAdapter(ABC, Generic[ValueT]):
    """Convert raw values read from a document into ``ValueT`` and back."""

    @abstractmethod
    def from_object(self, root: ConfigView, path: str, raw: Any) -> ValueT | None:
        """Convert a raw document value.

        Args:
            root: Config or section the value was read from.
            path: Dotted path of the value within ``root``.
            raw: Value as parsed from the file.

        Returns:
            ValueT | None: The converted value, or ``None`` when ``raw`` cannot
            be represented as ``ValueT``.
        """

    @abstractmethod
    def to_object(self, root: ConfigView, path: str, value: ValueT) -> Any:
        """Return the document representation of ``value``.

        Args:
            root: Config or section the value is written to.
            path: Dotted path of the value within ``root``.
            value: Value to store.

        Returns:
            Any: A value the file adapters can render.
        """


class _IdentityWriter(TypeAdapter[ValueT]):
    """Store values unchanged; the built-in types are native in every format."""

    def to_object(self, root: ConfigView, path: str, value: ValueT) -> Any:
        return value


class IntAdapter(_IdentityWriter[int]):
    """Accept integers, floats (truncated) and integer strings."""

    def from_object(self, root: ConfigView, path: str, raw: Any) -> int | None:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, (int, float)):
            return int(raw)
        if isinstance(raw, str):
            try:
                return int(raw.strip())
            except ValueError:
                return None
        return None


class FloatAdapter(_IdentityWriter[float]):
    """Accept numbers and numeric strings."""

    def from_object(self, root: ConfigView, path: str, raw: Any) -> float | None:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, (int, float)):
            return float(raw)
        if isinstance(raw, str):
            try:
                return float(raw.strip())
            except ValueError:
                return None
        return None


class BoolAdapter(_IdentityWriter[bool]):
    """Accept booleans, ``"true"`` in any case and non-zero numbers."""

    def from_object(self, root: ConfigView, path: str, raw: Any) -> bool | None:
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            return raw.strip().lower() == "true"
        if isinstance(raw, (int, float)):
            return int(raw) != 0
        return None


class StrAdapter(_IdentityWriter[str]):
    """Render any value as text."""

    def from_object(self, root: ConfigView, path: str, raw: Any) -> str | None:
        if raw is None:
            return None
        if isinstance(raw, bool):
            return "true" if raw else "false"
        return str(raw)


def builtin_type_adapters() -> dict[type, TypeAdapter[Any]]:
    """Return fresh instances of the built-in adapters keyed by target type."""

    return {
        int: IntAdapter(),
        float: FloatAdapter(),
        bool: BoolAdapter(),
        str: StrAdapter(),
    }


__all__ = [
    "BoolAdapter",
    "FloatAdapter",
    "IntAdapter",
    "StrAdapter",
    "TypeAdapter",
    "builtin_type_adapters",
]
