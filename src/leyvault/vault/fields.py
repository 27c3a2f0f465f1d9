# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Handles bound to a single path inside a config."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Generic, TypeVar

from .adapters.types import TypeAdapter
from .paths import combine_path
from .view import ConfigView

ValueT = TypeVar("ValueT")

# Adapters report unconvertible input by returning ``None`` or raising one of these.
CONVERSION_ERRORS: tuple[type[Exception], ...] = (TypeError, ValueError, OverflowError)


class VaultField(Generic[ValueT]):
    """A typed value stored at ``path`` in ``config``."""

    def __init__(self, config: ConfigView, path: str, type_: type[ValueT]) -> None:
        """Bind the handle to ``path`` in ``config``.

        Args:
            config: Config or section holding the value.
            path: Dotted path relative to ``config``.
            type_: Type the stored value is converted to on read.
        """

        self.config = config
        self.path = path
        self.type = type_

    def get_optional(self) -> ValueT | None:
        """Return the converted value, or ``None`` when absent or unconvertible."""

        return self.config.get_optional(self.path, self.type)

    def get(self) -> ValueT | None:
        return self.get_optional()

    def get_or(self, default: ValueT) -> ValueT:
        """Return the value, falling back to ``default`` when it is absent."""

        value = self.get_optional()
        return default if value is None else value

    def get_or_else(self, supplier: Callable[[], ValueT]) -> ValueT:
        """Return the value, calling ``supplier`` only when it is absent."""

        value = self.get_optional()
        return supplier() if value is None else value

    def get_or_raise(self, error: BaseException) -> ValueT:
        """Return the value.

        Args:
            error: Exception raised when the value is absent.

        Returns:
            ValueT: The converted value.

        Raises:
            BaseException: ``error`` when the value is absent.
        """

        value = self.get_optional()
        if value is None:
            raise error
        return value

    def set(self, value: ValueT | None) -> None:
        """Store ``value``; ``None`` removes the entry."""

        self.config.set(self.path, value)

    def remove(self) -> None:
        self.set(None)

    def exists(self) -> bool:
        """Return ``True`` when a convertible value is stored."""

        return self.get_optional() is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r}, type={self.type.__name__})"


class VaultFieldList(VaultField[list[ValueT]]):
    """A list whose elements are converted to ``element_type`` one by one.

    The list reads as absent when any non-null element cannot be converted.
    Mutators start from the stored list, so elements that do not convert are
    kept as they are.
    """

    def __init__(self, config: ConfigView, path: str, element_type: type[ValueT]) -> None:
        super().__init__(config, path, list)
        self.element_type = element_type

    def get_optional(self) -> list[ValueT] | None:
        raw = self.config.get_optional(self.path, object)
        if not isinstance(raw, list):
            return None
        adapter = self.config.type_adapter(self.element_type)
        result: list[ValueT] = []
        for item in raw:
            converted = self._convert(item, adapter)
            if converted is None and item is not None:
                return None
            result.append(converted)  # type: ignore[arg-type]
        return result

    def get_at(self, index: int) -> ValueT | None:
        """Return the converted element at ``index``.

        Args:
            index: Position in the list; negative values count from the end.

        Returns:
            ValueT | None: The element, or ``None`` when the element is null or
            the list reads as absent.

        Raises:
            IndexError: If the list exists and ``index`` is out of range.
        """

        items = self.get_optional()
        if items is None:
            return None
        return items[index]

    def get_at_or(self, index: int, default: ValueT) -> ValueT:
        value = self.get_at(index)
        return default if value is None else value

    def get_at_or_else(self, index: int, supplier: Callable[[], ValueT]) -> ValueT:
        value = self.get_at(index)
        return supplier() if value is None else value

    def get_at_or_raise(self, index: int, error: BaseException) -> ValueT:
        """Return the element at ``index`` or raise ``error`` when it is absent."""

        value = self.get_at(index)
        if value is None:
            raise error
        return value

    def set_at(self, index: int, value: ValueT | None) -> None:
        """Replace the element at ``index``; ``None`` deletes it instead."""

        items = self._stored_items()
        if value is None:
            del items[index]
        else:
            items[index] = value
        self.set(items)

    def add(self, value: ValueT) -> None:
        items = self._stored_items()
        items.append(value)
        self.set(items)

    def insert(self, index: int, value: ValueT) -> None:
        items = self._stored_items()
        items.insert(index, value)
        self.set(items)

    def remove_at(self, index: int) -> None:
        self.set_at(index, None)

    def _stored_items(self) -> list[Any]:
        raw = self.config.get_optional(self.path, object)
        return list(raw) if isinstance(raw, list) else []

    def _convert(self, item: Any, adapter: TypeAdapter[ValueT] | None) -> ValueT | None:
        if item is None:
            return None
        if isinstance(item, self.element_type):
            return item
        if adapter is None:
            return None
        try:
            return adapter.from_object(self.config, self.path, item)
        except CONVERSION_ERRORS:
            return None


class VaultFieldSection(ConfigView):
    """A table inside a config, usable as a config of its own."""

    def __init__(self, config: ConfigView, path: str) -> None:
        self.config = config
        self.path = path

    def value(self) -> dict[str, Any] | None:
        """Return the table stored at this section's path, if any."""

        return self.config.get_optional(self.path, dict)

    def exists(self) -> bool:
        return self.value() is not None

    def replace(self, table: Mapping[str, Any]) -> None:
        """Store a copy of ``table`` as this section's content."""

        self.config.set(self.path, dict(table))

    def clear(self) -> None:
        self.config.set(self.path, None)

    def get_optional(self, path: str, type_: type[ValueT]) -> ValueT | None:
        return self.config.get_optional(combine_path(self.path, path), type_)

    def set(self, path: str, value: Any) -> None:
        self.config.set(combine_path(self.path, path), value)

    def contains(self, path: str) -> bool:
        return self.config.contains(combine_path(self.path, path))

    def type_adapter(self, type_: type[ValueT]) -> TypeAdapter[ValueT] | None:
        return self.config.type_adapter(type_)

    @property
    def file(self) -> Path:
        return self.config.file

    def reload(self) -> None:
        self.config.reload()

    def save(self) -> None:
        self.config.save()

    def __repr__(self) -> str:
        return f"VaultFieldSection(path={self.path!r}, file={self.file})"


__all__ = ["CONVERSION_ERRORS", "VaultField", "VaultFieldList", "VaultFieldSection"]
