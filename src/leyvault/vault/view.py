# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read/write API shared by whole configs and the sections inside them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from .adapters.types import TypeAdapter
    from .fields import VaultField, VaultFieldList, VaultFieldSection

ValueT = TypeVar("ValueT")


class ConfigView(ABC):
    """Typed access to values addressed by dotted paths.

    A value reads as absent when the path does not exist or when it cannot
    be converted to the requested type.
    """

    @abstractmethod
    def get_optional(self, path: str, type_: type[ValueT]) -> ValueT | None:
        """Return the value at ``path`` converted to ``type_``, or ``None``."""

    @abstractmethod
    def set(self, path: str, value: Any) -> None:
        """Store ``value`` at ``path``; ``None`` removes the entry."""

    @abstractmethod
    def contains(self, path: str) -> bool:
        """Return ``True`` when ``path`` holds a value."""

    @abstractmethod
    def type_adapter(self, type_: type[ValueT]) -> TypeAdapter[ValueT] | None:
        """Return the adapter converting raw values into ``type_``, if any."""

    @property
    @abstractmethod
    def file(self) -> Path:
        """Return the file backing this view."""

    @abstractmethod
    def reload(self) -> None:
        """Re-read the backing file."""

    @abstractmethod
    def save(self) -> None:
        """Write the current values to the backing file."""

    def get(self, path: str, type_: type[ValueT]) -> ValueT | None:
        """Alias of :meth:`get_optional`."""

        return self.get_optional(path, type_)

    def get_or(self, path: str, type_: type[ValueT], default: ValueT) -> ValueT:
        """Return the value at ``path`` or ``default`` when it is absent.

        Args:
            path: Dotted path of the value.
            type_: Type the raw value is converted to.
            default: Value returned when nothing convertible is stored.

        Returns:
            ValueT: The converted value or ``default``.
        """

        value = self.get_optional(path, type_)
        return default if value is None else value

    def get_or_else(self, path: str, type_: type[ValueT], supplier: Callable[[], ValueT]) -> ValueT:
        """Like :meth:`get_or`, but the fallback comes from ``supplier`` on demand."""

        value = self.get_optional(path, type_)
        return supplier() if value is None else value

    def get_or_raise(self, path: str, type_: type[ValueT], error: BaseException) -> ValueT:
        """Return the value at ``path``.

        Raises:
            BaseException: ``error`` when the value is absent.
        """

        value = self.get_optional(path, type_)
        if value is None:
            raise error
        return value

    def remove(self, path: str) -> None:
        """Delete the entry at ``path``; missing paths are ignored."""

        self.set(path, None)

    def get_field(self, path: str, type_: type[ValueT]) -> VaultField[ValueT]:
        """Return a handle reading and writing ``path`` as ``type_``."""

        from .fields import VaultField

        return VaultField(self, path, type_)

    def get_field_list(self, path: str, element_type: type[ValueT]) -> VaultFieldList[ValueT]:
        """Return a handle on the list at ``path`` with ``element_type`` elements."""

        from .fields import VaultFieldList

        return VaultFieldList(self, path, element_type)

    def get_field_section(self, path: str) -> VaultFieldSection:
        """Return a view rooted at the table at ``path``."""

        from .fields import VaultFieldSection

        return VaultFieldSection(self, path)


__all__ = ["ConfigView"]
