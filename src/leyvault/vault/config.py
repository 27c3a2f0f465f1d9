# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory view of a single configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from .adapters.types import TypeAdapter
from .fields import CONVERSION_ERRORS
from .paths import assign, lookup
from .view import ConfigView

if TYPE_CHECKING:
    from .factory import ConfigFactory

ValueT = TypeVar("ValueT")


@dataclass(eq=False)
class VaultConfig(ConfigView):
    """Nested tables loaded from ``source`` and managed by ``factory``.

    Reads go through the factory's type adapters first; without an adapter the
    raw value is returned when it already has the requested type.
    """

    source: Path
    factory: ConfigFactory
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, filename: str | Path) -> VaultConfig:
        """Create or fetch a config through the registered :class:`ConfigFactory`."""

        from .factory import ConfigFactory

        return ConfigFactory.get_instance().create(filename)

    @property
    def file(self) -> Path:
        return self.source

    def get_optional(self, path: str, type_: type[ValueT]) -> ValueT | None:
        value = lookup(self.data, path)
        if value is None:
            return None
        adapter = self.type_adapter(type_)
        if adapter is not None:
            try:
                return adapter.from_object(self, path, value)
            except CONVERSION_ERRORS:
                return None
        return value if isinstance(value, type_) else None

    def set(self, path: str, value: Any) -> None:
        if value is not None:
            adapter = self.type_adapter(type(value))
            if adapter is not None:
                value = adapter.to_object(self, path, value)
        assign(self.data, path, value)

    def contains(self, path: str) -> bool:
        return lookup(self.data, path) is not None

    def type_adapter(self, type_: type[ValueT]) -> TypeAdapter[ValueT] | None:
        return self.factory.get_type_adapter(type_)

    def reload(self) -> None:
        self.factory.reload(self)

    def save(self) -> None:
        self.factory.save(self)


__all__ = ["VaultConfig"]
