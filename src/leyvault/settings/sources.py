# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Settings fragments read from built-in defaults and TOML documents.

A TOML fragment may name other fragments under ``include``; they are merged
first, in order, and the including document wins. Include paths are relative
to the file that declares them. ``$VAR`` and ``${VAR}`` references in string
values are expanded once the whole fragment is assembled.
"""

from __future__ import annotations

import copy
import os
import re
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from ..errors import SettingsError
from .defaults import default_settings

INCLUDE_KEY: Final[str] = "include"
PYPROJECT_SECTION: Final[tuple[str, str]] = ("tool", "leyvault")

_ENV_REFERENCE: Final[re.Pattern[str]] = re.compile(r"\$(?:\{(?P<braced>[^}]+)\}|(?P<bare>\w+))")
_PARSED: dict[Path, tuple[int, dict[str, Any]]] = {}


class SettingsSource(ABC):
    """One layer of build settings."""

    name: str

    @abstractmethod
    def load(self) -> Mapping[str, Any]:
        """Return the settings fragment of this layer."""

    @abstractmethod
    def describe(self) -> str:
        """Return a human-readable description of the layer."""


class DefaultSettingsSource(SettingsSource):
    """The built-in settings as a plain fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return default_settings().model_dump(mode="json")

    def describe(self) -> str:
        return "Built-in defaults"


class TomlSettingsSource(SettingsSource):
    """A TOML settings document, assembled with the fragments it includes."""

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.path = path
        self.name = name or str(path)
        self._env = os.environ if env is None else env

    def load(self) -> Mapping[str, Any]:
        """Return the document merged over its includes, or ``{}`` when absent.

        Raises:
            SettingsError: If a document is unreadable or invalid, an include
                is missing or malformed, or includes form a cycle.
        """

        if not self.path.exists():
            return {}
        origin = self.path.resolve()
        table = self.select(_read_table(origin))
        return expand_env(self._with_includes(table, origin, (origin,)), self._env)

    def select(self, document: Mapping[str, Any]) -> Mapping[str, Any]:
        """Return the part of ``document`` holding settings."""

        return document

    def describe(self) -> str:
        return f"TOML settings at {self.name}"

    def _with_includes(self, table: Mapping[str, Any], origin: Path, chain: tuple[Path, ...]) -> dict[str, Any]:
        body = dict(table)
        assembled: dict[str, Any] = {}
        for fragment in self._include_paths(body.pop(INCLUDE_KEY, None), origin):
            assembled = deep_merge(assembled, self._fragment(fragment, origin, chain))
        return deep_merge(assembled, body)

    def _fragment(self, path: Path, origin: Path, chain: tuple[Path, ...]) -> dict[str, Any]:
        if not path.is_file():
            raise SettingsError(f"{origin} includes missing settings file {path}")
        resolved = path.resolve()
        if resolved in chain:
            cycle = " -> ".join(str(entry) for entry in (*chain, resolved))
            raise SettingsError(f"Circular include detected: {cycle}")
        return self._with_includes(_read_table(resolved), resolved, (*chain, resolved))

    def _include_paths(self, declared: Any, origin: Path) -> list[Path]:
        if declared is None:
            return []
        entries = [declared] if isinstance(declared, str) else declared
        if not isinstance(entries, list) or not all(isinstance(entry, str) for entry in entries):
            raise SettingsError(f"'{INCLUDE_KEY}' in {origin} must be a path or a list of paths")
        return [origin.parent / Path(_expand_string(entry, self._env)).expanduser() for entry in entries]


class PyProjectSettingsSource(TomlSettingsSource):
    """The ``[tool.leyvault]`` table of ``pyproject.toml``.

    ``include`` inside the table is honoured like in a dedicated settings
    file and resolves against the directory of ``pyproject.toml``.
    """

    def select(self, document: Mapping[str, Any]) -> Mapping[str, Any]:
        current: Any = document
        for key in PYPROJECT_SECTION:
            current = current.get(key) if isinstance(current, Mapping) else None
        return current if isinstance(current, Mapping) else {}

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


def _read_table(path: Path) -> dict[str, Any]:
    """Parse ``path``, reusing the previous parse while its mtime is unchanged."""

    try:
        mtime = path.stat().st_mtime_ns
        cached = _PARSED.get(path)
        if cached is None or cached[0] != mtime:
            with path.open("rb") as handle:
                cached = (mtime, tomllib.load(handle))
            _PARSED[path] = cached
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file {path}: {exc}") from exc
    return copy.deepcopy(cached[1])


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated recursively with ``override``.

    Tables merge key by key; any other value, lists included, is replaced.
    """

    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Expand ``$VAR`` and ``${VAR}`` in every string of ``data``.

    Unknown variables are left as written.
    """

    def expand(value: Any) -> Any:
        if isinstance(value, str):
            return _expand_string(value, env)
        if isinstance(value, Mapping):
            return {key: expand(item) for key, item in value.items()}
        if isinstance(value, list):
            return [expand(item) for item in value]
        return value

    return {key: expand(value) for key, value in data.items()}


def _expand_string(text: str, env: Mapping[str, str]) -> str:
    return _ENV_REFERENCE.sub(
        lambda match: env.get(match.group("braced") or match.group("bare"), match.group(0)),
        text,
    )


__all__ = [
    "INCLUDE_KEY",
    "DefaultSettingsSource",
    "PyProjectSettingsSource",
    "SettingsSource",
    "TomlSettingsSource",
    "deep_merge",
    "expand_env",
]
