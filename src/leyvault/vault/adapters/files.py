# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File format adapters that read documents into tables and render them back.

The YAML and TOML adapters re-render the whole document on write and then
re-attach comments found in the previous revision:

* a leading comment block separated from the first entry by a blank line is
  kept as the document header;
* comment lines directly above a key or table header follow that entry;
* trailing ``# ...`` comments on a key line follow that key;
* comments after the last entry stay at the end of the document.

Entries are matched by their dotted path, so comments survive reordering and
value changes but are dropped when their entry disappears.
"""

from __future__ import annotations

import json
import re
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final

import tomli_w
import yaml

from ...errors import AdapterError
from ..paths import assign

_TOML_ARRAY_TABLE: Final[re.Pattern[str]] = re.compile(r"^\[\[(.*?)\]\]\s*$")
_TOML_TABLE: Final[re.Pattern[str]] = re.compile(r"^\[(.*?)\]\s*$")
_TOML_KEY: Final[re.Pattern[str]] = re.compile(r"^([A-Za-z0-9_-]+)\s*=")
_YAML_KEY: Final[re.Pattern[str]] = re.compile(r"^(\s*)([A-Za-z0-9_-]+):(?:\s|$)")


class ConfigFileAdapter(ABC):
    """Translate between document text and nested tables."""

    @abstractmethod
    def read(self, content: str) -> dict[str, Any]:
        """Parse ``content``; blank content yields an empty table.

        Raises:
            AdapterError: If ``content`` is not a valid document.
        """

    @abstractmethod
    def write(self, current: str, data: Mapping[str, Any]) -> str:
        """Render ``data``, using ``current`` as the previous revision of the file.

        Raises:
            AdapterError: If ``data`` cannot be represented in the format.
        """

    def update_value(self, current: str, key: str, value: Any) -> str:
        """Return ``current`` with the dotted ``key`` set to ``value``."""

        data = self.read(current)
        assign(data, key, value)
        return self.write(current, data)


class JsonConfigAdapter(ConfigFileAdapter):
    """JSON documents; comments are not part of the format."""

    def read(self, content: str) -> dict[str, Any]:
        if not content.strip():
            return {}
        try:
            loaded = json.loads(content)
        except json.JSONDecodeError as exc:
            raise AdapterError(f"Invalid JSON: {exc}") from exc
        return _ensure_table(loaded, "JSON")

    def write(self, current: str, data: Mapping[str, Any]) -> str:
        try:
            return json.dumps(dict(data), indent=2, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as exc:
            raise AdapterError(f"Cannot render JSON: {exc}") from exc


@dataclass(slots=True)
class _CommentMap:
    header: list[str] = field(default_factory=list)
    footer: list[str] = field(default_factory=list)
    blocks: dict[str, list[str]] = field(default_factory=dict)
    inline: dict[str, str] = field(default_factory=dict)


class _KeyTracker(ABC):
    @abstractmethod
    def feed(self, line: str) -> str | None:
        """Return the dotted path declared by ``line`` or ``None``."""


class _TomlKeyTracker(_KeyTracker):
    """Name tables by header and keys by ``table.key``.

    Elements of an array of tables are numbered in order of appearance, so
    ``[[servers]]`` declares ``servers[0]``, then ``servers[1]`` and so on.
    """

    def __init__(self) -> None:
        self._table = ""
        self._elements: dict[str, int] = {}

    def feed(self, line: str) -> str | None:
        body, _ = split_inline_comment(line.strip())
        if match := _TOML_ARRAY_TABLE.match(body):
            name = match.group(1).strip()
            index = self._elements.get(name, 0)
            self._elements[name] = index + 1
            self._table = f"{name}[{index}]"
            return f"[[{self._table}]]"
        if match := _TOML_TABLE.match(body):
            self._table = match.group(1).strip()
            return f"[{self._table}]"
        if match := _TOML_KEY.match(body):
            key = match.group(1)
            return f"{self._table}.{key}" if self._table else key
        return None


class _YamlKeyTracker(_KeyTracker):
    def __init__(self) -> None:
        self._stack: list[tuple[int, str]] = []

    def feed(self, line: str) -> str | None:
        match = _YAML_KEY.match(line)
        if match is None:
            return None
        indent = len(match.group(1))
        while self._stack and self._stack[-1][0] >= indent:
            self._stack.pop()
        self._stack.append((indent, match.group(2)))
        return ".".join(key for _, key in self._stack)


class CommentPreservingAdapter(ConfigFileAdapter):
    """Base for formats whose comments are carried across rewrites."""

    @abstractmethod
    def render(self, data: Mapping[str, Any]) -> str:
        """Render ``data`` without any comments."""

    @abstractmethod
    def _tracker(self) -> _KeyTracker:
        """Return a fresh key tracker for the format."""

    def write(self, current: str, data: Mapping[str, Any]) -> str:
        rendered = self.render(data)
        if not current.strip():
            return rendered
        return self._merge(rendered, self._collect(current))

    def _collect(self, content: str) -> _CommentMap:
        comments = _CommentMap()
        tracker = self._tracker()
        pending: list[str] = []
        blank_after_pending = False
        seen_entry = False

        for line in content.splitlines():
            stripped = line.strip()
            if not stripped:
                blank_after_pending = bool(pending)
                continue
            if stripped.startswith("#"):
                if blank_after_pending and not seen_entry:
                    comments.header.extend(pending)
                    pending = []
                blank_after_pending = False
                pending.append(line.rstrip())
                continue

            key = tracker.feed(line)
            if key is None:
                continue
            if pending:
                if blank_after_pending and not seen_entry:
                    comments.header.extend(pending)
                else:
                    comments.blocks[key] = pending
                pending = []
            blank_after_pending = False
            seen_entry = True
            _, inline = split_inline_comment(line)
            if inline is not None:
                comments.inline[key] = inline

        if pending:
            (comments.footer if seen_entry else comments.header).extend(pending)
        return comments

    def _merge(self, rendered: str, comments: _CommentMap) -> str:
        tracker = self._tracker()
        out: list[str] = []
        if comments.header:
            out.extend(comments.header)
            out.append("")
        for line in rendered.splitlines():
            key = tracker.feed(line) if line.strip() else None
            if key is not None:
                out.extend(comments.blocks.get(key, ()))
                inline = comments.inline.get(key)
                if inline is not None:
                    line = f"{line.rstrip()}  {inline}"
            out.append(line)
        if comments.footer:
            out.append("")
            out.extend(comments.footer)
        return "\n".join(out) + "\n"


class YamlConfigAdapter(CommentPreservingAdapter):
    """YAML documents rendered in block style with two-space indentation."""

    def read(self, content: str) -> dict[str, Any]:
        if not content.strip():
            return {}
        try:
            loaded = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise AdapterError(f"Invalid YAML: {exc}") from exc
        if loaded is None:
            return {}
        return _ensure_table(loaded, "YAML")

    def render(self, data: Mapping[str, Any]) -> str:
        if not data:
            return ""
        try:
            return yaml.safe_dump(
                dict(data),
                default_flow_style=False,
                sort_keys=False,
                indent=2,
                width=120,
                allow_unicode=True,
            )
        except yaml.YAMLError as exc:
            raise AdapterError(f"Cannot render YAML: {exc}") from exc

    def _tracker(self) -> _KeyTracker:
        return _YamlKeyTracker()


class TomlConfigAdapter(CommentPreservingAdapter):
    """TOML documents read with :mod:`tomllib` and written with ``tomli_w``."""

    def read(self, content: str) -> dict[str, Any]:
        if not content.strip():
            return {}
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise AdapterError(f"Invalid TOML: {exc}") from exc

    def render(self, data: Mapping[str, Any]) -> str:
        try:
            return tomli_w.dumps(dict(data))
        except (TypeError, ValueError) as exc:
            raise AdapterError(f"Cannot render TOML: {exc}") from exc

    def _tracker(self) -> _KeyTracker:
        return _TomlKeyTracker()


def split_inline_comment(line: str) -> tuple[str, str | None]:
    """Split ``line`` into its content and a trailing ``# ...`` comment.

    A ``#`` only starts a comment outside quoted strings and when it begins
    the line or follows whitespace.
    """

    quote: str | None = None
    escaped = False
    for index, char in enumerate(line):
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\" and quote == '"':
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in {'"', "'"}:
            quote = char
        elif char == "#" and (index == 0 or line[index - 1].isspace()):
            return line[:index].rstrip(), line[index:].rstrip()
    return line, None


def _ensure_table(value: Any, label: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise AdapterError(f"{label} document must be a mapping at the top level")
    return {str(key): item for key, item in value.items()}


__all__ = [
    "CommentPreservingAdapter",
    "ConfigFileAdapter",
    "JsonConfigAdapter",
    "TomlConfigAdapter",
    "YamlConfigAdapter",
    "split_inline_comment",
]
