# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status lines printed while fetching catalogs and editing vault files.

Each helper prints a single line prefixed with an optional emoji. Colour is
applied only when requested (or, by default, when stdout is a terminal).
"""

from __future__ import annotations

from typing import Final, NamedTuple

from rich.text import Text

from .console import get_console_cache, stdout_is_terminal


class _Level(NamedTuple):
    glyph: str
    style: str


_INFO: Final = _Level("ℹ️ ", "cyan")
_OK: Final = _Level("✅ ", "green")
_WARN: Final = _Level("⚠️ ", "yellow")
_FAIL: Final = _Level("❌ ", "red")


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise ``""``."""

    return symbol if enable else ""


def _emit(level: _Level, msg: str, *, use_emoji: bool, use_color: bool | None) -> None:
    color = stdout_is_terminal() if use_color is None else use_color
    console = get_console_cache().console_for(color=color, emoji=use_emoji)
    line = Text(emoji(level.glyph, use_emoji) + msg)
    if color:
        line.stylize(level.style)
    console.print(line)


def info(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    """Announce a step, such as a catalog download about to start."""

    _emit(_INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    _emit(_OK, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    _emit(_WARN, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    """Report a failure; callers decide whether to exit."""

    _emit(_FAIL, msg, use_emoji=use_emoji, use_color=use_color)


__all__ = ["emoji", "fail", "info", "ok", "warn"]
