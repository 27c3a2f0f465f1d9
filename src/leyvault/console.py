# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles shared by the user-facing output helpers."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache

from rich.console import Console


@dataclass(frozen=True, slots=True)
class ConsoleStyle:
    """Rendering preferences a console is built for."""

    color: bool
    emoji: bool
    tty: bool

    @property
    def styled(self) -> bool:
        """Return ``True`` when ANSI styling can actually be shown."""

        return self.color and self.tty


def stdout_is_terminal() -> bool:
    """Return ``True`` when ``sys.stdout`` is attached to a terminal."""

    try:
        return bool(sys.stdout.isatty())
    except (AttributeError, ValueError):
        # closed or replaced streams
        return False


class ConsoleCache:
    """Hand out one Rich console per :class:`ConsoleStyle`.

    The consoles are created without an explicit file, so each print goes to
    whatever ``sys.stdout`` is at that moment. Redirected output (CLI runners,
    capture fixtures) therefore reaches the active stream.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsoleStyle, Console] = {}

    def console_for(self, *, color: bool, emoji: bool) -> Console:
        style = ConsoleStyle(color=color, emoji=emoji, tty=stdout_is_terminal())
        console = self._consoles.get(style)
        if console is None:
            console = Console(
                color_system="auto" if style.styled else None,
                force_terminal=style.tty,
                no_color=not style.styled,
                emoji=emoji,
                highlight=False,
                soft_wrap=True,
            )
            self._consoles[style] = console
        return console

    def clear(self) -> None:
        """Drop every cached console."""

        self._consoles.clear()


@lru_cache(maxsize=1)
def get_console_cache() -> ConsoleCache:
    """Return the process-wide :class:`ConsoleCache`."""

    return ConsoleCache()


__all__ = ["ConsoleCache", "ConsoleStyle", "get_console_cache", "stdout_is_terminal"]
