# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Status output and failure handling shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn

import typer

from .. import logging as status


class CLIError(RuntimeError):
    """Command failure carrying the exit status to report."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Text shown to the user.
            exit_code: Process exit status for the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Status output for one command invocation."""

    use_emoji: bool

    def fail(self, message: str) -> None:
        status.fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        status.warn(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        status.ok(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write plain ``message`` to stdout for scripting use."""

        typer.echo(message)

    def abort(self, exc: BaseException, *, exit_code: int = 1) -> NoReturn:
        """Report ``exc`` and leave the command with ``exit_code``."""

        self.fail(str(exc))
        raise typer.Exit(code=exit_code) from exc


def build_cli_logger(*, emoji: bool) -> CLILogger:
    """Return a :class:`CLILogger` honouring the ``--emoji`` preference."""

    return CLILogger(use_emoji=emoji)


__all__ = ["CLIError", "CLILogger", "build_cli_logger"]
