# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Inspect the effective build settings."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from ...errors import SettingsError
from ...settings import SettingsLoader
from ..shared import build_cli_logger


def settings_command(
    root: Path = typer.Option(Path.cwd(), "--root", "-r", help="Project root."),
    sources: bool = typer.Option(False, "--sources", help="List the settings sources after the payload."),
) -> None:
    """Print the effective build settings as JSON."""

    logger = build_cli_logger(emoji=True)
    loader = SettingsLoader.for_root(root)
    try:
        settings = loader.load()
    except SettingsError as exc:
        logger.abort(exc)

    logger.echo(json.dumps(settings.model_dump(mode="json"), indent=2, sort_keys=True))
    if sources:
        logger.echo("\n# Sources")
        for description in loader.describe():
            logger.echo(f"- {description}")


def register(app: typer.Typer) -> None:
    """Register the settings command on ``app``."""

    app.command("settings")(settings_command)


__all__ = ["register"]
