# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Commands that fetch version catalogs and bootstrap the root build."""

from __future__ import annotations

from functools import partial
from pathlib import Path

import typer

from ...catalog import fetch_and_cache
from ...errors import CatalogFetchError, SettingsError
from ...settings import bootstrap, load_settings
from ..shared import build_cli_logger


def bootstrap_command(
    root: Path = typer.Option(Path.cwd(), "--root", "-r", help="Project root."),
    offline: bool = typer.Option(False, "--offline", help="Resolve paths without downloading catalogs."),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Toggle emoji output."),
) -> None:
    """Fetch every version catalog and list the included projects."""

    logger = build_cli_logger(emoji=emoji)
    try:
        settings = load_settings(root)
        result = bootstrap(root, settings, fetch=None if offline else partial(fetch_and_cache, use_emoji=emoji))
    except (SettingsError, CatalogFetchError) as exc:
        logger.abort(exc)

    for name, path in result.catalogs.items():
        logger.echo(f"catalog {name}: {path}")
        if offline and not path.is_file():
            logger.warn(f"Catalog '{name}' has no cached copy yet")
    for name, path in result.projects.items():
        logger.echo(f"project :{name}: {path}")
    logger.ok(f"Bootstrapped {result.settings.root_project_name}")


def fetch_command(
    url: str = typer.Argument(..., help="Remote catalog URL."),
    destination: Path = typer.Argument(..., help="Local cache file."),
    timeout: float | None = typer.Option(None, "--timeout", help="Socket timeout in seconds."),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Toggle emoji output."),
) -> None:
    """Download a single catalog into a local file."""

    logger = build_cli_logger(emoji=emoji)
    try:
        path = fetch_and_cache(url, destination, timeout=timeout, use_emoji=emoji)
    except CatalogFetchError as exc:
        logger.abort(exc)
    logger.ok(f"Cached {url} at {path}")


def register(app: typer.Typer) -> None:
    """Register catalog commands on ``app``."""

    app.command("bootstrap")(bootstrap_command)
    app.command("fetch")(fetch_command)


__all__ = ["register"]
