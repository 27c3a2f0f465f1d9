# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Read and write values of vault configuration files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from ...errors import VaultError
from ...vault import VaultConfig, VaultFactory
from ..shared import CLIError, build_cli_logger

vault_app = typer.Typer(help="Read and write values in JSON, YAML or TOML config files.", no_args_is_help=True)


def _open(file: Path) -> VaultConfig:
    try:
        factory = VaultFactory(file.parent)
        return factory.create(file.name)
    except VaultError as exc:
        raise CLIError(str(exc)) from exc


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@vault_app.command("get")
def vault_get(
    file: Path = typer.Argument(..., help="Config file."),
    path: str = typer.Argument(..., help="Dotted path of the value."),
) -> None:
    """Print the value at PATH as JSON."""

    logger = build_cli_logger(emoji=True)
    try:
        value = _open(file).get(path, object)
        if value is None:
            raise CLIError(f"No value at '{path}' in {file}")
    except CLIError as exc:
        logger.abort(exc, exit_code=exc.exit_code)
    logger.echo(json.dumps(value, indent=2, default=str))


@vault_app.command("set")
def vault_set(
    file: Path = typer.Argument(..., help="Config file."),
    path: str = typer.Argument(..., help="Dotted path of the value."),
    value: str = typer.Argument(..., help="New value; parsed as JSON when possible."),
) -> None:
    """Store VALUE at PATH and save the file."""

    logger = build_cli_logger(emoji=True)
    try:
        config = _open(file)
        config.set(path, _parse_value(value))
        config.save()
    except CLIError as exc:
        logger.abort(exc, exit_code=exc.exit_code)
    except VaultError as exc:
        logger.abort(exc)
    logger.ok(f"Updated '{path}' in {file}")


def register(app: typer.Typer) -> None:
    """Register the vault command group on ``app``."""

    app.add_typer(vault_app, name="vault")


__all__ = ["register", "vault_app"]
