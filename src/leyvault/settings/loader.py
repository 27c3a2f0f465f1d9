# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered loading of build settings."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..errors import SettingsError
from .defaults import LIBS_CATALOG_NAME
from .models import BuildSettings, VersionCatalogSource
from .sources import (
    DefaultSettingsSource,
    PyProjectSettingsSource,
    SettingsSource,
    TomlSettingsSource,
    deep_merge,
)

SETTINGS_FILE_NAME: Final[str] = ".leyvault.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
CATALOG_URL_ENV: Final[str] = "LEYVAULT_CATALOG_URL"


@dataclass(slots=True)
class SettingsLoader:
    """Merge settings sources in order and validate the result."""

    sources: Sequence[SettingsSource]
    env: Mapping[str, str]

    @classmethod
    def for_root(
        cls,
        root: Path,
        *,
        settings_file: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> SettingsLoader:
        """Build the default source chain for the project at ``root``.

        Args:
            root: Project root directory.
            settings_file: Optional explicit settings file replacing
                ``.leyvault.toml``.
            env: Environment used for variable expansion and overrides.

        Returns:
            SettingsLoader: Loader reading defaults, ``pyproject.toml`` and the
            dedicated settings file, in that order.
        """

        environment = os.environ if env is None else env
        root = root.resolve()
        sources: list[SettingsSource] = [
            DefaultSettingsSource(),
            PyProjectSettingsSource(root / PYPROJECT_FILE_NAME, env=environment),
            TomlSettingsSource(settings_file or root / SETTINGS_FILE_NAME, env=environment),
        ]
        return cls(sources=sources, env=environment)

    def load(self) -> BuildSettings:
        """Return validated settings from every source.

        Raises:
            SettingsError: If a source is malformed or the merged result does
                not validate.
        """

        merged: dict[str, Any] = {}
        for source in self.sources:
            merged = deep_merge(merged, source.load())
        try:
            settings = BuildSettings.model_validate(merged)
        except ValidationError as exc:
            raise SettingsError(f"Invalid build settings: {exc}") from exc
        return self._apply_env_overrides(settings)

    def describe(self) -> list[str]:
        """Return descriptions of the sources in merge order."""

        return [source.describe() for source in self.sources]

    def _apply_env_overrides(self, settings: BuildSettings) -> BuildSettings:
        url = self.env.get(CATALOG_URL_ENV)
        if not url:
            return settings
        catalogs = []
        for source in settings.dependency_resolution.version_catalogs:
            if source.name == LIBS_CATALOG_NAME:
                try:
                    source = VersionCatalogSource(name=source.name, url=url, local_path=source.local_path)
                except ValidationError as exc:
                    raise SettingsError(f"Invalid {CATALOG_URL_ENV}: {exc}") from exc
            catalogs.append(source)
        settings.dependency_resolution.version_catalogs = catalogs
        return settings


def load_settings(root: Path, *, env: Mapping[str, str] | None = None) -> BuildSettings:
    """Return the effective build settings for the project at ``root``."""

    return SettingsLoader.for_root(root, env=env).load()


__all__ = [
    "CATALOG_URL_ENV",
    "PYPROJECT_FILE_NAME",
    "SETTINGS_FILE_NAME",
    "SettingsLoader",
    "load_settings",
]
