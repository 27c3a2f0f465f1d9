# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in settings of the ley-vault root build."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from .models import (
    BuildSettings,
    DependencyResolution,
    PluginManagement,
    PluginSpec,
    ProjectInclude,
    VersionCatalogSource,
)

ROOT_PROJECT_NAME: Final[str] = "ley-vault"
LIBS_CATALOG_NAME: Final[str] = "libs"
LIBS_CATALOG_URL: Final[str] = (
    "https://raw.githubusercontent.com/leycm/leycm/refs/heads/main/files/libs.version.toml"
)
LIBS_CATALOG_CACHE: Final[Path] = Path(".gradle") / "tmp-libs.versions.toml"
KOTLIN_JVM_PLUGIN: Final[PluginSpec] = PluginSpec(id="org.jetbrains.kotlin.jvm", version="2.2.10")


def default_settings() -> BuildSettings:
    """Return a fresh copy of the built-in build settings."""

    return BuildSettings(
        root_project_name=ROOT_PROJECT_NAME,
        plugin_management=PluginManagement(
            repositories=["gradlePluginPortal", "mavenCentral"],
            plugins=[KOTLIN_JVM_PLUGIN],
        ),
        dependency_resolution=DependencyResolution(
            repositories=["mavenCentral"],
            version_catalogs=[
                VersionCatalogSource(
                    name=LIBS_CATALOG_NAME,
                    url=LIBS_CATALOG_URL,
                    local_path=LIBS_CATALOG_CACHE,
                ),
            ],
        ),
        includes=[
            ProjectInclude(name="api", project_dir=Path("vlt-api")),
            ProjectInclude(name="common", project_dir=Path("vlt-common")),
        ],
    )


__all__ = [
    "KOTLIN_JVM_PLUGIN",
    "LIBS_CATALOG_CACHE",
    "LIBS_CATALOG_NAME",
    "LIBS_CATALOG_URL",
    "ROOT_PROJECT_NAME",
    "default_settings",
]
