# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Root build settings: models, layered loading and bootstrap."""

from __future__ import annotations

from .bootstrap import BootstrapResult, bootstrap
from .defaults import default_settings
from .loader import SettingsLoader, load_settings
from .models import (
    BuildSettings,
    DependencyResolution,
    PluginManagement,
    PluginSpec,
    ProjectInclude,
    VersionCatalogSource,
)

__all__ = [
    "BootstrapResult",
    "BuildSettings",
    "DependencyResolution",
    "PluginManagement",
    "PluginSpec",
    "ProjectInclude",
    "SettingsLoader",
    "VersionCatalogSource",
    "bootstrap",
    "default_settings",
    "load_settings",
]
