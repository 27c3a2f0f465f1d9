# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""One-shot bootstrap of the root build: catalogs first, then includes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..catalog import fetch_and_cache
from ..errors import SettingsError
from .defaults import default_settings
from .models import BuildSettings

CatalogFetcher = Callable[[str, Path], Path]


@dataclass(frozen=True, slots=True)
class BootstrapResult:
    """Outcome of a settings bootstrap.

    Attributes:
        root: Project root the settings were evaluated against.
        settings: Settings that drove the bootstrap.
        catalogs: Local catalog files keyed by catalog name, ready to be
            handed to a version catalog loader.
        projects: Subproject directories keyed by include name.
    """

    root: Path
    settings: BuildSettings
    catalogs: dict[str, Path] = field(default_factory=dict)
    projects: dict[str, Path] = field(default_factory=dict)


def bootstrap(
    root: Path,
    settings: BuildSettings | None = None,
    *,
    fetch: CatalogFetcher | None = fetch_and_cache,
) -> BootstrapResult:
    """Evaluate ``settings`` for the project at ``root``.

    Every version catalog is fetched in declaration order; the first failure
    propagates and aborts the bootstrap.

    Args:
        root: Project root directory.
        settings: Settings to evaluate; the built-in defaults when omitted.
        fetch: Callable materialising a catalog URL into a local file. ``None``
            skips the network and only resolves the configured paths.

    Returns:
        BootstrapResult: Resolved catalog files and project directories.

    Raises:
        SettingsError: If catalog or include names are duplicated.
        NetworkError: If a catalog cannot be downloaded.
        FilesystemError: If a catalog cannot be written locally.
    """

    effective = settings if settings is not None else default_settings()
    root = root.resolve()

    catalogs: dict[str, Path] = {}
    for source in effective.dependency_resolution.version_catalogs:
        if source.name in catalogs:
            raise SettingsError(f"Version catalog '{source.name}' is declared twice")
        local_path = source.resolve(root)
        catalogs[source.name] = local_path if fetch is None else fetch(source.url, local_path)

    projects: dict[str, Path] = {}
    for include in effective.includes:
        if include.name in projects:
            raise SettingsError(f"Project '{include.name}' is included twice")
        projects[include.name] = include.resolve(root)

    return BootstrapResult(root=root, settings=effective, catalogs=catalogs, projects=projects)


__all__ = ["BootstrapResult", "CatalogFetcher", "bootstrap"]
