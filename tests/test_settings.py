# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for build settings models, defaults and bootstrap."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from leyvault.errors import NetworkError, SettingsError
from leyvault.settings import (
    BuildSettings,
    DependencyResolution,
    ProjectInclude,
    VersionCatalogSource,
    bootstrap,
    default_settings,
)
from leyvault.settings.defaults import LIBS_CATALOG_CACHE, LIBS_CATALOG_URL


class RecordingFetch:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Path]] = []

    def __call__(self, url: str, local_path: Path) -> Path:
        self.calls.append((url, local_path))
        local_path.parent.mkdir(parents=True, exist_ok=True)
        local_path.write_text(f"# from {url}\n", encoding="utf-8")
        return local_path


def test_default_settings_describe_root_build() -> None:
    settings = default_settings()

    assert settings.root_project_name == "ley-vault"
    assert settings.plugin_management.repositories == ["gradlePluginPortal", "mavenCentral"]
    assert [(plugin.id, plugin.version) for plugin in settings.plugin_management.plugins] == [
        ("org.jetbrains.kotlin.jvm", "2.2.10"),
    ]
    assert settings.dependency_resolution.repositories == ["mavenCentral"]
    assert [(item.name, item.project_dir) for item in settings.includes] == [
        ("api", Path("vlt-api")),
        ("common", Path("vlt-common")),
    ]

    libs = settings.catalog("libs")
    assert libs is not None
    assert libs.url == LIBS_CATALOG_URL
    assert libs.local_path == Path(".gradle/tmp-libs.versions.toml")
    assert settings.catalog("missing") is None


def test_default_settings_returns_independent_copies() -> None:
    first = default_settings()
    first.includes.clear()

    assert len(default_settings().includes) == 2


def test_catalog_url_requires_http_scheme() -> None:
    with pytest.raises(ValidationError):
        VersionCatalogSource(name="libs", url="ftp://example.com/libs.toml", local_path=Path("libs.toml"))


def test_duplicate_catalog_names_rejected_by_model() -> None:
    source = VersionCatalogSource(name="libs", url="https://example.com/a.toml", local_path=Path("a.toml"))

    with pytest.raises(ValidationError, match="duplicate version catalog 'libs'"):
        DependencyResolution(version_catalogs=[source, source])


def test_duplicate_include_names_rejected_by_model() -> None:
    include = ProjectInclude(name="api", project_dir=Path("vlt-api"))

    with pytest.raises(ValidationError, match="duplicate project include 'api'"):
        BuildSettings(root_project_name="demo", includes=[include, include])


def test_bootstrap_fetches_catalog_into_root(tmp_path: Path) -> None:
    fetch = RecordingFetch()

    result = bootstrap(tmp_path, fetch=fetch)

    expected_cache = tmp_path.resolve() / LIBS_CATALOG_CACHE
    assert fetch.calls == [(LIBS_CATALOG_URL, expected_cache)]
    assert result.catalogs == {"libs": expected_cache}
    assert expected_cache.read_text(encoding="utf-8") == f"# from {LIBS_CATALOG_URL}\n"
    assert result.projects == {
        "api": tmp_path.resolve() / "vlt-api",
        "common": tmp_path.resolve() / "vlt-common",
    }
    assert result.settings.root_project_name == "ley-vault"


def test_bootstrap_offline_resolves_paths_only(tmp_path: Path) -> None:
    result = bootstrap(tmp_path, fetch=None)

    assert result.catalogs["libs"] == tmp_path.resolve() / LIBS_CATALOG_CACHE
    assert not (tmp_path / ".gradle").exists()


def test_bootstrap_keeps_absolute_paths(tmp_path: Path) -> None:
    shared = tmp_path / "shared" / "catalog.toml"
    settings = BuildSettings(
        root_project_name="demo",
        dependency_resolution=DependencyResolution(
            version_catalogs=[VersionCatalogSource(name="libs", url="https://example.com/c.toml", local_path=shared)],
        ),
        includes=[ProjectInclude(name="core", project_dir=tmp_path / "elsewhere")],
    )

    result = bootstrap(tmp_path / "root", settings, fetch=None)

    assert result.catalogs == {"libs": shared}
    assert result.projects == {"core": tmp_path / "elsewhere"}


def test_bootstrap_fetches_catalogs_in_declaration_order(tmp_path: Path) -> None:
    settings = BuildSettings(
        root_project_name="demo",
        dependency_resolution=DependencyResolution(
            version_catalogs=[
                VersionCatalogSource(name="libs", url="https://example.com/libs.toml", local_path=Path("a.toml")),
                VersionCatalogSource(name="tools", url="https://example.com/tools.toml", local_path=Path("b.toml")),
            ],
        ),
    )
    fetch = RecordingFetch()

    result = bootstrap(tmp_path, settings, fetch=fetch)

    assert [url for url, _ in fetch.calls] == [
        "https://example.com/libs.toml",
        "https://example.com/tools.toml",
    ]
    assert list(result.catalogs) == ["libs", "tools"]
    assert result.projects == {}


def test_bootstrap_rejects_catalog_added_twice(tmp_path: Path) -> None:
    settings = default_settings()
    settings.dependency_resolution.version_catalogs.append(
        VersionCatalogSource(name="libs", url="https://example.com/other.toml", local_path=Path("other.toml")),
    )

    with pytest.raises(SettingsError, match="declared twice"):
        bootstrap(tmp_path, settings, fetch=None)


def test_bootstrap_rejects_project_included_twice(tmp_path: Path) -> None:
    settings = default_settings()
    settings.includes.append(ProjectInclude(name="api", project_dir=Path("other-api")))

    with pytest.raises(SettingsError, match="included twice"):
        bootstrap(tmp_path, settings, fetch=None)


def test_bootstrap_propagates_fetch_failure(tmp_path: Path) -> None:
    def failing_fetch(url: str, local_path: Path) -> Path:
        raise NetworkError("offline", url=url, path=local_path)

    with pytest.raises(NetworkError):
        bootstrap(tmp_path, fetch=failing_fetch)


def test_bootstrap_against_live_server(tmp_path: Path, catalog_server) -> None:
    catalog_server.documents["/libs.version.toml"] = b'[versions]\nkotlin = "2.2.10"\n'
    settings = default_settings()
    settings.dependency_resolution.version_catalogs = [
        VersionCatalogSource(
            name="libs",
            url=catalog_server.url("/libs.version.toml"),
            local_path=LIBS_CATALOG_CACHE,
        ),
    ]

    result = bootstrap(tmp_path, settings)

    assert result.catalogs["libs"].read_bytes() == b'[versions]\nkotlin = "2.2.10"\n'
