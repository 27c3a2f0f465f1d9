# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models describing the root build settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PluginSpec(BaseModel):
    """A build plugin pinned to a version for every module."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    version: str


class PluginManagement(BaseModel):
    """Repositories and plugin versions shared by all modules."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    repositories: list[str] = Field(default_factory=list)
    plugins: list[PluginSpec] = Field(default_factory=list)


class VersionCatalogSource(BaseModel):
    """Remote version catalog and the cache file it is materialised into."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    url: str
    local_path: Path

    @field_validator("url")
    @classmethod
    def _require_http(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("catalog URL must start with http:// or https://")
        return value

    def resolve(self, root: Path) -> Path:
        """Return the cache path anchored at ``root`` when relative."""

        return self.local_path if self.local_path.is_absolute() else root / self.local_path


class DependencyResolution(BaseModel):
    """Repositories and version catalogs used to resolve module dependencies."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    repositories: list[str] = Field(default_factory=list)
    version_catalogs: list[VersionCatalogSource] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_catalogs(self) -> DependencyResolution:
        _ensure_unique([catalog.name for catalog in self.version_catalogs], "version catalog")
        return self


class ProjectInclude(BaseModel):
    """A subproject wired into the root build."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    project_dir: Path

    def resolve(self, root: Path) -> Path:
        """Return the project directory anchored at ``root`` when relative."""

        return self.project_dir if self.project_dir.is_absolute() else root / self.project_dir


class BuildSettings(BaseModel):
    """Complete root build settings."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    root_project_name: str
    plugin_management: PluginManagement = Field(default_factory=PluginManagement)
    dependency_resolution: DependencyResolution = Field(default_factory=DependencyResolution)
    includes: list[ProjectInclude] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_includes(self) -> BuildSettings:
        _ensure_unique([include.name for include in self.includes], "project include")
        return self

    def catalog(self, name: str) -> VersionCatalogSource | None:
        """Return the version catalog registered as ``name``, if any."""

        for source in self.dependency_resolution.version_catalogs:
            if source.name == name:
                return source
        return None


def _ensure_unique(names: list[str], label: str) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"duplicate {label} '{name}'")
        seen.add(name)


__all__ = [
    "BuildSettings",
    "DependencyResolution",
    "PluginManagement",
    "PluginSpec",
    "ProjectInclude",
    "VersionCatalogSource",
]
