# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Creation, caching and persistence of vault configs."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from threading import RLock
from typing import Any, Final, TypeVar

from ..errors import AdapterError, VaultError
from .adapters.files import ConfigFileAdapter, JsonConfigAdapter, TomlConfigAdapter, YamlConfigAdapter
from .adapters.types import TypeAdapter, builtin_type_adapters
from .config import VaultConfig
from .registry import DEFAULT_REGISTRY, Initializable, Registry

LOGGER = logging.getLogger(__name__)

RESOURCE_DIRECTORY: Final[str] = "vault"
JSON_ENDINGS: Final[tuple[str, ...]] = ("jsn", "json", "jason")
YAML_ENDINGS: Final[tuple[str, ...]] = ("yml", "yaml")
TOML_ENDINGS: Final[tuple[str, ...]] = ("tml", "toml")

ValueT = TypeVar("ValueT")
ConfigTarget = str | Path | VaultConfig


class ConfigFactory(Initializable, ABC):
    """Service creating :class:`VaultConfig` objects for files."""

    @classmethod
    def get_instance(cls, registry: Registry | None = None) -> ConfigFactory:
        """Return the factory installed in ``registry`` (the default registry when omitted)."""

        return (registry or DEFAULT_REGISTRY).get_instance(ConfigFactory)

    def install(self, registry: Registry | None = None) -> None:
        """Register this factory as the :class:`ConfigFactory` of ``registry``."""

        (registry or DEFAULT_REGISTRY).register(self, ConfigFactory)

    @property
    @abstractmethod
    def default_directory(self) -> Path:
        """Directory that relative file names are resolved against."""

    @abstractmethod
    def create(self, target: ConfigTarget) -> VaultConfig:
        """Return the config for ``target``, loading it on first use."""

    @abstractmethod
    def reload(self, target: ConfigTarget) -> VaultConfig:
        """Re-read ``target`` from disk."""

    @abstractmethod
    def save(self, target: ConfigTarget) -> None:
        """Write the loaded config for ``target`` to disk."""

    @abstractmethod
    def register_file_adapter(self, adapter: ConfigFileAdapter, *endings: str) -> None:
        """Use ``adapter`` for files whose extension is one of ``endings``."""

    @abstractmethod
    def register_type_adapter(self, adapter: TypeAdapter[ValueT], type_: type[ValueT]) -> None:
        """Use ``adapter`` to convert values read as ``type_``."""

    @abstractmethod
    def get_type_adapter(self, type_: type[ValueT]) -> TypeAdapter[ValueT] | None:
        """Return the adapter registered for ``type_``, if any."""


class VaultFactory(ConfigFactory):
    """File-backed :class:`ConfigFactory` for JSON, YAML and TOML documents.

    Missing files are seeded from ``<resource_package>/vault/<name>`` when such
    a packaged resource exists, otherwise created empty.
    """

    def __init__(self, default_directory: Path | str, *, resource_package: str | None = None) -> None:
        self._default_directory = Path(default_directory)
        self._resource_package = resource_package
        self._file_adapters: dict[str, ConfigFileAdapter] = {}
        self._type_adapters: dict[type[Any], TypeAdapter[Any]] = {}
        self._cache: dict[Path, VaultConfig] = {}
        self._lock = RLock()
        try:
            self._default_directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise VaultError(f"Cannot create config directory {self._default_directory}: {exc}") from exc
        self.register_defaults()

    def register_defaults(self) -> None:
        """Register the built-in type adapters and file adapters."""

        for type_, adapter in builtin_type_adapters().items():
            self.register_type_adapter(adapter, type_)
        self.register_file_adapter(JsonConfigAdapter(), *JSON_ENDINGS)
        self.register_file_adapter(YamlConfigAdapter(), *YAML_ENDINGS)
        self.register_file_adapter(TomlConfigAdapter(), *TOML_ENDINGS)

    def on_install(self) -> None:
        LOGGER.debug("vault factory installed for %s", self._default_directory)

    def on_uninstall(self) -> None:
        with self._lock:
            self._cache.clear()
        LOGGER.debug("vault factory for %s uninstalled", self._default_directory)

    @property
    def default_directory(self) -> Path:
        return self._default_directory

    def create(self, target: ConfigTarget) -> VaultConfig:
        path = self._resolve(target)
        with self._lock:
            cached = self._cache.get(path)
            if cached is not None:
                return cached
            config = VaultConfig(source=path, factory=self, data=self._load(path))
            self._cache[path] = config
            return config

    def reload(self, target: ConfigTarget) -> VaultConfig:
        path = self._resolve(target)
        with self._lock:
            data = self._load(path)
            config = self._cache.get(path)
            if config is None:
                config = VaultConfig(source=path, factory=self, data=data)
                self._cache[path] = config
            else:
                config.data.clear()
                config.data.update(data)
            return config

    def save(self, target: ConfigTarget) -> None:
        path = self._resolve(target)
        with self._lock:
            config = self._cache.get(path)
            if config is None:
                raise VaultError(f"Config not loaded: {path}")
            adapter = self.file_adapter_for(path)
            if adapter is None:
                raise VaultError(f"No adapter found for file: {path}")
            try:
                current = path.read_text(encoding="utf-8") if path.exists() else ""
                content = adapter.write(current, config.data)
                path.write_text(content, encoding="utf-8")
            except AdapterError as exc:
                raise AdapterError(f"Failed to save config to {path}: {exc}") from exc
            except OSError as exc:
                raise VaultError(f"Failed to save config to {path}: {exc}") from exc

    def register_file_adapter(self, adapter: ConfigFileAdapter, *endings: str) -> None:
        for ending in endings:
            self._file_adapters[ending.lower().lstrip(".")] = adapter

    def register_type_adapter(self, adapter: TypeAdapter[ValueT], type_: type[ValueT]) -> None:
        self._type_adapters[type_] = adapter

    def get_type_adapter(self, type_: type[ValueT]) -> TypeAdapter[ValueT] | None:
        return self._type_adapters.get(type_)

    def file_adapter_for(self, path: Path) -> ConfigFileAdapter | None:
        """Return the file adapter matching the extension of ``path``."""

        return self._file_adapters.get(path.suffix.lower().lstrip("."))

    def _resolve(self, target: ConfigTarget) -> Path:
        if isinstance(target, VaultConfig):
            return target.file
        path = Path(target).expanduser()
        if not path.is_absolute():
            path = self._default_directory / path
        return path.absolute()

    def _load(self, path: Path) -> dict[str, Any]:
        if not (path.exists() or self._copy_from_resources(path)):
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.touch()
            except OSError as exc:
                raise VaultError(f"Failed to create config file {path}: {exc}") from exc
            return {}

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise VaultError(f"Failed to load config from {path}: {exc}") from exc
        adapter = self.file_adapter_for(path)
        if adapter is None:
            return {}
        try:
            return adapter.read(content)
        except AdapterError as exc:
            raise AdapterError(f"Failed to load config from {path}: {exc}") from exc

    def _copy_from_resources(self, path: Path) -> bool:
        if self._resource_package is None:
            return False
        try:
            resource = resources.files(self._resource_package).joinpath(RESOURCE_DIRECTORY, path.name)
            if not resource.is_file():
                return False
            payload = resource.read_bytes()
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except (ModuleNotFoundError, OSError) as exc:
            raise VaultError(f"Failed to copy resource to {path}: {exc}") from exc
        LOGGER.debug("seeded %s from %s", path, self._resource_package)
        return True


__all__ = ["ConfigFactory", "ConfigTarget", "VaultFactory"]
