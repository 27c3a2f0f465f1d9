# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry of process-wide service instances keyed by their interface."""

from __future__ import annotations

from typing import TypeVar, cast

from ..errors import RegistryError

InitializableT = TypeVar("InitializableT", bound="Initializable")


class Initializable:
    """Service that is notified when it enters or leaves a :class:`Registry`."""

    def on_install(self) -> None:
        """Hook invoked before the instance becomes visible in a registry."""

    def on_uninstall(self) -> None:
        """Hook invoked before the instance is removed from a registry."""


class Registry:
    """Map interface classes to a single installed instance."""

    def __init__(self) -> None:
        self._instances: dict[type[Initializable], Initializable] = {}

    def register(self, instance: InitializableT, cls: type[InitializableT]) -> None:
        """Install ``instance`` as the implementation of ``cls``.

        Raises:
            RegistryError: If ``cls`` already has an instance.
        """

        if cls in self._instances:
            raise RegistryError(f"An instance of {cls.__name__} is already registered")
        instance.on_install()
        self._instances[cls] = instance

    def unregister(self, cls: type[Initializable]) -> None:
        """Remove the instance registered for ``cls``.

        Raises:
            RegistryError: If nothing is registered for ``cls``.
        """

        instance = self._instances.get(cls)
        if instance is None:
            raise RegistryError(f"There is no instance of {cls.__name__}")
        instance.on_uninstall()
        del self._instances[cls]

    def get_instance(self, cls: type[InitializableT]) -> InitializableT:
        """Return the instance registered for ``cls``.

        Raises:
            RegistryError: If nothing is registered for ``cls``.
            TypeError: If the registered instance does not implement ``cls``.
        """

        instance = self._instances.get(cls)
        if instance is None:
            raise RegistryError(f"No instance registered for {cls.__name__}")
        if not isinstance(instance, cls):
            raise TypeError(f"Registered instance is not of type {cls.__name__}")
        return cast(InitializableT, instance)

    def is_registered(self, cls: type[Initializable]) -> bool:
        """Return ``True`` when ``cls`` has an installed instance."""

        return cls in self._instances


DEFAULT_REGISTRY = Registry()

__all__ = ["DEFAULT_REGISTRY", "Initializable", "Registry"]
