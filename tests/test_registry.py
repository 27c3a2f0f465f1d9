# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the initializable instance registry."""

from __future__ import annotations

import pytest

from leyvault.errors import RegistryError
from leyvault.vault import Initializable, Registry


class Service(Initializable):
    def __init__(self) -> None:
        self.events: list[str] = []

    def on_install(self) -> None:
        self.events.append("install")

    def on_uninstall(self) -> None:
        self.events.append("uninstall")


class OtherService(Initializable):
    pass


def test_register_and_get_instance() -> None:
    registry = Registry()
    service = Service()

    registry.register(service, Service)

    assert registry.get_instance(Service) is service
    assert registry.is_registered(Service)
    assert not registry.is_registered(OtherService)
    assert service.events == ["install"]


def test_register_twice_fails() -> None:
    registry = Registry()
    registry.register(Service(), Service)

    with pytest.raises(RegistryError, match="already registered"):
        registry.register(Service(), Service)


def test_unregister_runs_hook_and_forgets_instance() -> None:
    registry = Registry()
    service = Service()
    registry.register(service, Service)

    registry.unregister(Service)

    assert service.events == ["install", "uninstall"]
    assert not registry.is_registered(Service)
    with pytest.raises(RegistryError):
        registry.get_instance(Service)


def test_unregister_missing_fails() -> None:
    with pytest.raises(RegistryError, match="no instance"):
        Registry().unregister(Service)


def test_get_instance_with_wrong_type_fails() -> None:
    registry = Registry()
    registry.register(OtherService(), Service)  # type: ignore[arg-type]

    with pytest.raises(TypeError):
        registry.get_instance(Service)
