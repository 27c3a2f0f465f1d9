# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File-backed configuration with typed fields and pluggable formats."""

from __future__ import annotations

from .config import VaultConfig
from .factory import ConfigFactory, VaultFactory
from .fields import VaultField, VaultFieldList, VaultFieldSection
from .registry import DEFAULT_REGISTRY, Initializable, Registry
from .view import ConfigView

__all__ = [
    "DEFAULT_REGISTRY",
    "ConfigFactory",
    "ConfigView",
    "Initializable",
    "Registry",
    "VaultConfig",
    "VaultFactory",
    "VaultField",
    "VaultFieldList",
    "VaultFieldSection",
]
