# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File format and value type adapters."""

from __future__ import annotations

from .files import ConfigFileAdapter, JsonConfigAdapter, TomlConfigAdapter, YamlConfigAdapter
from .types import BoolAdapter, FloatAdapter, IntAdapter, StrAdapter, TypeAdapter, builtin_type_adapters

__all__ = [
    "BoolAdapter",
    "ConfigFileAdapter",
    "FloatAdapter",
    "IntAdapter",
    "JsonConfigAdapter",
    "StrAdapter",
    "TomlConfigAdapter",
    "TypeAdapter",
    "YamlConfigAdapter",
    "builtin_type_adapters",
]
