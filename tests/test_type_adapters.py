# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the built-in value type adapters."""

from __future__ import annotations

from pathlib import Path

import pytest

from leyvault.vault import VaultFactory
from leyvault.vault.adapters import BoolAdapter, FloatAdapter, IntAdapter, StrAdapter, builtin_type_adapters


@pytest.fixture
def config(tmp_path: Path):
    return VaultFactory(tmp_path).create("types.json")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (42, 42),
        (3.9, 3),
        (" 17 ", 17),
        ("-5", -5),
        ("4.5", None),
        ("abc", None),
        (True, None),
        ([1], None),
    ],
)
def test_int_adapter(config, raw, expected) -> None:
    assert IntAdapter().from_object(config, "value", raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(2, 2.0), (2.5, 2.5), ("1e3", 1000.0), (" 0.25 ", 0.25), ("nope", None), (False, None), ({}, None)],
)
def test_float_adapter(config, raw, expected) -> None:
    assert FloatAdapter().from_object(config, "value", raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (True, True),
        (False, False),
        ("TRUE", True),
        ("yes", False),
        ("false", False),
        (1, True),
        (0, False),
        (0.0, False),
        ([True], None),
    ],
)
def test_bool_adapter(config, raw, expected) -> None:
    assert BoolAdapter().from_object(config, "value", raw) is expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("text", "text"), (5, "5"), (1.5, "1.5"), (True, "true"), (False, "false"), (None, None)],
)
def test_str_adapter(config, raw, expected) -> None:
    assert StrAdapter().from_object(config, "value", raw) == expected


def test_adapters_write_values_unchanged(config) -> None:
    for type_, adapter in builtin_type_adapters().items():
        sample = type_()
        assert adapter.to_object(config, "value", sample) == sample


def test_builtin_adapters_are_fresh_instances() -> None:
    first = builtin_type_adapters()
    second = builtin_type_adapters()

    assert set(first) == {int, float, bool, str}
    assert first[int] is not second[int]


def test_config_reads_through_adapters(config) -> None:
    config.data.update({"port": "8080", "ratio": 1, "debug": "True", "name": 12})

    assert config.get("port", int) == 8080
    assert config.get("ratio", float) == 1.0
    assert config.get("debug", bool) is True
    assert config.get("name", str) == "12"
    assert config.get("name", list) is None
