# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for JSON, YAML and TOML file adapters."""

from __future__ import annotations

import json
from textwrap import dedent

import pytest

from leyvault.errors import AdapterError
from leyvault.vault.adapters import JsonConfigAdapter, TomlConfigAdapter, YamlConfigAdapter
from leyvault.vault.adapters.files import split_inline_comment


@pytest.mark.parametrize("adapter", [JsonConfigAdapter(), YamlConfigAdapter(), TomlConfigAdapter()])
def test_blank_document_reads_as_empty_table(adapter) -> None:
    assert adapter.read("") == {}
    assert adapter.read("  \n\n") == {}


def test_json_reads_and_writes_indented() -> None:
    adapter = JsonConfigAdapter()

    data = adapter.read('{"server": {"port": 8080}, "name": "vault"}')
    rendered = adapter.write("", {"name": "vält", "server": {"port": 9090}})

    assert data == {"server": {"port": 8080}, "name": "vault"}
    assert rendered == '{\n  "name": "vält",\n  "server": {\n    "port": 9090\n  }\n}\n'


@pytest.mark.parametrize(
    ("adapter", "content", "message"),
    [
        (JsonConfigAdapter(), "{broken", "Invalid JSON"),
        (JsonConfigAdapter(), "[1, 2]", "mapping"),
        (YamlConfigAdapter(), "key: [unclosed", "Invalid YAML"),
        (YamlConfigAdapter(), "- a\n- b\n", "mapping"),
        (TomlConfigAdapter(), "key = ", "Invalid TOML"),
    ],
)
def test_invalid_documents_raise_adapter_error(adapter, content: str, message: str) -> None:
    with pytest.raises(AdapterError, match=message):
        adapter.read(content)


def test_yaml_comment_only_document_is_empty() -> None:
    assert YamlConfigAdapter().read("# nothing here\n") == {}


def test_yaml_render_keeps_key_order() -> None:
    rendered = YamlConfigAdapter().write("", {"zeta": 1, "alpha": {"beta": [1, 2]}})

    assert rendered == "zeta: 1\nalpha:\n  beta:\n  - 1\n  - 2\n"


def test_yaml_empty_table_renders_empty_document() -> None:
    assert YamlConfigAdapter().write("", {}) == ""


def test_toml_preserves_comments_on_rewrite() -> None:
    adapter = TomlConfigAdapter()
    current = dedent(
        """\
        # Vault settings
        # generated

        # server block
        [server]
        host = "localhost"  # bind address
        port = 8080

        # trailing note
        """
    )

    updated = adapter.update_value(current, "server.port", 9090)

    assert updated == dedent(
        """\
        # Vault settings
        # generated

        # server block
        [server]
        host = "localhost"  # bind address
        port = 9090

        # trailing note
        """
    )


def test_toml_comments_follow_reordered_keys() -> None:
    adapter = TomlConfigAdapter()
    current = 'first = 1  # one\n# about second\nsecond = 2\n'

    updated = adapter.write(current, {"second": 3, "first": 1})

    assert updated == "# about second\nsecond = 3\nfirst = 1  # one\n"


def test_toml_comments_of_removed_keys_are_dropped() -> None:
    adapter = TomlConfigAdapter()
    current = "# gone\nremoved = true\nkept = 1\n"

    updated = adapter.update_value(current, "removed", None)

    assert updated == "kept = 1\n"
    assert adapter.read(updated) == {"kept": 1}


def test_toml_unrepresentable_value_raises_adapter_error() -> None:
    with pytest.raises(AdapterError, match="Cannot render TOML"):
        TomlConfigAdapter().write("", {"value": object()})


def test_yaml_preserves_comments_on_rewrite() -> None:
    adapter = YamlConfigAdapter()
    current = dedent(
        """\
        # app config

        name: demo  # project name
        # nested settings
        server:
          port: 8080
        """
    )

    updated = adapter.update_value(current, "server.port", 9090)

    assert updated == dedent(
        """\
        # app config

        name: demo  # project name
        # nested settings
        server:
          port: 9090
        """
    )
    assert adapter.read(updated) == {"name": "demo", "server": {"port": 9090}}


def test_update_value_creates_nested_tables() -> None:
    adapter = JsonConfigAdapter()

    updated = adapter.update_value("{}", "a.b.c", True)

    assert json.loads(updated) == {"a": {"b": {"c": True}}}


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ('key = "value"  # note', ('key = "value"', "# note")),
        ('key = "a # b"', ('key = "a # b"', None)),
        ("key = 'x#y' # c", ("key = 'x#y'", "# c")),
        ('key = "esc \\" # still"', ('key = "esc \\" # still"', None)),
        ("url: http://host/#frag", ("url: http://host/#frag", None)),
        ("# full line", ("", "# full line")),
    ],
)
def test_split_inline_comment(line: str, expected: tuple[str, str | None]) -> None:
    assert split_inline_comment(line) == expected


def test_toml_comments_stay_with_their_array_table_element() -> None:
    adapter = TomlConfigAdapter()
    note = "n" * 120
    current = (
        "# first server\n"
        "[[servers]]\n"
        'name = "alpha"  # primary\n'
        f'note = "{note}"\n'
        "\n"
        "# second server\n"
        "[[servers]]\n"
        'name = "beta"  # backup\n'
        f'note = "{note}"\n'
    )
    data = adapter.read(current)
    data["servers"][1]["name"] = "gamma"

    updated = adapter.write(current, data)

    assert '# first server\n[[servers]]\nname = "alpha"  # primary\n' in updated
    assert '# second server\n[[servers]]\nname = "gamma"  # backup\n' in updated
    assert updated.count("# second server") == 1
    assert updated.count("# backup") == 1
    assert adapter.read(updated)["servers"][1]["name"] == "gamma"
