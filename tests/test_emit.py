"""Tests for the YAML and JSON emitters.

Emitted documents are re-parsed with PyYAML / json; since every scalar is
stored as text, the re-parsed values are the stored strings.
"""

from __future__ import annotations

import json

import yaml

from toml_tree import emit_json, emit_yaml, parse_toml_in_arena


class TestEmitYaml:
    def test_round_trip_is_text(self) -> None:
        tree = parse_toml_in_arena('[server]\nhost = "localhost"\nport = 8080\n')
        loaded = yaml.safe_load(emit_yaml(tree))
        assert loaded == {"server": {"host": "localhost", "port": "8080"}}

    def test_quoted_strings_are_double_quoted(self) -> None:
        tree = parse_toml_in_arena('host = "localhost"\nport = 8080\n')
        out = emit_yaml(tree)
        assert 'host: "localhost"' in out
        assert "port: '8080'" in out

    def test_plain_text_stays_plain(self) -> None:
        tree = parse_toml_in_arena("version = 1.5\nname = 'app'\n")
        out = emit_yaml(tree)
        assert "version: '1.5'" in out
        assert 'name: "app"' in out

    def test_member_order_kept(self) -> None:
        tree = parse_toml_in_arena("z = 1\na = 2\nm = 3\n")
        assert list(yaml.safe_load(emit_yaml(tree))) == ["z", "a", "m"]

    def test_special_values_survive(self) -> None:
        tree = parse_toml_in_arena(
            "p = inf\nn = -inf\nx = nan\nb = true\nd = 1979-05-27\n"
        )
        assert yaml.safe_load(emit_yaml(tree)) == {
            "p": ".inf",
            "n": "-.inf",
            "x": ".nan",
            "b": "true",
            "d": "1979-05-27",
        }

    def test_multiline_string(self) -> None:
        tree = parse_toml_in_arena('text = """\nline one\nline two\n"""\n')
        assert yaml.safe_load(emit_yaml(tree)) == {"text": "line one\nline two\n"}

    def test_subtree(self) -> None:
        tree = parse_toml_in_arena("[a]\nb = [1, 2]\n")
        node = tree["a"]["b"].id
        assert yaml.safe_load(emit_yaml(tree, node)) == ["1", "2"]

    def test_unicode(self) -> None:
        tree = parse_toml_in_arena('name = "café"\n')
        out = emit_yaml(tree)
        assert "café" in out
        assert yaml.safe_load(out) == {"name": "café"}


class TestEmitJson:
    def test_round_trip_is_text(self) -> None:
        tree = parse_toml_in_arena('name = "test"\ncount = 42\n')
        assert json.loads(emit_json(tree)) == {"name": "test", "count": "42"}

    def test_compact(self) -> None:
        tree = parse_toml_in_arena("a = [1, 2]\n")
        assert emit_json(tree, indent=None) == '{"a": ["1", "2"]}'

    def test_subtree(self) -> None:
        tree = parse_toml_in_arena("[t]\nx = true\n")
        assert json.loads(emit_json(tree, tree["t"].id)) == {"x": "true"}
