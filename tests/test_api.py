"""Tests for the public entry points in toml_tree.api.

Covers every target form (new tree, tree root, node id, NodeRef) for the
in-place, arena-copy, file and pre-parsed entry points, plus parse/read
error reporting and the guarantee that failed parses leave the tree alone.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from toml_tree import (
    InvalidTargetError,
    MaterializeConfig,
    NestingDepthError,
    SourceReadError,
    TomlParseError,
    TomlTreeError,
    Tree,
    materialize,
    parse_toml_file,
    parse_toml_in_arena,
    parse_toml_in_place,
)
from toml_tree.tree import EMPTY_SPAN, NodeType, Span

SIMPLE = 'key = "value"'


# ---------------------------------------------------------------------------
# parse_toml_in_place
# ---------------------------------------------------------------------------


class TestParseInPlace:
    def test_returns_new_tree(self) -> None:
        tree = parse_toml_in_place(SIMPLE)
        assert tree.rootref().is_map()
        assert tree["key"].val == "value"

    def test_into_existing_tree(self) -> None:
        tree = Tree()
        result = parse_toml_in_place(SIMPLE, tree)
        assert result is tree
        assert tree["key"].val == "value"

    def test_with_filename(self) -> None:
        tree = parse_toml_in_place(SIMPLE, filename="test.toml")
        assert tree["key"].val == "value"

    def test_bytes_source(self) -> None:
        tree = parse_toml_in_place(b'name = "caf\xc3\xa9"')
        assert tree["name"].val == "café"

    def test_into_node_id_keeps_key(self) -> None:
        tree = Tree()
        tree.to_map(tree.root_id())
        node = tree.append_child(tree.root_id())
        tree.to_keyval(node, tree.copy_to_arena("config"), EMPTY_SPAN)
        parse_toml_in_place("a = 1", tree, node)
        assert tree["config"].key == "config"
        assert tree["config"].is_map()
        assert tree["config"]["a"].val == "1"

    def test_into_noderef(self) -> None:
        tree = Tree()
        tree.to_seq(tree.root_id())
        first = tree.rootref().append_child()
        second = tree.rootref().append_child()
        parse_toml_in_place("a = 1", first)
        parse_toml_in_place("b = 2", second)
        assert tree.to_builtin() == [{"a": "1"}, {"b": "2"}]

    def test_noderef_with_node_id_rejected(self) -> None:
        tree = Tree()
        with pytest.raises(ValueError, match="cannot be combined"):
            parse_toml_in_place(SIMPLE, tree.rootref(), 0)

    def test_bad_target_type(self) -> None:
        with pytest.raises(TypeError, match="target must be"):
            parse_toml_in_place(SIMPLE, "not a tree")  # type: ignore[arg-type]

    def test_source_buffer_can_change_afterwards(self) -> None:
        source = bytearray(b'key = "value"')
        tree = parse_toml_in_place(bytes(source))
        source[7:12] = b"XXXXX"
        assert tree["key"].val == "value"

    def test_config_is_applied(self) -> None:
        with pytest.raises(NestingDepthError):
            parse_toml_in_place("a = [[1]]", config=MaterializeConfig(max_depth=2))


# ---------------------------------------------------------------------------
# parse_toml_in_arena
# ---------------------------------------------------------------------------


class TestParseInArena:
    def test_returns_new_tree(self) -> None:
        tree = parse_toml_in_arena(SIMPLE)
        assert tree["key"].val == "value"

    def test_into_existing_tree(self) -> None:
        tree = Tree()
        parse_toml_in_arena(SIMPLE, tree)
        assert tree["key"].val == "value"

    def test_with_filename(self) -> None:
        tree = parse_toml_in_arena(SIMPLE, filename="test.toml")
        assert tree.rootref().is_map()

    def test_source_copied_to_arena_first(self) -> None:
        tree = parse_toml_in_arena(SIMPLE)
        prefix = tree.arena.raw(Span(0, len(SIMPLE)))
        assert prefix == SIMPLE.encode()

    def test_arena_mode_uses_more_arena(self) -> None:
        in_place = parse_toml_in_place(SIMPLE)
        in_arena = parse_toml_in_arena(SIMPLE)
        assert in_arena.arena.size == in_place.arena.size + len(SIMPLE)

    def test_parse_error_from_arena_copy(self) -> None:
        with pytest.raises(TomlParseError):
            parse_toml_in_arena("key = ", filename="broken.toml")


# ---------------------------------------------------------------------------
# parse_toml_file
# ---------------------------------------------------------------------------


class TestParseFile:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "app.toml"
        path.write_text('[database]\nserver = "192.168.1.1"\nport = 5432\n')
        tree = parse_toml_file(path)
        assert tree["database"]["server"].val == "192.168.1.1"
        assert tree["database"]["port"].val == "5432"

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "app.toml"
        path.write_text(SIMPLE)
        assert parse_toml_file(str(path))["key"].val == "value"

    def test_into_existing_tree(self, tmp_path: Path) -> None:
        path = tmp_path / "app.toml"
        path.write_text(SIMPLE)
        tree = Tree()
        assert parse_toml_file(path, tree) is tree

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.toml"
        with pytest.raises(SourceReadError) as info:
            parse_toml_file(path)
        assert info.value.location is not None
        assert info.value.location.filename == str(path)
        assert "cannot read file" in str(info.value)

    def test_directory_is_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError):
            parse_toml_file(tmp_path)

    def test_read_error_leaves_tree_untouched(self, tmp_path: Path) -> None:
        tree = Tree()
        with pytest.raises(SourceReadError):
            parse_toml_file(tmp_path / "missing.toml", tree)
        assert len(tree) == 1
        assert tree.type(tree.root_id()) == NodeType.NOTYPE

    def test_parse_error_carries_filename(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("ok = 1\nbad = \n")
        with pytest.raises(TomlParseError) as info:
            parse_toml_file(path)
        assert info.value.location is not None
        assert info.value.location.filename == str(path)
        assert info.value.location.line == 2


# ---------------------------------------------------------------------------
# materialize
# ---------------------------------------------------------------------------


class TestMaterialize:
    def test_preparsed_document(self) -> None:
        document = tomllib.loads("[server]\nport = 8080\n")
        tree = materialize(document)
        assert tree["server"]["port"].val == "8080"

    def test_into_tree_node(self) -> None:
        tree = Tree()
        tree.to_seq(tree.root_id())
        node = tree.append_child(tree.root_id())
        materialize({"a": True}, tree, node)
        assert tree[0]["a"].val == "true"


# ---------------------------------------------------------------------------
# Error reporting
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_parse_error_raised(self) -> None:
        with pytest.raises(TomlParseError) as info:
            parse_toml_in_place("ok = 1\nbad = \n", filename="conf.toml")
        error = info.value
        assert error.location is not None
        assert error.location.filename == "conf.toml"
        assert error.location.line == 2
        assert "(at line" not in error.message
        assert str(error).startswith("conf.toml:2")

    def test_parse_error_leaves_tree_untouched(self) -> None:
        tree = Tree()
        with pytest.raises(TomlParseError):
            parse_toml_in_place("= nope", tree)
        assert len(tree) == 1
        assert tree.type(tree.root_id()) == NodeType.NOTYPE

    def test_invalid_utf8_is_parse_error(self) -> None:
        with pytest.raises(TomlParseError, match="not valid UTF-8"):
            parse_toml_in_place(b"key = '\xff'")

    def test_duplicate_key_is_parse_error(self) -> None:
        with pytest.raises(TomlParseError):
            parse_toml_in_place("a = 1\na = 2\n")

    def test_per_call_handler_replaces_exception(self) -> None:
        class ConfigError(Exception):
            pass

        def handler(error: TomlTreeError) -> None:
            raise ConfigError(str(error)) from error

        with pytest.raises(ConfigError):
            parse_toml_in_place("a = ", error_handler=handler)

    def test_tree_bound_handler(self) -> None:
        seen: list[TomlTreeError] = []
        tree = Tree(error_handler=seen.append)
        with pytest.raises(TomlParseError):
            parse_toml_in_arena("a = ", tree)
        assert len(seen) == 1

    def test_returning_handler_does_not_continue(self, tmp_path: Path) -> None:
        seen: list[TomlTreeError] = []
        tree = Tree()
        with pytest.raises(SourceReadError):
            parse_toml_file(tmp_path / "nope.toml", tree, error_handler=seen.append)
        assert [type(e) for e in seen] == [SourceReadError]
        assert len(tree) == 1

    def test_filled_root_is_reported(self) -> None:
        seen: list[TomlTreeError] = []
        tree = parse_toml_in_arena("a = 1", error_handler=seen.append)
        with pytest.raises(InvalidTargetError):
            parse_toml_in_arena("b = 2", tree, error_handler=seen.append)
        assert [type(e) for e in seen] == [InvalidTargetError]
        assert tree.to_builtin() == {"a": "1"}

    def test_surrogate_in_preparsed_value_is_reported(self) -> None:
        seen: list[TomlTreeError] = []
        with pytest.raises(TomlTreeError):
            materialize({"s": "\ud800"}, error_handler=seen.append)
        assert len(seen) == 1
