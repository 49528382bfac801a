"""toml-tree - materialize TOML documents into an arena-backed document tree."""

from __future__ import annotations

from toml_tree.api import (
    materialize,
    parse_toml_file,
    parse_toml_in_arena,
    parse_toml_in_place,
)
from toml_tree.config import MaterializeConfig, UnknownValuePolicy
from toml_tree.emit import emit_json, emit_yaml
from toml_tree.errors import (
    InvalidTargetError,
    Location,
    NestingDepthError,
    SourceReadError,
    TomlParseError,
    TomlTreeError,
    UnsupportedValueError,
)
from toml_tree.materializer import Materializer
from toml_tree.protocols import ErrorHandler
from toml_tree.tree import NodeRef, NodeType, Tree

__version__: str = "0.1.0"
__all__: list[str] = [
    "ErrorHandler",
    "InvalidTargetError",
    "Location",
    "MaterializeConfig",
    "Materializer",
    "NestingDepthError",
    "NodeRef",
    "NodeType",
    "SourceReadError",
    "TomlParseError",
    "TomlTreeError",
    "Tree",
    "UnknownValuePolicy",
    "UnsupportedValueError",
    "emit_json",
    "emit_yaml",
    "materialize",
    "parse_toml_file",
    "parse_toml_in_arena",
    "parse_toml_in_place",
]
