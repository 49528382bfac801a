"""YAML and JSON emitters for a materialized Tree.

Every scalar in the tree is text, so emitted documents carry strings only.
YAML output keeps the source quoting: values tagged VAL_QUOTED (TOML
string literals) are written double-quoted, other scalars are written
plain when that reads back as the same string and quoted by PyYAML
otherwise. Re-parsing the output yields the stored text unchanged, e.g.
``port = 8080`` comes back as ``"8080"``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import yaml

from toml_tree.tree.nodes import NodeType

if TYPE_CHECKING:
    from toml_tree.tree.tree import Tree

__all__ = ["emit_json", "emit_yaml"]


class _QuotedStr(str):
    """A string that must be emitted double-quoted."""

    __slots__ = ()


class _TreeDumper(yaml.SafeDumper):
    pass


def _represent_quoted(dumper: yaml.SafeDumper, value: _QuotedStr) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(value), style='"')


_TreeDumper.add_representer(_QuotedStr, _represent_quoted)


def _yaml_scalar(text: str, node_type: NodeType) -> str:
    return _QuotedStr(text) if node_type & NodeType.VAL_QUOTED else text


def emit_yaml(tree: Tree, node_id: int | None = None) -> str:
    """Serialize a tree (or the subtree at ``node_id``) as a YAML document."""
    return yaml.dump(
        tree.to_builtin(node_id, convert_scalar=_yaml_scalar),
        Dumper=_TreeDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def emit_json(tree: Tree, node_id: int | None = None, indent: int | None = 2) -> str:
    """Serialize a tree (or the subtree at ``node_id``) as JSON text."""
    return json.dumps(tree.to_builtin(node_id), indent=indent, ensure_ascii=False)
