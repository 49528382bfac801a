"""Tree subpackage: the arena-backed destination tree.

Re-exports the public API for the tree module:
- Arena / Span: append-only text storage and stable references into it
- SpanInterner: LRU de-duplication of repeated text copied into an Arena
- NodeType: IntFlag of node kinds and style flags
- Tree: index-addressed document tree owning an Arena
- NodeRef: (tree, id) handle with key/position lookup
"""

from toml_tree.tree.arena import EMPTY_SPAN, Arena, Span
from toml_tree.tree.interner import SpanInterner
from toml_tree.tree.nodes import NONE, NodeData, NodeType
from toml_tree.tree.ref import NodeRef
from toml_tree.tree.tree import Tree

__all__ = [
    "EMPTY_SPAN",
    "NONE",
    "Arena",
    "NodeData",
    "NodeRef",
    "NodeType",
    "Span",
    "SpanInterner",
    "Tree",
]
