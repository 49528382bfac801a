"""NodeType flags and NodeData storage for the arena-backed document tree.

A node's kind is a combination of NodeType flags:

- NOTYPE          : freshly allocated, nothing assigned yet
- MAP / SEQ       : container, optionally combined with KEY
- KEY | VAL       : keyed scalar (member of a map)
- VAL             : keyless scalar (element of a sequence, or a bare root)

The VAL_QUOTED style flag rides alongside the kind and tells
emitters which scalars were string literals in the source document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag

from toml_tree.tree.arena import EMPTY_SPAN, Span

__all__ = ["NONE", "NodeData", "NodeType"]

# Sentinel id for "no node" (e.g. the parent of the root).
NONE = -1


class NodeType(IntFlag):
    """Bit flags describing the kind and style of a tree node."""

    NOTYPE = 0
    VAL = 1 << 0
    KEY = 1 << 1
    MAP = 1 << 2
    SEQ = 1 << 3
    VAL_QUOTED = 1 << 4

    KEYVAL = KEY | VAL
    KEYMAP = KEY | MAP
    KEYSEQ = KEY | SEQ
    CONTAINER = MAP | SEQ
    # Bits that are replaced whenever a node's kind is reassigned.
    KIND_MASK = VAL | KEY | MAP | SEQ | VAL_QUOTED


@dataclass(slots=True)
class NodeData:
    """Storage record for one node.

    Attributes:
        type:     NodeType flags.
        key:      Arena span of the key; meaningful only when KEY is set.
        val:      Arena span of the scalar value; meaningful only when VAL is set.
        parent:   Id of the parent node, or NONE for the root.
        children: Ids of the child nodes in document order.
    """

    type: NodeType = NodeType.NOTYPE
    key: Span = EMPTY_SPAN
    val: Span = EMPTY_SPAN
    parent: int = NONE
    children: list[int] = field(default_factory=list)
