"""Tree: index-addressed document tree with an owned string arena.

Nodes live in a flat list and are addressed by integer id; the root is
always id 0. Keys and scalar values are ``Span`` references into the tree's
``Arena``, never Python strings borrowed from the source document, so the
tree stays valid after the source is gone.

Kind reassignment (``to_map``, ``to_seq``, ``to_keyval``, ``to_val``)
replaces the node's kind, key and value in one step and is only legal on a
node without children. Nodes are never removed.

Example::

    tree = Tree()
    root = tree.root_id()
    tree.to_map(root)
    child = tree.append_child(root)
    tree.to_keyval(child, tree.copy_to_arena("port"), tree.copy_to_arena("8080"))
    tree["port"].val   # "8080"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from toml_tree.tree.arena import EMPTY_SPAN, Arena, Span
from toml_tree.tree.nodes import NONE, NodeData, NodeType
from toml_tree.tree.ref import NodeRef

if TYPE_CHECKING:
    from toml_tree.protocols import ErrorHandler

__all__ = ["Tree"]


class Tree:
    """Arena-backed document tree.

    Args:
        error_handler: Handler bound to this tree; used by the parse entry
            points when no per-call handler is given. ``None`` means errors
            are raised directly.
    """

    def __init__(self, error_handler: ErrorHandler | None = None) -> None:
        self._nodes: list[NodeData] = [NodeData()]
        self._arena = Arena()
        self.error_handler: ErrorHandler | None = error_handler

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, item: str | int) -> NodeRef:
        return self.rootref()[item]

    def __repr__(self) -> str:
        return f"Tree(size={len(self._nodes)}, arena={self._arena.size})"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def root_id(self) -> int:
        return 0

    def rootref(self) -> NodeRef:
        return NodeRef(self, self.root_id())

    def ref(self, node: int) -> NodeRef:
        self._p(node)
        return NodeRef(self, node)

    def _p(self, node: int) -> NodeData:
        if not 0 <= node < len(self._nodes):
            msg = f"node id {node} out of range for tree of size {len(self._nodes)}"
            raise IndexError(msg)
        return self._nodes[node]

    # ------------------------------------------------------------------
    # Arena
    # ------------------------------------------------------------------

    @property
    def arena(self) -> Arena:
        return self._arena

    def alloc_arena(self, size: int) -> Span:
        return self._arena.alloc(size)

    def copy_to_arena(self, text: str | bytes) -> Span:
        return self._arena.copy(text)

    def text(self, span: Span) -> str:
        return self._arena.text(span)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def type(self, node: int) -> NodeType:
        return self._p(node).type

    def has_key(self, node: int) -> bool:
        return bool(self._p(node).type & NodeType.KEY)

    def has_val(self, node: int) -> bool:
        return bool(self._p(node).type & NodeType.VAL)

    def is_map(self, node: int) -> bool:
        return bool(self._p(node).type & NodeType.MAP)

    def is_seq(self, node: int) -> bool:
        return bool(self._p(node).type & NodeType.SEQ)

    def is_val(self, node: int) -> bool:
        """True for a keyless scalar."""
        return self._p(node).type & NodeType.KEYVAL == NodeType.VAL

    def is_keyval(self, node: int) -> bool:
        return self._p(node).type & NodeType.KEYVAL == NodeType.KEYVAL

    def is_val_quoted(self, node: int) -> bool:
        return bool(self._p(node).type & NodeType.VAL_QUOTED)

    def key_span(self, node: int) -> Span:
        data = self._p(node)
        if not data.type & NodeType.KEY:
            msg = f"node {node} has no key"
            raise ValueError(msg)
        return data.key

    def key(self, node: int) -> str:
        return self._arena.text(self.key_span(node))

    def val_span(self, node: int) -> Span:
        data = self._p(node)
        if not data.type & NodeType.VAL:
            msg = f"node {node} has no value"
            raise ValueError(msg)
        return data.val

    def val(self, node: int) -> str:
        return self._arena.text(self.val_span(node))

    def parent(self, node: int) -> int:
        return self._p(node).parent

    def num_children(self, node: int) -> int:
        return len(self._p(node).children)

    def children(self, node: int) -> list[int]:
        return list(self._p(node).children)

    def child(self, node: int, pos: int) -> int:
        """Return the id of the child at ``pos`` (negative indexes allowed)."""
        children = self._p(node).children
        try:
            return children[pos]
        except IndexError:
            msg = f"node {node} has {len(children)} children, no position {pos}"
            raise IndexError(msg) from None

    def find_child(self, node: int, key: str) -> int:
        """Return the id of the first child keyed ``key``, or NONE."""
        wanted = key.encode("utf-8")
        for child in self._p(node).children:
            data = self._nodes[child]
            if data.type & NodeType.KEY and self._arena.raw(data.key) == wanted:
                return child
        return NONE

    def has_child(self, node: int, key: str) -> bool:
        return self.find_child(node, key) != NONE

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append_child(self, parent: int) -> int:
        """Allocate a new NOTYPE node as the last child of ``parent``."""
        parent_data = self._p(parent)
        child = len(self._nodes)
        self._nodes.append(NodeData(parent=parent))
        parent_data.children.append(child)
        return child

    def to_map(self, node: int, key: Span | None = None) -> None:
        kind = NodeType.MAP if key is None else NodeType.KEYMAP
        self._reassign(node, kind, key, None)

    def to_seq(self, node: int, key: Span | None = None) -> None:
        kind = NodeType.SEQ if key is None else NodeType.KEYSEQ
        self._reassign(node, kind, key, None)

    def to_keyval(self, node: int, key: Span, val: Span) -> None:
        self._reassign(node, NodeType.KEYVAL, key, val)

    def to_val(self, node: int, val: Span) -> None:
        self._reassign(node, NodeType.VAL, None, val)

    def add_flags(self, node: int, flags: NodeType) -> None:
        data = self._p(node)
        data.type |= flags

    def _reassign(
        self, node: int, kind: NodeType, key: Span | None, val: Span | None
    ) -> None:
        data = self._p(node)
        if data.children:
            msg = f"cannot reassign the kind of node {node}: it has children"
            raise ValueError(msg)
        data.type = (data.type & ~NodeType.KIND_MASK) | kind
        data.key = key if key is not None else EMPTY_SPAN
        data.val = val if val is not None else EMPTY_SPAN

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_builtin(
        self,
        node: int | None = None,
        convert_scalar: Callable[[str, NodeType], Any] | None = None,
    ) -> Any:
        """Convert a subtree to plain dict/list/str values.

        Maps become dicts, sequences become lists, scalars become their
        stored text, and unassigned nodes become None.

        Args:
            node:           Subtree root; the tree root when None.
            convert_scalar: Called with (text, node type) for every scalar;
                its result replaces the text. Emitters use it to carry
                style flags into the output.
        """
        start = self.root_id() if node is None else node
        self._p(start)
        holder: list[Any] = []
        # (node id, container receiving the value, key when that container is a dict)
        stack: list[tuple[int, dict[str, Any] | list[Any], str | None]] = [
            (start, holder, None)
        ]
        while stack:
            current, dest, slot = stack.pop()
            data = self._nodes[current]
            value: Any
            if data.type & NodeType.MAP:
                value = {}
            elif data.type & NodeType.SEQ:
                value = []
            elif data.type & NodeType.VAL:
                value = self._arena.text(data.val)
                if convert_scalar is not None:
                    value = convert_scalar(value, data.type)
            else:
                value = None

            if isinstance(dest, dict):
                dest[slot] = value  # type: ignore[index]
            else:
                dest.append(value)

            if data.type & NodeType.CONTAINER:
                is_map = bool(data.type & NodeType.MAP)
                # Reversed so children pop off in document order.
                for child in reversed(data.children):
                    child_data = self._nodes[child]
                    child_key = (
                        self._arena.text(child_data.key)
                        if is_map and child_data.type & NodeType.KEY
                        else None
                    )
                    stack.append((child, value, child_key))
        return holder[0]
