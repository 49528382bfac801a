"""NodeRef: a (tree, node id) handle with a convenient lookup surface."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from toml_tree.tree.tree import Tree

__all__ = ["NodeRef"]


@dataclass(frozen=True, slots=True)
class NodeRef:
    """Reference to one node of a Tree.

    ``ref["name"]`` looks up a map member by key and ``ref[0]`` a child by
    position; both return another NodeRef. ``key`` and ``val`` decode the
    node's text from the tree arena.

    Example::

        tree = parse_toml_in_arena("[server]\\nport = 8080\\n")
        tree["server"]["port"].val   # "8080"
    """

    tree: Tree
    id: int

    def __getitem__(self, item: str | int) -> NodeRef:
        if isinstance(item, str):
            child = self.tree.find_child(self.id, item)
            if child < 0:
                raise KeyError(item)
            return NodeRef(self.tree, child)
        return NodeRef(self.tree, self.tree.child(self.id, item))

    def __iter__(self) -> Iterator[NodeRef]:
        for child in self.tree.children(self.id):
            yield NodeRef(self.tree, child)

    def __len__(self) -> int:
        return self.tree.num_children(self.id)

    @property
    def key(self) -> str:
        return self.tree.key(self.id)

    @property
    def val(self) -> str:
        return self.tree.val(self.id)

    @property
    def parent(self) -> NodeRef | None:
        parent = self.tree.parent(self.id)
        return NodeRef(self.tree, parent) if parent >= 0 else None

    def has_key(self) -> bool:
        return self.tree.has_key(self.id)

    def has_val(self) -> bool:
        return self.tree.has_val(self.id)

    def is_map(self) -> bool:
        return self.tree.is_map(self.id)

    def is_seq(self) -> bool:
        return self.tree.is_seq(self.id)

    def is_val(self) -> bool:
        return self.tree.is_val(self.id)

    def is_keyval(self) -> bool:
        return self.tree.is_keyval(self.id)

    def is_val_quoted(self) -> bool:
        return self.tree.is_val_quoted(self.id)

    def has_child(self, key: str) -> bool:
        return self.tree.has_child(self.id, key)

    def num_children(self) -> int:
        return self.tree.num_children(self.id)

    def append_child(self) -> NodeRef:
        return NodeRef(self.tree, self.tree.append_child(self.id))

    def to_builtin(self) -> Any:
        return self.tree.to_builtin(self.id)
