"""Materializer: deposits a parsed TOML value hierarchy into a Tree.

Walks the source value with an explicit stack of ``(value, node id, depth)``
work items instead of recursion, so document depth is limited by
``MaterializeConfig.max_depth`` rather than the interpreter call stack.

Per visited node:

- Table  -> node becomes a map (existing key kept); one keyed child is
            appended per member, in source order, before any child is visited.
- Array  -> node becomes a sequence (existing key kept); one keyless child
            per element, in source order.
- Scalar -> canonical text is copied into the arena; node becomes a keyed
            scalar if it already had a key, a keyless scalar otherwise.

Each source node maps to exactly one destination node, so the result is
isomorphic to the source hierarchy. The source is only read; every key and
value stored in the tree is an arena copy.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from toml_tree.config import MaterializeConfig, UnknownValuePolicy
from toml_tree.errors import (
    InvalidTargetError,
    NestingDepthError,
    UnsupportedValueError,
)
from toml_tree.materializer.canonical import CanonicalScalar, canonical_text
from toml_tree.materializer.classify import ValueKind, classify
from toml_tree.protocols import report
from toml_tree.tree.arena import EMPTY_SPAN
from toml_tree.tree.interner import SpanInterner
from toml_tree.tree.nodes import NodeType

if TYPE_CHECKING:
    from toml_tree.protocols import ErrorHandler
    from toml_tree.tree.arena import Span
    from toml_tree.tree.tree import Tree

__all__ = ["Materializer"]

logger = logging.getLogger(__name__)


class Materializer:
    """Converts parsed TOML values into nodes of one Tree.

    A Materializer is bound to a single tree and owns a ``SpanInterner`` over
    that tree's arena, so repeated keys and scalar spellings within one
    document share arena bytes.

    Args:
        tree:          Destination tree.
        config:        Walker settings. Defaults to ``MaterializeConfig()``.
        error_handler: Receives NestingDepthError / UnsupportedValueError
            before they are raised. Defaults to the tree's bound handler.

    Example::

        tree = Tree()
        Materializer(tree).materialize({"a": 1, "b": [2, 3]}, tree.root_id())
        tree["b"][1].val   # "3"
    """

    def __init__(
        self,
        tree: Tree,
        config: MaterializeConfig | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self._tree = tree
        self._config: MaterializeConfig = (
            config if config is not None else MaterializeConfig()
        )
        self._handler = error_handler if error_handler is not None else tree.error_handler
        self._interner = SpanInterner(tree.arena, self._config.intern_cache_size)

    @property
    def tree(self) -> Tree:
        return self._tree

    @property
    def config(self) -> MaterializeConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def materialize(self, value: Any, node: int) -> None:
        """Materialize ``value`` into ``node`` of the bound tree.

        Args:
            value: A parsed TOML value (Mapping, list/tuple or scalar).
            node:  Id of a childless node of the tree. If it already has a
                   key, the key is preserved.

        Raises:
            InvalidTargetError: ``node`` already has children.
            NestingDepthError: The value nests deeper than ``max_depth``.
            UnsupportedValueError: A value is not a TOML kind and the policy
                is RAISE, or a key or string cannot be encoded as UTF-8.
        """
        if self._tree.num_children(node):
            report(
                InvalidTargetError(
                    f"cannot materialize into node {node}: it has children"
                ),
                self._handler,
            )
        start_size = len(self._tree)
        stack: list[tuple[Any, int, int]] = [(value, node, 0)]
        while stack:
            current, current_node, depth = stack.pop()
            kind = classify(current)
            if kind is ValueKind.TABLE or kind is ValueKind.ARRAY:
                if depth >= self._config.max_depth:
                    report(
                        NestingDepthError(
                            f"document nests deeper than max_depth={self._config.max_depth}"
                        ),
                        self._handler,
                    )
                items = (
                    self._open_table(current, current_node)
                    if kind is ValueKind.TABLE
                    else self._open_array(current, current_node)
                )
                # Reversed so children are visited in document order.
                for child_value, child_node in reversed(items):
                    stack.append((child_value, child_node, depth + 1))
            elif kind is None:
                self._set_unknown(current, current_node)
            else:
                self._set_scalar(current_node, canonical_text(current, kind))

        logger.debug(
            "materialized %d nodes under node %d", len(self._tree) - start_size + 1, node
        )

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _existing_key(self, node: int) -> Span | None:
        tree = self._tree
        return tree.key_span(node) if tree.has_key(node) else None

    def _open_table(
        self, table: Mapping[str, Any], node: int
    ) -> list[tuple[Any, int]]:
        """Turn ``node`` into a map and allocate one keyed child per member."""
        tree = self._tree
        tree.to_map(node, self._existing_key(node))
        items: list[tuple[Any, int]] = []
        for key, child_value in table.items():
            child = tree.append_child(node)
            tree.to_keyval(child, self._copy(str(key), intern=True), EMPTY_SPAN)
            items.append((child_value, child))
        return items

    def _open_array(self, array: Sequence[Any], node: int) -> list[tuple[Any, int]]:
        """Turn ``node`` into a sequence and allocate one child per element."""
        tree = self._tree
        tree.to_seq(node, self._existing_key(node))
        return [(element, tree.append_child(node)) for element in array]

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _copy(self, text: str, *, intern: bool) -> Span:
        """Copy ``text`` into the arena, reporting text that is not valid UTF-8."""
        try:
            if intern:
                return self._interner.copy(text)
            return self._tree.copy_to_arena(text)
        except UnicodeEncodeError as exc:
            report(
                UnsupportedValueError(
                    f"text cannot be encoded as UTF-8: {exc.reason} at position {exc.start}"
                ),
                self._handler,
            )

    def _set_scalar(self, node: int, scalar: CanonicalScalar) -> None:
        tree = self._tree
        # Strings are usually unique; only intern the short canonical spellings.
        val = self._copy(scalar.text, intern=not scalar.flags & NodeType.VAL_QUOTED)
        key = self._existing_key(node)
        if key is not None:
            tree.to_keyval(node, key, val)
        else:
            tree.to_val(node, val)
        if scalar.flags:
            tree.add_flags(node, scalar.flags)

    def _set_unknown(self, value: Any, node: int) -> None:
        if self._config.unknown_value_policy is UnknownValuePolicy.STRINGIFY:
            logger.debug(
                "stringifying unsupported value of type %s", type(value).__name__
            )
            self._set_scalar(node, CanonicalScalar(str(value)))
            return
        report(
            UnsupportedValueError(
                f"unsupported value type for a TOML document: {type(value).__name__}"
            ),
            self._handler,
        )
