"""Public API functions for toml-tree.

Four entry points, all ending in a single ``Materializer.materialize`` call:

- parse_toml_in_place: parse the caller's text and materialize it.
- parse_toml_in_arena: copy the raw text into the tree arena first and parse
  that copy, for callers whose buffer will not outlive the tree.
- parse_toml_file:     read a file, then parse it.
- materialize:         materialize an already-parsed value.

Each accepts a ``target``: None (a new Tree is created), a Tree (its root,
or ``node_id`` when given) or a NodeRef. The populated Tree is returned.

Errors are reported through the per-call ``error_handler`` if given, else
the tree's bound handler, and then raised. Parse and read errors are
reported before any node is touched.
"""

from __future__ import annotations

import logging
import tomllib
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING, Any

from toml_tree.errors import SourceReadError, TomlParseError
from toml_tree.materializer import Materializer
from toml_tree.protocols import report
from toml_tree.tree import NodeRef, Tree

if TYPE_CHECKING:
    from toml_tree.config import MaterializeConfig
    from toml_tree.protocols import ErrorHandler

__all__ = [
    "materialize",
    "parse_toml_file",
    "parse_toml_in_arena",
    "parse_toml_in_place",
]

logger = logging.getLogger(__name__)

Target = Tree | NodeRef | None


def _resolve_target(target: Target, node_id: int | None) -> tuple[Tree, int]:
    if target is None:
        tree = Tree()
        return tree, tree.root_id() if node_id is None else tree.ref(node_id).id
    if isinstance(target, NodeRef):
        if node_id is not None:
            msg = "node_id cannot be combined with a NodeRef target"
            raise ValueError(msg)
        return target.tree, target.id
    if isinstance(target, Tree):
        if node_id is None:
            return target, target.root_id()
        return target, target.ref(node_id).id
    msg = f"target must be a Tree, a NodeRef or None, got {type(target).__name__}"
    raise TypeError(msg)


def _loads(
    toml: str | bytes, filename: str, handler: ErrorHandler | None
) -> dict[str, Any]:
    if isinstance(toml, (bytes, bytearray, memoryview)):
        try:
            toml = bytes(toml).decode("utf-8")
        except UnicodeDecodeError as exc:
            report(
                TomlParseError(f"source is not valid UTF-8: {exc.reason}"),
                handler,
            )
    try:
        return tomllib.loads(toml)
    except tomllib.TOMLDecodeError as exc:
        error = TomlParseError.from_decode_error(exc, filename)
        logger.debug("TOML parse failed: %s", error)
        report(error, handler)


def materialize(
    value: Any,
    target: Target = None,
    node_id: int | None = None,
    *,
    config: MaterializeConfig | None = None,
    error_handler: ErrorHandler | None = None,
) -> Tree:
    """Materialize an already-parsed TOML value into a tree.

    Args:
        value:         Parsed value (e.g. the result of ``tomllib.loads``).
        target:        Destination tree or node; a new Tree when None.
        node_id:       Destination node id when ``target`` is a Tree.
        config:        Walker settings. Defaults to ``MaterializeConfig()``.
        error_handler: Overrides the tree's bound error handler.

    Returns:
        The tree that was written to.
    """
    tree, node = _resolve_target(target, node_id)
    Materializer(tree, config=config, error_handler=error_handler).materialize(
        value, node
    )
    return tree


def parse_toml_in_place(
    toml: str | bytes,
    target: Target = None,
    node_id: int | None = None,
    *,
    filename: str = "",
    config: MaterializeConfig | None = None,
    error_handler: ErrorHandler | None = None,
) -> Tree:
    """Parse TOML text and materialize it into a tree.

    Keys and values are copied into the tree arena; the source text itself
    is only read by the parser.

    Args:
        toml:          TOML document as ``str`` or UTF-8 ``bytes``.
        target:        Destination tree or node; a new Tree when None.
        node_id:       Destination node id when ``target`` is a Tree.
        filename:      Name used in error locations only.
        config:        Walker settings.
        error_handler: Overrides the tree's bound error handler.

    Returns:
        The tree that was written to.

    Raises:
        TomlParseError: The text is not valid TOML (after the handler ran).
    """
    tree, node = _resolve_target(target, node_id)
    handler = error_handler if error_handler is not None else tree.error_handler
    document = _loads(toml, filename, handler)
    logger.debug("parsed %s in place", filename or "<toml>")
    Materializer(tree, config=config, error_handler=handler).materialize(
        document, node
    )
    return tree


def parse_toml_in_arena(
    toml: str | bytes,
    target: Target = None,
    node_id: int | None = None,
    *,
    filename: str = "",
    config: MaterializeConfig | None = None,
    error_handler: ErrorHandler | None = None,
) -> Tree:
    """Copy TOML text into the tree arena, then parse the arena copy.

    Use this when the caller's buffer may not outlive the tree. Arguments,
    return value and errors are as for ``parse_toml_in_place``.
    """
    tree, node = _resolve_target(target, node_id)
    span = tree.copy_to_arena(toml)
    logger.debug("copied %d source bytes into the arena", span.length)
    return parse_toml_in_place(
        tree.arena.raw(span),
        tree,
        node,
        filename=filename,
        config=config,
        error_handler=error_handler,
    )


def parse_toml_file(
    filename: str | PathLike[str],
    target: Target = None,
    node_id: int | None = None,
    *,
    config: MaterializeConfig | None = None,
    error_handler: ErrorHandler | None = None,
) -> Tree:
    """Read a TOML file and materialize it into a tree.

    Raises:
        SourceReadError: The file cannot be read (after the handler ran).
        TomlParseError:  The file is not valid TOML (after the handler ran).
    """
    tree, node = _resolve_target(target, node_id)
    handler = error_handler if error_handler is not None else tree.error_handler
    name = str(filename)
    try:
        source = Path(filename).read_bytes()
    except OSError as exc:
        report(SourceReadError.from_os_error(exc, name), handler)
    logger.debug("read %d bytes from %s", len(source), name)
    return parse_toml_in_place(
        source, tree, node, filename=name, config=config, error_handler=handler
    )
