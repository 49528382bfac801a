"""Scalar canonicalization: the single text form stored for each TOML scalar.

The tree stores text only, so every scalar is reduced to one canonical
spelling that reads the same in YAML and JSON emitters:

- string   -> verbatim, tagged VAL_QUOTED
- integer  -> signed decimal, no grouping ("-17", "738594937")
- float    -> ".inf" / "-.inf" / ".nan" for the special values, otherwise
              ``repr(value)`` (shortest text that round-trips, e.g. "3.14")
- boolean  -> "true" / "false"
- date, time, datetime -> the value's own ``isoformat()``

Nothing else about the source spelling (hex/octal radix, exponent form,
``1_000`` grouping, literal vs basic strings) is kept.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from toml_tree.materializer.classify import SCALAR_KINDS, ValueKind, classify
from toml_tree.tree.nodes import NodeType

__all__ = ["CanonicalScalar", "canonical_float", "canonical_text"]


@dataclass(frozen=True, slots=True)
class CanonicalScalar:
    """Canonical text of a scalar plus the style flags to tag its node with."""

    text: str
    flags: NodeType = NodeType.NOTYPE


_TRUE = CanonicalScalar("true")
_FALSE = CanonicalScalar("false")


def canonical_float(value: float) -> str:
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    return float.__repr__(value)


def canonical_text(value: Any, kind: ValueKind | None = None) -> CanonicalScalar:
    """Return the canonical text for a scalar value.

    Args:
        value: A TOML scalar (str, int, float, bool, date, time, datetime).
        kind:  The value's kind if the caller already classified it.

    Raises:
        TypeError: If ``value`` is a table, an array, or not a TOML value.
    """
    if kind is None:
        kind = classify(value)
    if kind not in SCALAR_KINDS:
        msg = f"not a TOML scalar: {type(value).__name__}"
        raise TypeError(msg)

    if kind is ValueKind.STRING:
        return CanonicalScalar(value, NodeType.VAL_QUOTED)
    if kind is ValueKind.BOOLEAN:
        return _TRUE if value else _FALSE
    if kind is ValueKind.INTEGER:
        return CanonicalScalar(str(int(value)))
    if kind is ValueKind.FLOAT:
        return CanonicalScalar(canonical_float(value))
    # DATE, TIME, DATETIME
    return CanonicalScalar(value.isoformat())
