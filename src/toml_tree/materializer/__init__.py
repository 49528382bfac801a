"""Materializer subpackage: parsed TOML values to Tree nodes.

- classify / ValueKind: runtime kind of a parsed value
- canonical_text / CanonicalScalar: canonical text of a scalar
- Materializer: explicit-stack walker writing into a Tree
"""

from toml_tree.materializer.canonical import (
    CanonicalScalar,
    canonical_float,
    canonical_text,
)
from toml_tree.materializer.classify import SCALAR_KINDS, ValueKind, classify
from toml_tree.materializer.walker import Materializer

__all__ = [
    "SCALAR_KINDS",
    "CanonicalScalar",
    "Materializer",
    "ValueKind",
    "canonical_float",
    "canonical_text",
    "classify",
]
