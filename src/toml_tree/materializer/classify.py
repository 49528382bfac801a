"""ValueKind and classify(): map a parsed Python value onto a TOML value kind.

``tomllib`` produces dict, list, str, int, float, bool and the three
``datetime`` types. Dispatch order matters twice:

- bool MUST be checked before int, because bool subclasses int
  (``isinstance(True, int)`` is True).
- datetime MUST be checked before date, because ``datetime.datetime``
  subclasses ``datetime.date``.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from enum import StrEnum, auto
from typing import Any

__all__ = ["SCALAR_KINDS", "ValueKind", "classify"]


class ValueKind(StrEnum):
    """The closed set of TOML value kinds."""

    TABLE = auto()
    ARRAY = auto()
    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    BOOLEAN = auto()
    DATE = auto()
    TIME = auto()
    DATETIME = auto()


SCALAR_KINDS = frozenset(ValueKind) - {ValueKind.TABLE, ValueKind.ARRAY}


def classify(value: Any) -> ValueKind | None:
    """Return the ValueKind of ``value``, or None when it is not a TOML value."""
    # CRITICAL: bool before int, datetime before date.
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, Mapping):
        return ValueKind.TABLE
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, dt.datetime):
        return ValueKind.DATETIME
    if isinstance(value, dt.date):
        return ValueKind.DATE
    if isinstance(value, dt.time):
        return ValueKind.TIME
    return None
