"""MaterializeConfig and UnknownValuePolicy for materialization settings.

MaterializeConfig is a frozen (immutable) dataclass holding the walker
parameters. UnknownValuePolicy selects what happens to a source value that
is not one of the TOML value kinds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["MaterializeConfig", "UnknownValuePolicy"]


class UnknownValuePolicy(StrEnum):
    """What to do with a source value of an unrecognised kind.

    - RAISE:     Report an UnsupportedValueError through the error handler.
    - STRINGIFY: Store ``str(value)`` as a plain (unquoted) scalar.
    """

    RAISE = auto()
    STRINGIFY = auto()


@dataclass(frozen=True, slots=True)
class MaterializeConfig:
    """Immutable configuration for the Materializer.

    Attributes:
        max_depth: Maximum number of nested table/array levels, the
            outermost container included. Must be >= 1.
        unknown_value_policy: Handling of values outside the TOML kinds.
        intern_cache_size: Number of distinct key/scalar strings the
            per-call SpanInterner remembers. 0 disables interning.
    """

    max_depth: int = 1000
    unknown_value_policy: UnknownValuePolicy = UnknownValuePolicy.RAISE
    intern_cache_size: int = 256

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)
        if self.intern_cache_size < 0:
            msg = f"intern_cache_size must be >= 0, got {self.intern_cache_size}"
            raise ValueError(msg)
        try:
            policy = UnknownValuePolicy(self.unknown_value_policy)
        except ValueError:
            msg = (
                "unknown_value_policy must be one of "
                f"{[p.value for p in UnknownValuePolicy]}, "
                f"got {self.unknown_value_policy!r}"
            )
            raise ValueError(msg) from None
        # Accept plain strings such as "stringify".
        object.__setattr__(self, "unknown_value_policy", policy)
