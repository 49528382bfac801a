"""SpanInterner: LRU-backed de-duplication of text copied into an Arena.

Documents repeat the same short strings over and over: member names in an
array of tables, ``true``/``false``, small integers. The interner remembers
the span of recently copied text and hands it back instead of copying the
same bytes again. Spans in an arena are immutable, so sharing one between
nodes is safe.

Each ``SpanInterner`` instance maintains its own ``LRUCache`` and is bound to
exactly one Arena. Eviction is silent: an evicted string is simply copied
again the next time it is seen.

Example::

    arena = Arena()
    interner = SpanInterner(arena, max_size=256)
    a = interner.copy("name")
    b = interner.copy("name")
    assert a == b and arena.size == 4
"""

from __future__ import annotations

from cachetools import LRUCache

from toml_tree.tree.arena import Arena, Span

__all__ = ["SpanInterner"]


class SpanInterner:
    """Copy-through proxy around an Arena that reuses recently seen spans.

    Args:
        arena:    The arena that owns all returned spans.
        max_size: Maximum number of distinct strings remembered. ``0``
            disables interning; every ``copy`` goes straight to the arena.
    """

    def __init__(self, arena: Arena, max_size: int = 256) -> None:
        if max_size < 0:
            msg = f"max_size must be >= 0, got {max_size}"
            raise ValueError(msg)
        self._arena = arena
        self._cache: LRUCache[str, Span] | None = (
            LRUCache(maxsize=max_size) if max_size else None
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def arena(self) -> Arena:
        return self._arena

    @property
    def max_size(self) -> int:
        """The maximum number of strings this interner remembers."""
        return int(self._cache.maxsize) if self._cache is not None else 0

    @property
    def curr_size(self) -> int:
        """The number of strings currently remembered."""
        return int(self._cache.currsize) if self._cache is not None else 0

    # ------------------------------------------------------------------
    # Arena surface
    # ------------------------------------------------------------------

    def copy(self, text: str) -> Span:
        """Return an arena span holding ``text``, reusing a cached one if present."""
        if self._cache is None:
            return self._arena.copy(text)
        span = self._cache.get(text)
        if span is None:
            span = self._arena.copy(text)
            self._cache[text] = span
        return span
