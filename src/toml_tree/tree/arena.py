"""Arena: append-only byte storage backing every key and value in a Tree.

Text is stored UTF-8 encoded in a single ``bytearray`` that only ever grows.
Callers hold ``Span`` references (offset + length) rather than Python
strings, so a span stays valid for as long as its arena exists and never
points into memory owned by the source document.

Example::

    arena = Arena()
    span = arena.copy("localhost")
    arena.text(span)   # "localhost"
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["EMPTY_SPAN", "Arena", "Span"]


@dataclass(frozen=True, slots=True)
class Span:
    """A stable reference to ``length`` bytes at ``offset`` in an Arena."""

    offset: int = 0
    length: int = 0

    def __len__(self) -> int:
        return self.length

    @property
    def end(self) -> int:
        return self.offset + self.length


# Shared empty span; copying empty text never touches the arena.
EMPTY_SPAN = Span()


class Arena:
    """Append-only UTF-8 byte store.

    Spans handed out by ``alloc`` and ``copy`` are never invalidated: the
    buffer may be reallocated internally as it grows, but offsets are
    stable and existing bytes are never rewritten by later allocations.
    """

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    @property
    def size(self) -> int:
        """Number of bytes allocated so far."""
        return len(self._buf)

    def alloc(self, size: int) -> Span:
        """Reserve ``size`` zeroed bytes and return their span.

        Raises:
            ValueError: If size is negative.
        """
        if size < 0:
            msg = f"arena allocation size must be >= 0, got {size}"
            raise ValueError(msg)
        if size == 0:
            return EMPTY_SPAN
        offset = len(self._buf)
        self._buf.extend(bytes(size))
        return Span(offset, size)

    def write(self, span: Span, data: bytes) -> None:
        """Fill a freshly allocated span with exactly ``len(span)`` bytes."""
        if len(data) != span.length:
            msg = f"expected {span.length} bytes for span, got {len(data)}"
            raise ValueError(msg)
        self._buf[span.offset : span.end] = data

    def copy(self, text: str | bytes) -> Span:
        """Copy ``text`` into the arena and return the span holding it."""
        data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        span = self.alloc(len(data))
        if span.length:
            self.write(span, data)
        return span

    def raw(self, span: Span) -> bytes:
        return bytes(self._buf[span.offset : span.end])

    def text(self, span: Span) -> str:
        """Decode the UTF-8 text stored at ``span``."""
        return self._buf[span.offset : span.end].decode("utf-8")
