"""Exception hierarchy for toml-tree.

Every error reported while turning a TOML document into a Tree derives from
``TomlTreeError`` and carries a human-readable ``message`` plus an optional
``Location`` pointing into the source document.
"""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass

__all__ = [
    "InvalidTargetError",
    "Location",
    "NestingDepthError",
    "SourceReadError",
    "TomlParseError",
    "TomlTreeError",
    "UnsupportedValueError",
]

# tomllib appends "(at line L, column C)" or "(at end of document)" to its messages.
_TOMLLIB_POS = re.compile(r"\s*\(at line (\d+), column (\d+)\)\s*$")
_TOMLLIB_EOF = re.compile(r"\s*\(at end of document\)\s*$")


@dataclass(frozen=True, slots=True)
class Location:
    """Position of an error in a source document.

    Attributes:
        filename: Name used in messages; empty when the source is anonymous.
        line:     1-based line number, or None when unknown.
        column:   1-based column number, or None when unknown.
    """

    filename: str = ""
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        parts = [self.filename or "<toml>"]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


class TomlTreeError(Exception):
    """Base class for all toml-tree errors."""

    def __init__(self, message: str, location: Location | None = None) -> None:
        self.message = message
        self.location = location
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.location is None:
            return self.message
        return f"{self.location}: {self.message}"


class TomlParseError(TomlTreeError):
    """The source text is not a valid TOML document."""

    @classmethod
    def from_decode_error(
        cls, err: tomllib.TOMLDecodeError, filename: str = ""
    ) -> TomlParseError:
        """Build a parse error from a ``tomllib.TOMLDecodeError``.

        Python 3.14+ exposes ``lineno``/``colno`` on the decode error; older
        interpreters only embed the position in the message text.
        """
        line = getattr(err, "lineno", None)
        column = getattr(err, "colno", None)

        text = str(err)
        match = _TOMLLIB_POS.search(text)
        if match is not None:
            if line is None:
                line, column = int(match.group(1)), int(match.group(2))
            text = text[: match.start()]
        else:
            text = _TOMLLIB_EOF.sub("", text)
        message = getattr(err, "msg", text)
        return cls(message, Location(filename, line, column))


class SourceReadError(TomlTreeError):
    """The TOML source file could not be read."""

    @classmethod
    def from_os_error(cls, err: OSError, filename: str) -> SourceReadError:
        reason = err.strerror or err.__class__.__name__
        return cls(f"cannot read file: {reason}", Location(filename))


class NestingDepthError(TomlTreeError):
    """The document nests tables/arrays deeper than the configured limit."""


class UnsupportedValueError(TomlTreeError, TypeError):
    """A source value is not one of the TOML value kinds."""


class InvalidTargetError(TomlTreeError, ValueError):
    """The destination node cannot receive a document (it already has children)."""
