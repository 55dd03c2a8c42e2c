from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Numbering(str, Enum):
    BYTES = "bytes"
    CHARS = "chars"


@dataclass(frozen=True, slots=True)
class Location:
    """A concrete source position. Line and column are both 1-based."""

    line: int
    column: int

    def as_list(self) -> list[int]:
        return [self.line, self.column]


@dataclass(frozen=True, slots=True)
class LocationSpan:
    """Start and end positions; `end` is the position of the last unit."""

    start: Location
    end: Location


@dataclass(frozen=True, slots=True)
class _InclusiveSpan:
    """Inclusive [first, last] range. `first == last + 1` is the empty span."""

    first: int
    last: int

    @property
    def width(self) -> int:
        return self.last - self.first + 1

    def is_empty(self) -> bool:
        return self.last < self.first

    def as_list(self) -> list[int]:
        return [self.first, self.last]


@dataclass(frozen=True, slots=True)
class ByteSpan(_InclusiveSpan):
    """Span in UTF-8 byte offsets, as produced by parsers."""


@dataclass(frozen=True, slots=True)
class CharSpan(_InclusiveSpan):
    """Span in UTF-16 code-unit offsets, as exposed by a normalized file."""


Span = ByteSpan | CharSpan
