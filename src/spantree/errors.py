from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ParseError(Exception):
    """Raised by a parser that cannot produce even a partial tree."""

    position: int
    message: str
    name: str = "<memory>"
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.name}:{self.position}: {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base


class NormalizeError(Exception):
    """Base class for failures of the span normalizer."""


@dataclass(slots=True)
class MissingBoundarySpansError(NormalizeError):
    kind: str
    name: str
    missing: tuple[str, ...]

    def __str__(self) -> str:
        fields = ", ".join(self.missing)
        return f"container {self.kind} {self.name!r} has no {fields}"


@dataclass(slots=True)
class UpstreamParseFailure(NormalizeError):
    name: str
    message: str

    def __str__(self) -> str:
        return f"parser failed on {self.name}: {self.message}"


@dataclass(slots=True)
class NumberingError(NormalizeError):
    expected: str
    actual: str

    def __str__(self) -> str:
        return f"file is numbered in {self.actual}, expected {self.expected}"
