from __future__ import annotations

from dataclasses import dataclass

from .spans import ByteSpan, Location, LocationSpan, Numbering, Span


@dataclass(frozen=True, slots=True)
class Node:
    kind: str  # label chosen by the parser, e.g. "block", or "header"/"raw" when synthesized
    name: str


@dataclass(frozen=True, slots=True)
class Leaf(Node):
    span: Span
    location_span: LocationSpan | None = None


@dataclass(frozen=True, slots=True)
class Container(Node):
    """A node decomposed into header, children and footer.

    In a partial tree `span` is the parser's own estimate and the header/footer
    spans may be missing; after normalization all three are set and exactly
    tile `span`.
    """

    span: Span
    header_span: Span | None = None
    footer_span: Span | None = None
    children: tuple[Leaf | "Container", ...] = ()
    location_span: LocationSpan | None = None


TreeNode = Leaf | Container


@dataclass(frozen=True, slots=True)
class ParsingError:
    """A recoverable problem reported by the parser alongside its tree."""

    position: int | Location  # byte offset until normalized
    message: str


@dataclass(frozen=True, slots=True)
class File(Node):
    children: tuple[TreeNode, ...] = ()
    footer_span: Span = ByteSpan(0, -1)
    location_span: LocationSpan | None = None
    numbering: Numbering = Numbering.BYTES
    parsing_errors_detected: bool = False
    parsing_errors: tuple[ParsingError, ...] = ()

