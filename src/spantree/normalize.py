from __future__ import annotations

import logging
from dataclasses import replace

from .ast import Container, File, Leaf, TreeNode
from .errors import MissingBoundarySpansError, NumberingError
from .index import PositionIndex
from .numbering import to_char_numbering
from .spans import ByteSpan, LocationSpan, Numbering


logger = logging.getLogger(__name__)


def _clip_to_line_end(index: PositionIndex, offset: int, limit: int) -> int:
    # A node keeps the rest of its last line unless a neighbour starts first.
    return min(index.line_end(offset), limit)


def clean_node(
    node: TreeNode,
    index: PositionIndex,
    preceding_end: int,
    following_start: int,
) -> TreeNode:
    """Resolve the byte spans of `node` between its two neighbours.

    The node claims every byte after `preceding_end` and extends up to the end
    of its last line, stopping before `following_start`. Containers then
    split that range into header, children and footer.
    """
    first = preceding_end + 1
    last = _clip_to_line_end(index, node.span.last, following_start - 1)
    location = index.make_loc(first, last)

    if isinstance(node, Leaf):
        return replace(node, span=ByteSpan(first, last), location_span=location)
    if not isinstance(node, Container):
        raise TypeError(f"unexpected tree node: {type(node)!r}")

    if not node.children:
        return _clean_childless(node, index, first, last, location)

    missing = tuple(
        label
        for label, value in (("header_span", node.header_span), ("footer_span", node.footer_span))
        if value is None
    )
    if missing:
        raise MissingBoundarySpansError(kind=node.kind, name=node.name, missing=missing)

    header_last = _clip_to_line_end(index, node.header_span.last, node.children[0].span.first - 1)
    children = _clean_children(node.children, index, header_last, node.footer_span.first)

    return replace(
        node,
        span=ByteSpan(first, last),
        header_span=ByteSpan(first, header_last),
        footer_span=ByteSpan(children[-1].span.last + 1, last),
        children=children,
        location_span=location,
    )


def _clean_childless(
    node: Container,
    index: PositionIndex,
    first: int,
    last: int,
    location: LocationSpan,
) -> TreeNode:
    # Nothing to thread through: without both boundaries the node is a plain leaf.
    if node.header_span is None or node.footer_span is None:
        return Leaf(kind=node.kind, name=node.name, span=ByteSpan(first, last), location_span=location)

    header_last = min(_clip_to_line_end(index, node.header_span.last, node.footer_span.first - 1), last)
    header_last = max(header_last, first - 1)
    return replace(
        node,
        span=ByteSpan(first, last),
        header_span=ByteSpan(first, header_last),
        footer_span=ByteSpan(header_last + 1, last),
        location_span=location,
    )


def _clean_children(
    children: tuple[TreeNode, ...],
    index: PositionIndex,
    preceding_end: int,
    following_start: int,
) -> tuple[TreeNode, ...]:
    out: list[TreeNode] = []
    for i, child in enumerate(children):
        if i + 1 < len(children):
            next_start = children[i + 1].span.first
        else:
            next_start = following_start
        cleaned = clean_node(child, index, preceding_end, next_start)
        preceding_end = cleaned.span.last
        out.append(cleaned)
    return tuple(out)


def clean_file(file: File, index: PositionIndex) -> File:
    """Normalize a partial file so its nodes tile the whole buffer.

    Returns a new file in character numbering; the input is left untouched.
    """
    if file.numbering is not Numbering.BYTES:
        raise NumberingError(expected=Numbering.BYTES.value, actual=file.numbering.value)

    length = index.length
    children = file.children

    if length and not children:
        logger.debug("%s: no nodes from parser, using a raw node", file.name)
        children = (Leaf(kind="raw", name="", span=ByteSpan(0, length - 1)),)

    if length and children[0].span.first != 0:
        logger.debug("%s: adding header node for bytes [0, %d)", file.name, children[0].span.first)
        header = Leaf(kind="header", name="", span=ByteSpan(0, children[0].span.first - 1))
        children = (header, *children)

    children = _clean_children(children, index, -1, length)
    footer_first = children[-1].span.last + 1 if children else 0

    resolved = replace(
        file,
        children=children,
        footer_span=ByteSpan(footer_first, length - 1),
        location_span=index.make_loc(0, length - 1),
        parsing_errors_detected=file.parsing_errors_detected or bool(file.parsing_errors),
    )
    return to_char_numbering(resolved, index)


def normalize(file: File, index: PositionIndex) -> File:
    return clean_file(file, index)
