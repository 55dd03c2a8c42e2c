from __future__ import annotations

from dataclasses import replace

from .ast import Container, File, Leaf, ParsingError, TreeNode
from .errors import NumberingError
from .index import PositionIndex
from .spans import ByteSpan, CharSpan, Numbering, Span


def to_char_numbering(file: File, index: PositionIndex) -> File:
    """Rewrite every byte span of `file` into UTF-16 code-unit offsets.

    Byte span [a, b] maps to [char(a), char(b + 1) - 1], so spans that tiled
    the buffer in bytes still tile it in characters and a surrogate pair is
    never split. Parsing error offsets become line/column locations.

    A file can be converted once; a second call raises `NumberingError`
    instead of shifting offsets again.
    """
    if file.numbering is not Numbering.BYTES:
        raise NumberingError(expected=Numbering.BYTES.value, actual=file.numbering.value)

    return replace(
        file,
        children=tuple(_convert_node(child, index) for child in file.children),
        footer_span=_convert_span(file.footer_span, index),
        parsing_errors=tuple(_convert_error(err, index) for err in file.parsing_errors),
        numbering=Numbering.CHARS,
    )


def _convert_node(node: TreeNode, index: PositionIndex) -> TreeNode:
    if isinstance(node, Leaf):
        return replace(node, span=_convert_span(node.span, index))
    if isinstance(node, Container):
        return replace(
            node,
            span=_convert_span(node.span, index),
            header_span=_convert_span(node.header_span, index),
            footer_span=_convert_span(node.footer_span, index),
            children=tuple(_convert_node(child, index) for child in node.children),
        )
    raise TypeError(f"unexpected tree node: {type(node)!r}")


def _convert_span(span: Span | None, index: PositionIndex) -> CharSpan:
    if not isinstance(span, ByteSpan):
        raise TypeError(f"expected a byte span, got {span!r}")
    return CharSpan(first=index.get_char(span.first), last=index.get_char(span.last + 1) - 1)


def _convert_error(err: ParsingError, index: PositionIndex) -> ParsingError:
    if not isinstance(err.position, int):
        raise TypeError(f"parsing error already has a location: {err!r}")
    return ParsingError(position=index.line_char(err.position), message=err.message)
