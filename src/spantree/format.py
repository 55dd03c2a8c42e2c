from __future__ import annotations

import json

from .ast import Container, File, Leaf, ParsingError, TreeNode
from .errors import NumberingError
from .spans import LocationSpan, Numbering


def format_file(file: File, *, indent: int | None = None) -> str:
    return json.dumps(file_to_dict(file), indent=indent, ensure_ascii=False)


def file_to_dict(file: File) -> dict[str, object]:
    """Encode a normalized file using the external-parser JSON layout.

    Leaves carry `span`; containers carry `headerSpan`, `footerSpan` and
    `children` instead. `parsingErrors` is only present when there are any.
    """
    if file.numbering is not Numbering.CHARS:
        raise NumberingError(expected=Numbering.CHARS.value, actual=file.numbering.value)

    out: dict[str, object] = {
        "type": file.kind,
        "name": file.name,
        "locationSpan": _format_location_span(file.location_span),
        "footerSpan": file.footer_span.as_list(),
        "parsingErrorsDetected": file.parsing_errors_detected,
        "children": [_format_node(child) for child in file.children],
    }
    if file.parsing_errors:
        out["parsingErrors"] = [_format_error(err) for err in file.parsing_errors]
    return out


def _format_node(node: TreeNode) -> dict[str, object]:
    out: dict[str, object] = {
        "type": node.kind,
        "name": node.name,
        "locationSpan": _format_location_span(node.location_span),
    }
    if isinstance(node, Leaf):
        out["span"] = node.span.as_list()
        return out
    if isinstance(node, Container):
        out["headerSpan"] = node.header_span.as_list()
        out["footerSpan"] = node.footer_span.as_list()
        out["children"] = [_format_node(child) for child in node.children]
        return out
    raise TypeError(f"unexpected tree node: {type(node)!r}")


def _format_location_span(loc: LocationSpan | None) -> dict[str, list[int]]:
    if loc is None:
        raise ValueError("node has no location span; normalize the file first")
    return {"start": loc.start.as_list(), "end": loc.end.as_list()}


def _format_error(err: ParsingError) -> dict[str, object]:
    if isinstance(err.position, int):
        raise TypeError(f"parsing error still has a byte offset: {err!r}")
    return {"location": err.position.as_list(), "message": err.message}
