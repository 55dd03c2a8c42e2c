from __future__ import annotations

from .api import parse_file, parse_source, resolve_parser
from .ast import Container, File, Leaf, ParsingError
from .blocks import parse_blocks
from .errors import (
    MissingBoundarySpansError,
    NormalizeError,
    NumberingError,
    ParseError,
    UpstreamParseFailure,
)
from .format import file_to_dict, format_file
from .index import PositionIndex, build_index
from .normalize import normalize
from .numbering import to_char_numbering
from .spans import ByteSpan, CharSpan, Location, LocationSpan, Numbering

__all__ = [
    "ByteSpan",
    "CharSpan",
    "Container",
    "File",
    "Leaf",
    "Location",
    "LocationSpan",
    "MissingBoundarySpansError",
    "NormalizeError",
    "Numbering",
    "NumberingError",
    "ParseError",
    "ParsingError",
    "PositionIndex",
    "UpstreamParseFailure",
    "build_index",
    "file_to_dict",
    "format_file",
    "normalize",
    "parse_blocks",
    "parse_file",
    "parse_source",
    "resolve_parser",
    "to_char_numbering",
]
