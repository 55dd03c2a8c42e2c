from __future__ import annotations

import codecs
import importlib
from collections.abc import Callable
from pathlib import Path

from .ast import File
from .blocks import parse_blocks
from .errors import ParseError, UpstreamParseFailure
from .index import build_index
from .normalize import normalize


Parser = Callable[[bytes, str], File]

BUILTIN_PARSERS: dict[str, Parser] = {
    "blocks": parse_blocks,
}


def resolve_parser(spec: str) -> Parser:
    """Look up a built-in parser by name, or import one given as `module:function`."""
    builtin = BUILTIN_PARSERS.get(spec)
    if builtin is not None:
        return builtin

    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        known = ", ".join(sorted(BUILTIN_PARSERS))
        raise ValueError(f"unknown parser {spec!r}; use one of: {known}, or module:function")
    module = importlib.import_module(module_name)
    parser = getattr(module, attr, None)
    if not callable(parser):
        raise ValueError(f"{spec!r} is not a callable parser")
    return parser


def decode_source(raw: bytes, encoding: str | None = None) -> bytes:
    """Transcode `raw` from `encoding` to the UTF-8 the index expects."""
    if not encoding:
        return raw
    codec = codecs.lookup(encoding)  # LookupError for unknown names
    if codec.name == "utf-8":
        return raw
    return raw.decode(codec.name).encode("utf-8")


def parse_source(
    source: bytes | str,
    *,
    parser: Parser,
    name: str = "<memory>",
    encoding: str | None = None,
) -> File:
    if isinstance(source, str):
        buf = source.encode("utf-8")
    else:
        buf = decode_source(source, encoding)

    index = build_index(buf)
    try:
        partial = parser(buf, name)
    except ParseError as exc:
        raise UpstreamParseFailure(name=name, message=str(exc)) from exc
    if not isinstance(partial, File):
        raise RuntimeError(f"parser returned unexpected value: {type(partial)!r}")
    return normalize(partial, index)


def parse_file(path: str | Path, *, parser: Parser, encoding: str | None = None) -> File:
    p = Path(path).expanduser().resolve()
    return parse_source(p.read_bytes(), parser=parser, name=str(p), encoding=encoding)
