from __future__ import annotations

from dataclasses import dataclass, field

from .ast import Container, File, Leaf, ParsingError, TreeNode
from .errors import ParseError
from .spans import ByteSpan


_LF = ord("\n")
_CR = ord("\r")
_LBRACE = ord("{")
_RBRACE = ord("}")
_SEMI = ord(";")
_BACKSLASH = ord("\\")
_BACKTICK = ord("`")

_WHITESPACE = frozenset(b" \t\r\n\f\v")
_INLINE_SPACE = frozenset(b" \t")
_OPENERS = frozenset(b"([")
_CLOSERS = frozenset(b")]")
_QUOTES = frozenset(b"\"'`")

_NAME_LIMIT = 80


def parse_blocks(source: bytes, name: str = "<memory>") -> File:
    """Partial tree for a brace-delimited language.

    `{ ... }` groups become `block` containers, everything else becomes
    `statement` leaves ending at `;` or at the end of a line. Spans are only
    approximate: comments and blank lines between items are left for the
    normalizer to distribute.
    """
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(
            position=exc.start,
            message="source is not valid UTF-8",
            name=name,
            hint="pass the source encoding so it is transcoded first",
        ) from exc
    return _BlockParser(src=source, name=name).parse()


@dataclass(slots=True)
class _BlockParser:
    src: bytes
    name: str
    i: int = 0
    errors: list[ParsingError] = field(default_factory=list)

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self) -> int:
        return self.src[self.i] if self.i < len(self.src) else -1

    def error(self, position: int, message: str) -> None:
        self.errors.append(ParsingError(position=position, message=message))

    def parse(self) -> File:
        children = self._items(nested=False)
        return File(
            kind="file",
            name=self.name,
            children=tuple(children),
            parsing_errors=tuple(self.errors),
        )

    def _items(self, *, nested: bool) -> list[TreeNode]:
        items: list[TreeNode] = []
        while True:
            self._skip_trivia()
            if self.eof():
                return items
            if self.peek() == _RBRACE:
                if nested:
                    return items
                self.error(self.i, "unmatched '}'")
                self.i += 1
                continue
            items.append(self._item())

    def _item(self) -> TreeNode:
        start = self.i
        last = start
        depth = 0
        while not self.eof():
            b = self.peek()
            if self._at_comment():
                self._skip_comment()
                continue
            if b in _QUOTES:
                self._skip_string()
                last = self.i - 1
                continue
            if depth == 0:
                if b == _SEMI:
                    self.i += 1
                    return self._statement(start, self.i - 1)
                if b == _LBRACE:
                    return self._block(start, self.i)
                if b == _RBRACE:
                    break
                if b in (_LF, _CR) and not self._block_follows():
                    break
            if b in _OPENERS or b == _LBRACE:
                depth += 1
            elif (b in _CLOSERS or b == _RBRACE) and depth:
                depth -= 1
            if b not in _WHITESPACE:
                last = self.i
            self.i += 1
        return self._statement(start, last)

    def _statement(self, start: int, last: int) -> Leaf:
        return Leaf(kind="statement", name=self._name(start, last + 1), span=ByteSpan(start, last))

    def _block(self, start: int, brace: int) -> TreeNode:
        self.i = brace + 1
        children = self._items(nested=True)
        if self.eof():
            self.error(brace, "unterminated block")
            close = len(self.src)
            end = close - 1
        else:
            close = self.i
            end = close
            self.i += 1
            j = self.i
            while j < len(self.src) and self.src[j] in _INLINE_SPACE:
                j += 1
            if j < len(self.src) and self.src[j] == _SEMI:
                end = j
                self.i = j + 1

        name = self._name(start, brace)
        if not children:
            return Leaf(kind="block", name=name, span=ByteSpan(start, end))
        return Container(
            kind="block",
            name=name,
            span=ByteSpan(start, end),
            header_span=ByteSpan(start, brace),
            footer_span=ByteSpan(close, end),
            children=tuple(children),
        )

    def _name(self, start: int, stop: int) -> str:
        text = self.src[start:stop].decode("utf-8", errors="replace")
        return " ".join(text.split())[:_NAME_LIMIT]

    def _at_comment(self, j: int | None = None) -> bool:
        j = self.i if j is None else j
        return self.src.startswith(b"//", j) or self.src.startswith(b"/*", j)

    def _comment_end(self, j: int) -> int:
        """Offset just past the comment at `j`; line comments stop before the newline."""
        if self.src.startswith(b"//", j):
            nl = self.src.find(b"\n", j)
            return len(self.src) if nl == -1 else nl
        close = self.src.find(b"*/", j + 2)
        return len(self.src) if close == -1 else close + 2

    def _skip_comment(self) -> None:
        start = self.i
        self.i = self._comment_end(start)
        if self.src.startswith(b"/*", start) and self.src.find(b"*/", start + 2) == -1:
            self.error(start, "unterminated block comment")

    def _skip_trivia(self) -> None:
        while not self.eof():
            if self.peek() in _WHITESPACE:
                self.i += 1
            elif self._at_comment():
                self._skip_comment()
            else:
                return

    def _block_follows(self) -> bool:
        # Allman style: a header line followed by `{` on a later line.
        j = self.i
        while j < len(self.src):
            if self.src[j] in _WHITESPACE:
                j += 1
            elif self._at_comment(j):
                j = self._comment_end(j)
            else:
                return self.src[j] == _LBRACE
        return False

    def _skip_string(self) -> None:
        start = self.i
        quote = self.src[start]
        self.i += 1
        while not self.eof():
            c = self.peek()
            if c == _BACKSLASH:
                self.i = min(self.i + 2, len(self.src))
                continue
            if c == quote:
                self.i += 1
                return
            if c in (_LF, _CR) and quote != _BACKTICK:
                self.error(start, "unterminated string literal")
                return
            self.i += 1
        self.error(start, "unterminated string literal")
