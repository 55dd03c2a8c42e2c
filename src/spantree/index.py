from __future__ import annotations

from dataclasses import dataclass

from .spans import Location, LocationSpan


_LF = 0x0A
_CR = 0x0D


def _is_continuation(b: int) -> bool:
    return b & 0b1100_0000 == 0b1000_0000


def _is_four_byte_lead(b: int) -> bool:
    # Supplementary-plane characters need a UTF-16 surrogate pair.
    return b & 0b1111_1000 == 0b1111_0000


@dataclass(frozen=True, slots=True)
class PositionIndex:
    """Byte offset -> (line, column, character) lookup for one source buffer.

    `lines`, `columns` and `chars` hold one entry per byte offset plus a final
    entry for offset `length`. Columns are 1-based and, like `chars`, count
    UTF-16 code units. `line_starts[n]` is the byte offset of line `n`; index 0
    is a `-1` sentinel and the table ends with `length` twice so that the line
    after the last one is always addressable.
    """

    length: int
    lines: tuple[int, ...]
    columns: tuple[int, ...]
    chars: tuple[int, ...]
    line_starts: tuple[int, ...]

    @classmethod
    def build(cls, buffer: bytes) -> "PositionIndex":
        size = len(buffer)
        lines: list[int] = []
        columns: list[int] = []
        chars: list[int] = []
        line_starts: list[int] = [-1, 0]

        line, col, char = 1, 1, 0
        for i, b in enumerate(buffer):
            lines.append(line)
            if i > 0 and _is_continuation(b):
                columns.append(columns[-1])
                chars.append(chars[-1])
            else:
                columns.append(col)
                chars.append(char)
                step = 2 if _is_four_byte_lead(b) else 1
                col += step
                char += step

            # A trailing CR has nothing after it and counts as a line end.
            if b == _LF or (b == _CR and (i + 1 == size or buffer[i + 1] != _LF)):
                line_starts.append(i + 1)
                line += 1
                col = 1

        lines.append(line)
        columns.append(col)
        chars.append(char)
        line_starts.extend((size, size))

        return cls(
            length=size,
            lines=tuple(lines),
            columns=tuple(columns),
            chars=tuple(chars),
            line_starts=tuple(line_starts),
        )

    @property
    def line_count(self) -> int:
        return len(self.line_starts) - 3

    @property
    def char_length(self) -> int:
        return self.chars[self.length]

    def get_line(self, offset: int) -> int:
        if offset < 0:
            return self.lines[0]
        if offset > self.length:
            return self.lines[self.length]
        return self.lines[offset]

    def get_col(self, offset: int) -> int:
        if offset < 0:
            return self.columns[0]
        if offset > self.length:
            return 0
        return self.columns[offset]

    def get_char(self, offset: int) -> int:
        if offset < 0:
            return self.chars[0]
        if offset > self.length:
            return self.chars[self.length] + (offset - self.length)
        return self.chars[offset]

    def line_char(self, offset: int) -> Location:
        return Location(line=self.get_line(offset), column=self.get_col(offset))

    def make_loc(self, first: int, last: int) -> LocationSpan:
        """Location span for the inclusive byte range [first, last]."""
        return LocationSpan(start=self.line_char(first), end=self.line_char(last))

    def line_end(self, offset: int) -> int:
        """Offset of the last byte (terminator included) of the line holding `offset`."""
        return self.line_starts[self.get_line(offset) + 1] - 1


def build_index(buffer: bytes) -> PositionIndex:
    return PositionIndex.build(buffer)
