from __future__ import annotations

import re

from hypothesis import given
from hypothesis import strategies as st

from spantree import Location, LocationSpan, build_index


def test_ascii_lines_and_columns() -> None:
    index = build_index(b"ab\ncd")
    assert index.length == 5
    assert index.lines == (1, 1, 1, 2, 2, 2)
    assert index.columns == (1, 2, 3, 1, 2, 3)
    assert index.chars == (0, 1, 2, 3, 4, 5)
    assert index.line_starts == (-1, 0, 3, 5, 5)
    assert index.line_count == 2
    assert index.line_end(0) == 2
    assert index.line_end(2) == 2
    assert index.line_end(4) == 4


def test_make_loc_uses_inclusive_end() -> None:
    index = build_index(b"ab\ncd")
    assert index.make_loc(0, 2) == LocationSpan(start=Location(1, 1), end=Location(1, 3))
    assert index.make_loc(3, 4) == LocationSpan(start=Location(2, 1), end=Location(2, 2))


def test_two_byte_character_counts_once() -> None:
    index = build_index("aéb".encode("utf-8"))
    assert index.chars == (0, 1, 1, 2, 3)
    assert index.columns == (1, 2, 2, 3, 4)


def test_supplementary_character_counts_two_units() -> None:
    buf = "ab😀".encode("utf-8")
    assert len(buf) == 6
    index = build_index(buf)
    assert index.chars == (0, 1, 2, 2, 2, 2, 4)
    assert index.columns == (1, 2, 3, 3, 3, 3, 5)
    assert index.get_char(6) == 4
    assert index.char_length == len("ab😀".encode("utf-16-le")) // 2


def test_crlf_is_a_single_terminator() -> None:
    index = build_index(b"a\r\nb")
    assert index.lines == (1, 1, 1, 2, 2)
    assert index.columns == (1, 2, 3, 1, 2)
    assert index.line_starts == (-1, 0, 3, 4, 4)


def test_lone_cr_ends_a_line() -> None:
    index = build_index(b"a\rb")
    assert index.lines == (1, 1, 2, 2)
    assert index.line_starts == (-1, 0, 2, 3, 3)


def test_cr_as_final_byte_ends_a_line() -> None:
    index = build_index(b"a\r")
    assert index.line_starts == (-1, 0, 2, 2, 2)
    assert index.line_count == 2
    assert index.line_char(2) == Location(2, 1)
    assert index.line_end(0) == 1


def test_trailing_newline_opens_an_empty_line() -> None:
    index = build_index(b"ab\n")
    assert index.line_count == 2
    assert index.line_char(3) == Location(2, 1)
    assert index.line_end(1) == 2


def test_out_of_range_offsets() -> None:
    index = build_index("ab😀".encode("utf-8"))
    assert index.get_line(-5) == 1
    assert index.get_col(-1) == 1
    assert index.get_char(-1) == 0
    assert index.get_line(100) == 1
    assert index.get_col(100) == 0
    assert index.get_char(8) == 6


def test_empty_buffer() -> None:
    index = build_index(b"")
    assert index.length == 0
    assert index.chars == (0,)
    assert index.line_starts == (-1, 0, 0, 0)
    assert index.line_count == 1
    assert index.line_char(0) == Location(1, 1)
    assert index.line_end(0) == -1


def test_lone_continuation_byte_at_start_is_counted() -> None:
    index = build_index(b"\x80a")
    assert index.chars == (0, 1, 2)


@given(st.binary(max_size=300))
def test_chars_are_monotonic(buf: bytes) -> None:
    index = build_index(buf)
    assert len(index.chars) == len(buf) + 1
    assert all(a <= b for a, b in zip(index.chars, index.chars[1:]))


@given(st.binary(max_size=300))
def test_continuation_bytes_are_invisible(buf: bytes) -> None:
    index = build_index(buf)
    for i in range(1, len(buf)):
        if buf[i] & 0xC0 == 0x80:
            assert index.get_col(i) == index.get_col(i - 1)
            assert index.get_char(i) == index.get_char(i - 1)


@given(st.binary(max_size=100), st.integers(min_value=-10, max_value=120))
def test_line_char_is_pure(buf: bytes, offset: int) -> None:
    index = build_index(buf)
    assert index.line_char(offset) == index.line_char(offset)


@given(st.text(max_size=200))
def test_positions_match_a_character_walk(text: str) -> None:
    buf = text.encode("utf-8")
    index = build_index(buf)

    offset, line, col, char = 0, 1, 1, 0
    for i, ch in enumerate(text):
        assert index.line_char(offset) == Location(line, col)
        assert index.get_char(offset) == char
        units = 2 if ord(ch) > 0xFFFF else 1
        offset += len(ch.encode("utf-8"))
        col += units
        char += units
        if ch == "\n" or (ch == "\r" and text[i + 1 : i + 2] != "\n"):
            line += 1
            col = 1

    assert index.line_char(len(buf)) == Location(line, col)
    assert index.char_length == char == len(text.encode("utf-16-le")) // 2
    assert index.line_count == len(re.findall(r"\r\n|\r|\n", text)) + 1
