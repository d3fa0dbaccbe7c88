"""Word wrapping shared by every viewport layout path.

The gutter, the body, and the page-scroll walks all measure wrapped lines
through this module so their row counts always agree. Wrapping is computed on
plain text in terminal display columns (tabs, wide characters) and then
applied to the styled line by character offsets.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from itertools import islice

from .ansi import char_display_width, slice_ansi_chars

_CHUNK_RE = re.compile(r"\s+|\S+")


def _columns(chunk: str, col: int) -> int:
    end = col
    for ch in chunk:
        end += char_display_width(ch, end)
    return end - col


class _RowBuilder:
    """Collects row ranges while tracking the columns used by the open row.

    Every row is measured from column 0, so a tab inside a wrapped row expands
    relative to the start of that row.
    """

    def __init__(self, width: int) -> None:
        self.width = width
        self.ranges: list[tuple[int, int]] = []
        self.start = -1
        self.end = 0
        self.col = 0

    def _open(self, idx: int) -> None:
        if self.start < 0:
            self.start = idx
            self.end = idx

    def close(self) -> None:
        # trailing whitespace lies past self.end and is dropped here
        if self.start >= 0 and self.end > self.start:
            self.ranges.append((self.start, self.end))
        self.start = -1
        self.col = 0

    def add_space(self, idx: int, chunk: str) -> None:
        if self.start < 0 and self.ranges:
            return
        cols = _columns(chunk, self.col)
        if self.col + cols > self.width:
            self.close()
            return
        self._open(idx)
        self.col += cols

    def add_word(self, idx: int, chunk: str) -> None:
        cols = _columns(chunk, self.col)
        if self.col + cols <= self.width:
            self._open(idx)
            self.col += cols
            self.end = idx + len(chunk)
            return
        if _columns(chunk, 0) <= self.width:
            self.close()
            self._open(idx)
            self.col = _columns(chunk, 0)
            self.end = idx + len(chunk)
            return

        # wider than a whole row: fill the open row, then break by columns
        for pos, ch in enumerate(chunk, start=idx):
            cols = char_display_width(ch, self.col)
            if self.col > 0 and self.col + cols > self.width:
                self.close()
                cols = char_display_width(ch, 0)
            self._open(pos)
            self.col += cols
            self.end = pos + 1


def wrap_ranges(text: str, width: int) -> list[tuple[int, int]]:
    """Return ``(start, end)`` character ranges of ``text`` wrapped at ``width`` columns.

    Words move to the next row when they do not fit; a word wider than a row
    is broken by columns. Whitespace at row boundaries falls between ranges
    and only the first row keeps its indentation. Empty and whitespace-only
    text still occupies one (empty) row. A single character wider than
    ``width`` gets a row of its own.
    """
    rows = _RowBuilder(max(1, width))
    for match in _CHUNK_RE.finditer(text):
        chunk = match.group()
        if chunk.isspace():
            rows.add_space(match.start(), chunk)
        else:
            rows.add_word(match.start(), chunk)
    rows.close()
    return rows.ranges or [(0, 0)]


def wrapped_line_height(text: str, width: int, wrap: bool = True) -> int:
    """Return the number of terminal rows one logical line occupies."""
    if not wrap:
        return 1
    return len(wrap_ranges(text, width))


def iter_line_heights(
    lines: Sequence[str],
    offset: int,
    width: int,
    height: int,
    wrap: bool,
) -> Iterator[int]:
    """Yield heights of at most ``height`` lines starting at ``offset``."""
    window = islice(lines, max(0, offset), max(0, offset) + max(0, height))
    for line in window:
        yield wrapped_line_height(line, width, wrap)


def iter_reversed_line_heights(
    lines: Sequence[str],
    offset: int,
    width: int,
    height: int,
    wrap: bool,
) -> Iterator[int]:
    """Yield heights of at most ``height`` lines above ``offset``, nearest first."""
    idx = min(offset, len(lines)) - 1
    remaining = max(0, height)
    while idx >= 0 and remaining > 0:
        yield wrapped_line_height(lines[idx], width, wrap)
        idx -= 1
        remaining -= 1


def wrap_styled_line(styled: str, plain: str, width: int) -> list[str]:
    """Wrap a styled line into rows using the break points of its plain text."""
    return [slice_ansi_chars(styled, start, end) for start, end in wrap_ranges(plain, width)]
