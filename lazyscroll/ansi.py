"""ANSI-aware text measurement and line shaping utilities.

Styled lines carry their styling as embedded SGR escape sequences. These
helpers measure, pan, and cut such lines without counting escapes as text.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Columns ``ch`` covers when drawn at column ``col`` (tabs snap to 8-column stops)."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _iter_cells(text: str) -> Iterator[tuple[str, int, int, bool]]:
    """Yield ``(token, column, width, is_escape)`` for each escape or character."""
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                yield match.group(0), col, 0, True
                i = match.end()
                continue
        width = char_display_width(text[i], col)
        yield text[i], col, width, False
        col += width
        i += 1


def strip_ansi(text: str) -> str:
    """Remove every escape sequence from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def ansi_display_width(text: str) -> int:
    """Return display width after removing ANSI escape sequences."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def expand_ansi_tabs(text: str) -> str:
    """Replace each tab with the spaces it covers, keeping escapes in place."""
    if "\t" not in text:
        return text
    return "".join(" " * width if token == "\t" else token for token, _col, width, _esc in _iter_cells(text))


def slice_ansi_line(text: str, start_cols: int, max_cols: int) -> str:
    """Return display columns ``[start_cols, start_cols + max_cols)`` of a styled line.

    The last SGR sequence seen before the window is re-emitted at its front.
    A tab or wide character cut by the left edge contributes only the blank
    columns that fall inside the window, so the first visible column is always
    ``start_cols``.
    """
    if max_cols <= 0 or not text:
        return ""
    start = max(0, start_cols)
    stop = start + max_cols

    out: list[str] = []
    pending_sgr = ""
    for token, col, width, is_escape in _iter_cells(text):
        if col >= stop:
            break
        if is_escape:
            if col < start:
                if token.endswith("m"):
                    pending_sgr = token
                continue
            if not out and pending_sgr and not token.endswith("m"):
                out.append(pending_sgr)
            out.append(token)
            continue
        end = col + width
        if end <= start:
            continue
        if not out and pending_sgr:
            out.append(pending_sgr)
        if col < start or token == "\t":
            out.append(" " * (min(end, stop) - max(col, start)))
            continue
        if end > stop:
            break
        out.append(token)
    return "".join(out)


def slice_ansi_chars(text: str, start: int, end: int) -> str:
    """Return visible characters ``[start, end)`` of a styled line.

    Offsets count plain characters, so ranges computed on the ANSI-stripped
    text apply directly. The SGR sequence active at ``start`` is re-emitted at
    the front of the slice and escapes inside the range are kept in place.
    """
    if end <= start or not text:
        return ""

    out: list[str] = []
    pending_sgr = ""
    visible = 0
    i = 0
    n = len(text)
    while i < n and visible < end:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                seq = match.group(0)
                if visible > start or (visible == start and out):
                    out.append(seq)
                elif seq.endswith("m"):
                    pending_sgr = seq
                i = match.end()
                continue
        if visible >= start:
            if not out and pending_sgr:
                out.append(pending_sgr)
            out.append(text[i])
        visible += 1
        i += 1

    # escapes directly after the last character (usually a reset) stay attached
    while out and i < n and text[i] == "\x1b":
        match = ANSI_ESCAPE_RE.match(text, i)
        if match is None:
            break
        out.append(match.group(0))
        i = match.end()

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Right-pad a styled line with spaces to ``width`` display columns."""
    missing = width - ansi_display_width(text)
    if missing <= 0:
        return text
    return text + " " * missing
