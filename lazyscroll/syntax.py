"""Source loading, sanitization, and syntax highlighting.

Turns a file into the index-aligned styled/plain line pairs consumed by
``ViewportEngine``. Highlighting goes through Pygments; terminal control bytes
are neutralized first so previews cannot move the cursor or ring the bell.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .ansi import strip_ansi
from .viewport import ViewportEngine, ViewportOptions

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    """Return cached Pygments terminal formatter for style name."""
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` for the lexer matching ``path``.

    Leading/trailing blank lines are kept so line numbers stay aligned.
    Returns the source unchanged when highlighting fails.
    """
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)

    formatter = _formatter_for_style(normalize_style(style))
    try:
        return highlight(source, lexer, formatter)
    except Exception as exc:
        logger.debug("highlighting %s failed: %s", path, exc)
        return source


def build_preview_lines(
    source: str,
    path: Path,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> tuple[list[str], list[str]]:
    """Return index-aligned ``(styled_lines, plain_lines)`` for ``source``.

    A styled line whose visible text drifts from the plain line (lexers may
    normalize whitespace) is replaced by the plain line so wrap offsets stay
    valid.
    """
    text = sanitize_terminal_text(source)
    plain_lines = text.splitlines()
    if no_color or not plain_lines:
        return list(plain_lines), plain_lines

    styled_lines = colorize_source(text, path, style).splitlines()
    if len(styled_lines) < len(plain_lines):
        logger.debug("highlighted %s lost lines, showing plain text", path)
        return list(plain_lines), plain_lines

    aligned: list[str] = []
    for styled, plain in zip(styled_lines, plain_lines):
        aligned.append(styled if strip_ansi(styled) == plain else plain)
    return aligned, plain_lines


def load_preview(
    path: Path,
    options: ViewportOptions | None = None,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> ViewportEngine:
    """Read ``path`` and return a viewport titled with its file name."""
    styled_lines, plain_lines = build_preview_lines(read_text(path), path, style, no_color)
    return ViewportEngine(styled_lines, plain_lines, path.name, options or ViewportOptions())
