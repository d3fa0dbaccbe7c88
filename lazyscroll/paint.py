"""Paint laid-out viewport frames into bordered terminal rows."""

from __future__ import annotations

from .ansi import ansi_display_width, pad_ansi_line, slice_ansi_line
from .ui_theme import DEFAULT_THEME, UITheme, styled
from .viewport import PADDING, ViewportEngine, ViewportFrame

ANSI_RESET = "\033[0m"


def _border(text: str, theme: UITheme) -> str:
    return styled(text, theme.border, theme.reset)


def _top_border(title: str, width: int, theme: UITheme) -> str:
    title = title[:width]
    fill = "─" * (width - len(title))
    return _border("┌", theme) + styled(title, theme.title, theme.reset) + _border(f"{fill}┐", theme)


def _compose_row(frame: ViewportFrame, gutter: str, body: str, theme: UITheme) -> str:
    label = styled(gutter, theme.line_number, theme.reset)
    label += " " * max(0, frame.gutter_width - len(gutter))

    if "\x1b[" in body:
        body += ANSI_RESET
    pad = " " * PADDING
    row = f"{label}{pad}{pad_ansi_line(body, frame.text_width)}{pad}"

    # a wrapped row holding one character wider than text_width can overflow
    if ansi_display_width(row) > frame.width:
        row = slice_ansi_line(row, 0, frame.width)
        if "\x1b[" in row:
            row += ANSI_RESET
        row += " " * max(0, frame.width - ansi_display_width(row))
    return row


def paint_frame(frame: ViewportFrame, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Return ``frame.height + 2`` rows: top border, content rows, bottom border."""
    lines = [_top_border(frame.title, frame.width, theme)]
    side = _border("│", theme)
    for gutter, body in zip(frame.gutter_rows, frame.body_rows):
        lines.append(f"{side}{_compose_row(frame, gutter, body, theme)}{side}")
    lines.append(_border("└" + "─" * frame.width + "┘", theme))
    return lines


def render_lines(
    engine: ViewportEngine,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Render ``engine`` into an outer ``width`` x ``height`` area, border included."""
    frame = engine.render(max(0, width - 2), max(0, height - 2))
    return paint_frame(frame, theme)
