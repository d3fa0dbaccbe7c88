"""Scroll state and per-frame layout for the line viewer.

``ViewportEngine`` holds the loaded lines and the scroll position. Input
handling only records a one-shot ``ScrollCommand``; the command is resolved
during ``render`` because page sizes depend on the wrap width of the frame
being drawn. Each render returns a ``ViewportFrame`` with the gutter and body
rows laid out for the painter.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .ansi import ansi_display_width, expand_ansi_tabs, slice_ansi_line, strip_ansi
from .wrap import iter_line_heights, iter_reversed_line_heights, wrap_styled_line

logger = logging.getLogger(__name__)

PADDING = 1


class ScrollCommand(Enum):
    """Pending scroll request, consumed by the next render."""

    NONE = "none"
    LINE_FORWARD = "line-forward"
    LINE_BACKWARD = "line-backward"
    PAGE_FORWARD = "page-forward"
    PAGE_BACKWARD = "page-backward"
    TOP = "top"
    END = "end"
    COLUMN_RIGHT = "column-right"
    COLUMN_LEFT = "column-left"


TOGGLE_COMMAND_NAMES: tuple[str, ...] = ("toggle-wrap", "toggle-number")
COMMAND_NAMES: tuple[str, ...] = tuple(
    command.value for command in ScrollCommand if command is not ScrollCommand.NONE
) + TOGGLE_COMMAND_NAMES


@dataclass
class ViewportOptions:
    wrap: bool = True
    number: bool = True


def digit_count(value: int) -> int:
    """Return decimal digits needed to print ``value`` (at least one)."""
    return len(str(max(0, value)))


def page_forward_offset(
    plain_lines: Sequence[str],
    offset: int,
    width: int,
    height: int,
    wrap: bool,
) -> int:
    """Return the top line after scrolling one page down.

    The new top is the line that was cut off at the bottom of the current
    page, or the line right after the page when it ended exactly on a line
    boundary. Running out of lines lands on the last line.
    """
    last = max(0, len(plain_lines) - 1)
    if height <= 0:
        return offset

    advance = 0
    total = 0
    for line_height in iter_line_heights(plain_lines, offset, width, height, wrap):
        advance += 1
        total += line_height
        if total >= height:
            if total > height:
                # partially visible line becomes the new top
                advance -= 1
            return min(offset + max(advance, 1), last)
    return last


def page_backward_offset(
    plain_lines: Sequence[str],
    offset: int,
    width: int,
    height: int,
    wrap: bool,
) -> int:
    """Return the top line after scrolling one page up.

    Lines above ``offset`` are stacked until they fill ``height`` rows; a line
    that would only partly fit is left out so the new top is fully visible.
    When the line just above is taller than the page it still becomes the new
    top, which undoes a page forward off that line.
    """
    if height <= 0:
        return offset

    back = 0
    total = 0
    for line_height in iter_reversed_line_heights(plain_lines, offset, width, height, wrap):
        back += 1
        total += line_height
        if total >= height:
            if total > height:
                back -= 1
            return max(offset - max(back, 1), 0)
    return 0


@dataclass(frozen=True)
class ViewportFrame:
    """Laid-out content for one render pass.

    ``gutter_rows`` and ``body_rows`` both hold exactly ``height`` rows.
    Gutter rows are plain labels; body rows keep the source styling.
    """

    title: str
    gutter_rows: list[str]
    body_rows: list[str]
    gutter_width: int
    text_width: int
    height: int
    width: int = 0
    first_line: int = 0
    visible_lines: int = 0
    total_lines: int = 0

    def status_range(self) -> tuple[int, int, int]:
        """Return 1-based ``(first, last, total)`` logical lines on screen."""
        if self.total_lines <= 0 or self.visible_lines <= 0:
            return 0, 0, self.total_lines
        first = self.first_line + 1
        return first, first + self.visible_lines - 1, self.total_lines


@dataclass
class ViewportEngine:
    """Scrollable view over index-aligned styled and plain lines."""

    styled_lines: list[str]
    plain_lines: list[str]
    title: str = ""
    options: ViewportOptions = field(default_factory=ViewportOptions)
    vertical_offset: int = field(default=0, init=False)
    horizontal_offset: int = field(default=0, init=False)
    pending_command: ScrollCommand = field(default=ScrollCommand.NONE, init=False)
    max_label_width: int = field(default=1, init=False)
    max_line_width: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        assert len(self.styled_lines) == len(self.plain_lines), (
            f"styled/plain line count mismatch: {len(self.styled_lines)} != {len(self.plain_lines)}"
        )
        self.styled_lines = list(self.styled_lines)
        self.plain_lines = list(self.plain_lines)
        self.max_label_width = digit_count(len(self.styled_lines))
        self.max_line_width = max((ansi_display_width(line) for line in self.styled_lines), default=0)

    @classmethod
    def from_text(
        cls,
        text: str,
        title: str = "",
        options: ViewportOptions | None = None,
    ) -> ViewportEngine:
        """Build an engine from possibly styled text, one logical line per row."""
        styled = text.splitlines()
        plain = [strip_ansi(line) for line in styled]
        return cls(styled, plain, title, options or ViewportOptions())

    @property
    def line_count(self) -> int:
        return len(self.styled_lines)

    def gutter_width(self) -> int:
        if not self.options.number:
            return 0
        return self.max_label_width + 1

    def text_width(self, width: int) -> int:
        """Return body columns available inside a content area ``width`` wide."""
        return max(1, width - self.gutter_width() - 2 * PADDING)

    def scroll_line_forward(self) -> None:
        self.pending_command = ScrollCommand.LINE_FORWARD

    def scroll_line_backward(self) -> None:
        self.pending_command = ScrollCommand.LINE_BACKWARD

    def scroll_page_forward(self) -> None:
        self.pending_command = ScrollCommand.PAGE_FORWARD

    def scroll_page_backward(self) -> None:
        self.pending_command = ScrollCommand.PAGE_BACKWARD

    def scroll_to_top(self) -> None:
        self.pending_command = ScrollCommand.TOP

    def scroll_to_end(self) -> None:
        self.pending_command = ScrollCommand.END

    def scroll_column_right(self) -> None:
        self.pending_command = ScrollCommand.COLUMN_RIGHT

    def scroll_column_left(self) -> None:
        self.pending_command = ScrollCommand.COLUMN_LEFT

    def toggle_wrap(self) -> None:
        self.options.wrap = not self.options.wrap
        self.horizontal_offset = 0

    def toggle_number(self) -> None:
        self.options.number = not self.options.number

    def apply_command(self, name: str) -> None:
        """Dispatch a command by its dashed name, e.g. ``"page-forward"``."""
        if name == "toggle-wrap":
            self.toggle_wrap()
            return
        if name == "toggle-number":
            self.toggle_number()
            return
        try:
            command = ScrollCommand(name)
        except ValueError:
            raise ValueError(f"unknown viewport command: {name!r}") from None
        self.pending_command = command

    def resolve(self, text_width: int, height: int) -> None:
        """Apply the pending command for a body ``text_width`` x ``height``."""
        command = self.pending_command
        self.pending_command = ScrollCommand.NONE
        if command is ScrollCommand.NONE:
            return

        last_line = max(0, self.line_count - 1)
        last_column = max(0, self.max_line_width - 1)
        before = (self.vertical_offset, self.horizontal_offset)

        if command is ScrollCommand.LINE_FORWARD:
            self.vertical_offset = min(self.vertical_offset + 1, last_line)
        elif command is ScrollCommand.LINE_BACKWARD:
            self.vertical_offset = max(self.vertical_offset - 1, 0)
        elif command is ScrollCommand.PAGE_FORWARD:
            self.vertical_offset = page_forward_offset(
                self.plain_lines, self.vertical_offset, text_width, height, self.options.wrap
            )
        elif command is ScrollCommand.PAGE_BACKWARD:
            self.vertical_offset = page_backward_offset(
                self.plain_lines, self.vertical_offset, text_width, height, self.options.wrap
            )
        elif command is ScrollCommand.TOP:
            self.vertical_offset = 0
        elif command is ScrollCommand.END:
            self.vertical_offset = last_line
        elif command is ScrollCommand.COLUMN_RIGHT:
            self.horizontal_offset = min(self.horizontal_offset + 1, last_column)
        elif command is ScrollCommand.COLUMN_LEFT:
            self.horizontal_offset = max(self.horizontal_offset - 1, 0)

        logger.debug(
            "resolved %s: offsets %s -> %s (text_width=%d height=%d)",
            command.value,
            before,
            (self.vertical_offset, self.horizontal_offset),
            text_width,
            height,
        )

    def render(self, width: int, height: int) -> ViewportFrame:
        """Resolve the pending command and lay out a ``width`` x ``height`` area.

        ``width`` and ``height`` describe the content area inside the frame
        border; the gutter and body padding are carved out of it here.
        """
        rows = max(0, height)
        text_width = self.text_width(width)
        self.resolve(text_width, rows)

        body_rows, visible_lines = self._build_body_rows(text_width, rows)
        gutter_rows = self._build_gutter_rows(text_width, rows) if self.options.number else [""] * rows
        return ViewportFrame(
            title=self.title,
            gutter_rows=gutter_rows,
            body_rows=body_rows,
            gutter_width=self.gutter_width(),
            text_width=text_width,
            height=rows,
            width=max(0, width),
            first_line=self.vertical_offset,
            visible_lines=visible_lines,
            total_lines=self.line_count,
        )

    def _build_gutter_rows(self, text_width: int, height: int) -> list[str]:
        rows: list[str] = []
        heights = iter_line_heights(self.plain_lines, self.vertical_offset, text_width, height, self.options.wrap)
        for idx, line_height in enumerate(heights, start=self.vertical_offset):
            if len(rows) >= height:
                break
            label = str(idx + 1).rjust(self.max_label_width)
            rows.append(" " * PADDING + label)
            rows.extend("" for _ in range(line_height - 1))
        del rows[height:]
        rows.extend("" for _ in range(height - len(rows)))
        return rows

    def _build_body_rows(self, text_width: int, height: int) -> tuple[list[str], int]:
        rows: list[str] = []
        visible_lines = 0
        start = self.vertical_offset
        window = zip(self.styled_lines[start : start + height], self.plain_lines[start : start + height])
        for styled, plain in window:
            if len(rows) >= height:
                break
            visible_lines += 1
            if self.options.wrap:
                for row in wrap_styled_line(styled, plain, text_width):
                    rows.append(expand_ansi_tabs(row))
            else:
                rows.append(slice_ansi_line(styled, self.horizontal_offset, text_width))
        del rows[height:]
        rows.extend("" for _ in range(height - len(rows)))
        return rows, visible_lines
