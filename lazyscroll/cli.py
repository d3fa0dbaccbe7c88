"""Command-line front door for lazyscroll.

Loads a file into a viewport, replays scroll commands against it, and prints
the painted frame. Preferences default to the persisted config.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from . import config
from .paint import render_lines
from .syntax import DEFAULT_STYLE, load_preview
from .ui_theme import PLAIN_THEME, available_theme_names, get_theme
from .viewport import COMMAND_NAMES, ViewportEngine, ViewportOptions

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_size() -> tuple[int, int]:
    """Resolve default frame size from the current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns), max(1, term.lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyscroll",
        description="Render a file in a scrollable, line-numbered terminal frame.",
    )
    parser.add_argument("path", help="File to preview.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Frame width (default: terminal width).")
    parser.add_argument("--height", type=_positive_int, default=None, help="Frame height (default: terminal height).")
    parser.add_argument("--wrap", dest="wrap", action="store_true", default=None, help="Word-wrap long lines.")
    parser.add_argument("--no-wrap", dest="wrap", action="store_false", help="Pan long lines instead of wrapping.")
    parser.add_argument("--number", dest="number", action="store_true", default=None, help="Show line numbers.")
    parser.add_argument("--no-number", dest="number", action="store_false", help="Hide line numbers.")
    parser.add_argument("--style", default=None, help="Pygments style name for syntax highlighting.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--command",
        dest="commands",
        action="append",
        default=[],
        choices=COMMAND_NAMES,
        metavar="NAME",
        help=f"Viewport command to apply before printing; repeatable ({', '.join(COMMAND_NAMES)}).",
    )
    parser.add_argument("--save-options", action="store_true", help="Persist the effective wrap/number settings.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Diagnostics verbosity on stderr.",
    )
    parser.set_defaults(wrap=None, number=None)
    return parser


def replay_commands(engine: ViewportEngine, commands: list[str], width: int, height: int) -> None:
    """Apply each command and render once so none is overwritten by the next."""
    for name in commands:
        engine.apply_command(name)
        engine.render(max(0, width - 2), max(0, height - 2))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, render the requested file, and print the frame."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_file():
        raise SystemExit(f"Not a file: {path}")

    options = config.load_viewport_options()
    if args.wrap is not None:
        options.wrap = args.wrap
    if args.number is not None:
        options.number = args.number
    if args.save_options:
        config.save_viewport_options(options)

    style = args.style or config.load_style_name() or DEFAULT_STYLE
    theme = PLAIN_THEME if args.no_color else get_theme(args.theme or config.load_theme_name())

    default_width, default_height = _default_size()
    width = args.width or default_width
    height = args.height or default_height

    engine = load_preview(path, ViewportOptions(wrap=options.wrap, number=options.number), style, args.no_color)
    logger.debug("loaded %s: %d lines", path, engine.line_count)
    replay_commands(engine, args.commands, width, height)

    lines = render_lines(engine, width, height, theme)
    sys.stdout.write("\n".join(lines) + "\n")


if __name__ == "__main__":
    main()
