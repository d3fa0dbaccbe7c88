"""UI theme definitions and selection helpers.

Themes are chrome-only ANSI palettes (border, title, line numbers). Syntax
highlighting style for previewed text remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the painter."""

    name: str
    border: str
    title: str
    line_number: str
    reset: str


DEFAULT_THEME = UITheme(
    name="default",
    border="",
    title="",
    line_number="\033[90m",
    reset="\033[0m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    border="\033[38;5;31m",
    title="\033[1;38;5;45m",
    line_number="\033[2;38;5;110m",
    reset="\033[0m",
)

PLAIN_THEME = UITheme(
    name="plain",
    border="",
    title="",
    line_number="",
    reset="",
)

THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return theme names in stable display order."""
    return tuple(THEMES)


def get_theme(name: str | None) -> UITheme:
    """Resolve a theme by name, falling back to the default palette."""
    if not name:
        return DEFAULT_THEME
    return THEMES.get(name.strip().lower(), DEFAULT_THEME)


def styled(text: str, sgr: str, reset: str) -> str:
    """Wrap ``text`` in ``sgr``/``reset`` unless either is empty."""
    if not text or not sgr:
        return text
    return f"{sgr}{text}{reset}"
