"""Named ANSI palettes for the navigator panes.

Themes only color the chrome; ``--json`` output uses a separate Pygments style.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    header: str
    breadcrumb: str
    breadcrumb_current: str
    directory: str
    child_marker: str
    markdown: str
    image: str
    other: str
    dim: str
    loading: str
    error: str
    prompt: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1;38;5;81m",
    breadcrumb="\033[38;5;250m",
    breadcrumb_current="\033[1;38;5;229m",
    directory="\033[1;34m",
    child_marker="\033[38;5;44m",
    markdown="\033[38;5;110m",
    image="\033[38;5;176m",
    other="\033[38;5;252m",
    dim="\033[2;38;5;250m",
    loading="\033[38;5;214m",
    error="\033[1;31m",
    prompt="\033[1;38;5;81m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    breadcrumb="\033[38;5;153m",
    breadcrumb_current="\033[1;38;5;45m",
    directory="\033[1;38;5;45m",
    child_marker="\033[38;5;39m",
    markdown="\033[38;5;117m",
    image="\033[38;5;183m",
    other="\033[38;5;252m",
    dim="\033[2;38;5;110m",
    loading="\033[38;5;215m",
    error="\033[1;38;5;203m",
    prompt="\033[1;38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    header="",
    breadcrumb="",
    breadcrumb_current="",
    directory="",
    child_marker="",
    markdown="",
    image="",
    other="",
    dim="",
    loading="",
    error="",
    prompt="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(sorted(_THEMES))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return the palette for ``name``; unknown names fall back to ``default``."""
    if no_color:
        return PLAIN_THEME
    candidate = (name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


__all__ = [
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "UITheme",
    "available_theme_names",
    "resolve_theme",
]
