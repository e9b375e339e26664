"""Status palettes and selection helpers.

A theme is a plain value passed into every rendering call; nothing here is
mutated at runtime. Syntax-highlighting style for previews is a separate
Pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass

from .vcs.types import DiffLineType, VCSStatus


@dataclass(frozen=True)
class StatusTheme:
    """Semantic ANSI palette used by tree, status-bar and preview renderers."""

    name: str
    reset: str
    strike: str
    tree_marker: str
    tree_dir: str
    tree_file: str
    status_modified: str
    status_added: str
    status_deleted: str
    status_renamed: str
    status_untracked: str
    status_ignored: str
    status_conflict: str
    status_bar: str
    gutter_added: str
    gutter_modified: str
    gutter_deleted: str
    line_number: str

    def color_for_status(self, status: VCSStatus) -> str:
        """Return the color for ``status``, or ``""`` for ``NONE``."""
        return {
            VCSStatus.MODIFIED: self.status_modified,
            VCSStatus.ADDED: self.status_added,
            VCSStatus.DELETED: self.status_deleted,
            VCSStatus.RENAMED: self.status_renamed,
            VCSStatus.UNTRACKED: self.status_untracked,
            VCSStatus.IGNORED: self.status_ignored,
            VCSStatus.CONFLICT: self.status_conflict,
        }.get(status, "")

    def color_for_diff(self, kind: DiffLineType) -> str:
        if kind is DiffLineType.ADDED:
            return self.gutter_added
        if kind is DiffLineType.MODIFIED:
            return self.gutter_modified
        return self.gutter_deleted


DEFAULT_THEME = StatusTheme(
    name="default",
    reset="\033[0m",
    strike="\033[9m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    status_modified="\033[38;5;214m",
    status_added="\033[38;5;42m",
    status_deleted="\033[38;5;196m",
    status_renamed="\033[38;5;75m",
    status_untracked="\033[38;5;114m",
    status_ignored="\033[2;38;5;243m",
    status_conflict="\033[1;38;5;201m",
    status_bar="\033[48;5;236;38;5;252m",
    gutter_added="\033[38;5;42m",
    gutter_modified="\033[38;5;214m",
    gutter_deleted="\033[38;5;196m",
    line_number="\033[38;5;242m",
)

OCEAN_THEME = StatusTheme(
    name="ocean",
    reset="\033[0m",
    strike="\033[9m",
    tree_marker="\033[38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_file="\033[38;5;252m",
    status_modified="\033[38;5;221m",
    status_added="\033[38;5;79m",
    status_deleted="\033[38;5;167m",
    status_renamed="\033[38;5;117m",
    status_untracked="\033[38;5;150m",
    status_ignored="\033[2;38;5;110m",
    status_conflict="\033[1;38;5;213m",
    status_bar="\033[48;5;24;38;5;153m",
    gutter_added="\033[38;5;79m",
    gutter_modified="\033[38;5;221m",
    gutter_deleted="\033[38;5;167m",
    line_number="\033[38;5;67m",
)

_THEMES = {theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME)}


def available_theme_names() -> list[str]:
    return sorted(_THEMES)


def resolve_theme(name: str | None) -> StatusTheme:
    """Look up a theme by case-insensitive name, defaulting when unknown."""
    if not name:
        return DEFAULT_THEME
    return _THEMES.get(name.strip().lower(), DEFAULT_THEME)


__all__ = [
    "StatusTheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "available_theme_names",
    "resolve_theme",
]
