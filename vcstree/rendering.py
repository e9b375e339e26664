"""Row formatting for the annotated tree, status bar, and file previews.

Every function takes the theme explicitly and can emit plain text
(``color=False``) for pipes and tests.
"""

from __future__ import annotations

from .file_tree import FileTree, Node
from .highlight import DEFAULT_STYLE, colorize_lines
from .preview import FilePreview
from .ui_theme import DEFAULT_THEME, StatusTheme
from .vcs import DiffLineType, VCSRepo, VCSStatus

STATUS_BADGES = {
    VCSStatus.MODIFIED: "[M]",
    VCSStatus.ADDED: "[A]",
    VCSStatus.DELETED: "[D]",
    VCSStatus.RENAMED: "[R]",
    VCSStatus.UNTRACKED: "[?]",
    VCSStatus.IGNORED: "[!]",
    VCSStatus.CONFLICT: "[C]",
}

GUTTER_MARKS = {
    DiffLineType.ADDED: "+",
    DiffLineType.MODIFIED: "~",
    DiffLineType.DELETED: "-",
}


def node_status(node: Node, vcs: VCSRepo | None) -> VCSStatus:
    """Ghosts are deleted by definition; other nodes ask the backend."""
    if node.is_ghost:
        return VCSStatus.DELETED
    if vcs is None or not vcs.is_inside_repo():
        return VCSStatus.NONE
    return vcs.get_status(node.path)


def format_tree_row(
    node: Node,
    status: VCSStatus = VCSStatus.NONE,
    theme: StatusTheme | None = None,
    color: bool = True,
) -> str:
    """Render one tree row: indent, expand marker, name, status badge."""
    active_theme = theme or DEFAULT_THEME
    indent = "  " * node.depth
    if node.is_dir:
        marker = "▾ " if node.expanded else "▸ "
        name = f"{node.name}/"
    else:
        marker = "  "
        name = node.name
    badge = STATUS_BADGES.get(status, "")
    suffix = f" {badge}" if badge else ""

    if not color:
        return f"{indent}{marker}{name}{suffix}"

    reset = active_theme.reset
    status_color = active_theme.color_for_status(status)
    if node.is_ghost:
        name_text = f"{active_theme.status_deleted}{active_theme.strike}{name}{reset}"
    elif status_color:
        name_text = f"{status_color}{name}{reset}"
    elif node.is_dir:
        name_text = f"{active_theme.tree_dir}{name}{reset}"
    else:
        name_text = f"{active_theme.tree_file}{name}{reset}"
    badge_text = f" {status_color}{badge}{reset}" if badge else ""
    return f"{indent}{active_theme.tree_marker}{marker}{reset}{name_text}{badge_text}"


def format_tree(
    tree: FileTree,
    vcs: VCSRepo | None = None,
    theme: StatusTheme | None = None,
    color: bool = True,
) -> list[str]:
    """Render every visible row of ``tree`` in flat-list order."""
    return [format_tree_row(node, node_status(node, vcs), theme, color) for node in tree.nodes]


def format_status_bar(
    tree: FileTree,
    vcs: VCSRepo | None = None,
    theme: StatusTheme | None = None,
    color: bool = True,
) -> str:
    """Summarize root path, VCS identity, and visible-row count."""
    parts = [str(tree.root.path)]
    if vcs is not None and vcs.is_inside_repo():
        display = vcs.get_display_info()
        label = vcs.vcs_type.label
        parts.append(f"{label}: {display}" if display else label)
    parts.append(f"{len(tree)} items")
    text = " | ".join(parts)
    if not color:
        return text
    active_theme = theme or DEFAULT_THEME
    return f"{active_theme.status_bar} {text} {active_theme.reset}"


def format_preview(
    preview: FilePreview,
    theme: StatusTheme | None = None,
    color: bool = True,
    style: str = DEFAULT_STYLE,
) -> list[str]:
    """Render preview lines with a line-number column and a change gutter."""
    active_theme = theme or DEFAULT_THEME
    if preview.is_binary:
        return ["(binary file)"]

    display_lines = colorize_lines(preview.lines, preview.path, style) if color else preview.lines
    markers = preview.marker_by_line
    width = len(str(len(preview.lines)))
    out: list[str] = []
    for line_no, text in enumerate(display_lines, start=1):
        marker = markers.get(line_no)
        mark = GUTTER_MARKS[marker.kind] if marker is not None else " "
        number = str(line_no).rjust(width)
        if color:
            reset = active_theme.reset
            gutter = f"{active_theme.color_for_diff(marker.kind)}{mark}{reset}" if marker is not None else " "
            out.append(f"{active_theme.line_number}{number}{reset} {gutter} {text}{reset}")
        else:
            out.append(f"{number} {mark} {text}")
    if preview.truncated:
        out.append("(preview truncated)")
    return out


__all__ = [
    "STATUS_BADGES",
    "GUTTER_MARKS",
    "node_status",
    "format_tree_row",
    "format_tree",
    "format_status_bar",
    "format_preview",
]
