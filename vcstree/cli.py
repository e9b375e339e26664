"""Command-line front door for vcstree.

Prints a directory tree annotated with VCS status (ghost rows for deleted
files), or a single file preview with a per-line change gutter.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .file_tree import TreeNotFoundError
from .highlight import DEFAULT_STYLE
from .preview import load_preview
from .reconcile import open_workspace
from .rendering import format_preview, format_status_bar, format_tree
from .ui_theme import available_theme_names, resolve_theme
from .vcs import VCSType, open_vcs_repo


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show a directory tree annotated with git/jj status and per-line diff markers."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to show. Defaults to current directory.")
    parser.add_argument("-a", "--hidden", action="store_true", default=None, help="Include dot-prefixed entries.")
    parser.add_argument(
        "--vcs",
        choices=[vcs_type.value for vcs_type in VCSType],
        default=None,
        help="Version-control backend (default: auto-detect).",
    )
    parser.add_argument("--expand-all", action="store_true", help="Expand every directory before printing.")
    parser.add_argument("--preview", metavar="FILE", help="Print FILE with change markers and exit.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for previews.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Status theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--save-defaults", action="store_true", help="Persist --hidden/--vcs/--theme as defaults.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log VCS and filesystem diagnostics to stderr.")
    return parser


def render_preview(path: Path, vcs_type: VCSType, style: str, theme_name: str | None, color: bool) -> str:
    """Render one file preview with its diff gutter as printable text."""
    target = path.resolve()
    vcs = open_vcs_repo(target.parent, vcs_type)
    preview = load_preview(target, vcs)
    lines = format_preview(preview, resolve_theme(theme_name), color=color, style=style)
    return "".join(f"{line}\n" for line in lines)


def render_tree(
    path: Path,
    show_hidden: bool,
    vcs_type: VCSType,
    expand_all: bool,
    theme_name: str | None,
    color: bool,
) -> str:
    """Render the status bar and every visible tree row as printable text."""
    workspace = open_workspace(path, show_hidden, vcs_type)
    if expand_all:
        workspace.tree.expand_all()
        workspace.tree.add_ghost_nodes(workspace.vcs.get_deleted_files())
    theme = resolve_theme(theme_name)
    lines = [format_status_bar(workspace.tree, workspace.vcs, theme, color)]
    lines.extend(format_tree(workspace.tree, workspace.vcs, theme, color))
    return "".join(f"{line}\n" for line in lines)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the annotated tree or a file preview.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. Flags left unset fall back to persisted config.
    """
    args = _build_parser().parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)

    show_hidden = config.load_show_hidden() if args.hidden is None else True
    vcs_type = config.load_vcs_type() if args.vcs is None else VCSType(args.vcs)
    theme_name = args.theme if args.theme is not None else config.load_theme_name()
    color = not args.no_color and sys.stdout.isatty()

    if args.save_defaults:
        config.save_show_hidden(show_hidden)
        config.save_vcs_type(vcs_type)
        if theme_name:
            config.save_theme_name(theme_name)

    if args.preview is not None:
        if args.path is not None:
            raise SystemExit("Cannot combine positional path with --preview.")
        preview_path = Path(args.preview)
        if not preview_path.is_file():
            raise SystemExit(f"File not found: {preview_path}")
        sys.stdout.write(render_preview(preview_path, vcs_type, args.style, theme_name, color))
        return

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    try:
        output = render_tree(path, show_hidden, vcs_type, args.expand_all, theme_name, color)
    except TreeNotFoundError as exc:
        raise SystemExit(str(exc)) from exc
    sys.stdout.write(output)


if __name__ == "__main__":
    main()
