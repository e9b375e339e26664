"""Jujutsu backend: working-copy change parsing, change id, and file diffs.

``jj status`` is human-oriented text; only the ``Working copy changes:``
section is read, one ``<char> <path>`` record per line. Every command runs as
``jj -R <root> ...``.
"""

from __future__ import annotations

import os
import re
from collections.abc import Sequence
from pathlib import Path

from .base import StatusIndexRepo, run_vcs_command
from .types import VCSStatus, VCSType

_CHANGES_HEADER = "Working copy changes:"
_SECTION_END_PREFIXES = ("Working copy ", "Working copy:", "Parent commit")
_BRACE_RENAME_RE = re.compile(r"^(?P<head>.*)\{(?P<old>.*) => (?P<new>.*)\}(?P<tail>.*)$")


def parse_jj_status(code: str) -> VCSStatus:
    """Map a one-character ``jj status`` code onto the shared vocabulary."""
    if code == "M":
        return VCSStatus.MODIFIED
    if code == "A":
        return VCSStatus.ADDED
    if code == "D":
        return VCSStatus.DELETED
    if code == "R":
        return VCSStatus.RENAMED
    if code == "C":
        return VCSStatus.CONFLICT
    return VCSStatus.NONE


def rename_target(path_text: str) -> str:
    """Return the new path of a ``dir/{old => new}`` rename record."""
    match = _BRACE_RENAME_RE.match(path_text)
    if match is not None:
        return match.group("head") + match.group("new") + match.group("tail")
    if " => " in path_text:
        return path_text.split(" => ", 1)[1]
    return path_text


def parse_jj_status_output(output: str) -> list[tuple[VCSStatus, str]]:
    """Extract ``(status, rel_path)`` records from ``jj status`` text."""
    records: list[tuple[VCSStatus, str]] = []
    in_changes = False
    for raw_line in output.split("\n"):
        if raw_line.startswith(_CHANGES_HEADER):
            in_changes = True
            continue
        if raw_line.startswith(_SECTION_END_PREFIXES):
            in_changes = False
            continue
        if not in_changes:
            continue

        line = raw_line.strip()
        if len(line) < 2:
            continue
        status = parse_jj_status(line[0])
        path_text = line[1:].strip()
        if status is VCSStatus.NONE or not path_text:
            continue
        if status is VCSStatus.RENAMED:
            path_text = rename_target(path_text)
        records.append((status, path_text))
    return records


def clean_bookmark(raw: str) -> str:
    """Strip decoration and keep the first of several bookmark names."""
    bookmark = raw.strip()
    bookmark = bookmark.removesuffix("*").strip()
    parts = bookmark.split()
    if not parts:
        return ""
    return parts[0].removesuffix("*")


class JJRepo(StatusIndexRepo):
    """Status index plus change id and bookmark for a jj working copy."""

    vcs_type = VCSType.JJ

    def __init__(self, path: Path | str | None = None) -> None:
        self.change_id = ""
        self.bookmark = ""
        super().__init__(path)

    def _reset(self) -> None:
        super()._reset()
        self.change_id = ""
        self.bookmark = ""

    def _run(self, args: Sequence[str]) -> str | None:
        assert self.root is not None
        # jj resolves path arguments and prints status paths relative to the
        # working directory, not to -R.
        return run_vcs_command(["jj", "-R", str(self.root), *args], cwd=self.root)

    def _diff_args(self, rel_path: str) -> list[str]:
        return ["diff", "--git", "--context", "0", "--", rel_path]

    def _load(self, path: Path) -> None:
        root = find_jj_root(path)
        if root is None:
            return
        self.root = root
        self._load_statuses()
        self._load_working_copy_info()

    def _load_statuses(self) -> None:
        output = self._run(["status"])
        if output is None:
            return
        for status, rel_path in parse_jj_status_output(output):
            self._record(rel_path, status)

    def _load_working_copy_info(self) -> None:
        output = self._run(["log", "-r", "@", "--no-graph", "-T", "change_id.short(8)"])
        if output is not None:
            self.change_id = output.strip()

        output = self._run(["log", "-r", "@", "--no-graph", "-T", "bookmarks"])
        if output is not None:
            self.bookmark = clean_bookmark(output)

    def get_display_info(self) -> str:
        if not self.change_id:
            return ""
        if self.bookmark:
            return f"@{self.change_id} ({self.bookmark})"
        return f"@{self.change_id}"


def find_jj_workspace(path: Path | str) -> Path | None:
    """Return the nearest directory at or above ``path`` holding a ``.jj`` dir."""
    current = Path(os.path.abspath(path))
    while True:
        if (current / ".jj").is_dir():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def find_jj_root(path: Path | str) -> Path | None:
    """Return the workspace root of the jj repository containing ``path``."""
    # -R expects the workspace directory itself, not a subdirectory.
    workspace = find_jj_workspace(path) or Path(path)
    output = run_vcs_command(["jj", "-R", str(workspace), "root"], cwd=workspace)
    if output is None:
        return None
    root = output.strip()
    if not root:
        return None
    return Path(root).resolve()


__all__ = [
    "JJRepo",
    "parse_jj_status",
    "parse_jj_status_output",
    "rename_target",
    "clean_bookmark",
    "find_jj_workspace",
    "find_jj_root",
]
