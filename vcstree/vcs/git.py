"""Git backend: porcelain status parsing, branch display, and file diffs.

Every command runs as ``git -C <root> ...`` so results do not depend on the
process working directory.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from .base import StatusIndexRepo, run_vcs_command
from .types import VCSStatus, VCSType

_OCTAL_ESCAPE_RE = re.compile(r"\\([0-7]{3}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "a": b"\a",
    "b": b"\b",
    "t": b"\t",
    "n": b"\n",
    "v": b"\v",
    "f": b"\f",
    "r": b"\r",
    '"': b'"',
    "\\": b"\\",
}


def parse_git_status(index: str, worktree: str) -> VCSStatus:
    """Map a porcelain XY status pair onto the shared status vocabulary."""
    if index == "?" and worktree == "?":
        return VCSStatus.UNTRACKED
    if index == "!" and worktree == "!":
        return VCSStatus.IGNORED
    if (
        index == "U"
        or worktree == "U"
        or (index == "A" and worktree == "A")
        or (index == "D" and worktree == "D")
    ):
        return VCSStatus.CONFLICT
    if index == "R":
        return VCSStatus.RENAMED
    if index == "A":
        return VCSStatus.ADDED
    if index == "D" or worktree == "D":
        return VCSStatus.DELETED
    if index == "M" or worktree == "M":
        return VCSStatus.MODIFIED
    return VCSStatus.NONE


def unquote_git_path(path_text: str) -> str:
    """Decode a C-style quoted porcelain path (``"caf\\303\\251.txt"``)."""
    if len(path_text) < 2 or not (path_text.startswith('"') and path_text.endswith('"')):
        return path_text

    body = path_text[1:-1]
    out = bytearray()
    pos = 0
    for match in _OCTAL_ESCAPE_RE.finditer(body):
        out.extend(body[pos:match.start()].encode("utf-8"))
        token = match.group(1)
        if len(token) == 3:
            out.append(int(token, 8) & 0xFF)
        else:
            out.extend(_SIMPLE_ESCAPES.get(token, token.encode("utf-8")))
        pos = match.end()
    out.extend(body[pos:].encode("utf-8"))
    return out.decode("utf-8", errors="replace")


def parse_porcelain_line(line: str) -> tuple[VCSStatus, str] | None:
    """Parse one ``git status --porcelain`` line into ``(status, rel_path)``.

    Rename and copy records carry ``old -> new``; only the new path is kept.
    Other records take the rest of the line verbatim, arrows included.
    """
    if len(line) < 4 or line[2] != " ":
        return None
    path_text = line[3:]
    if line[0] in "RC" and " -> " in path_text:
        parts = path_text.split(" -> ")
        if len(parts) == 2:
            path_text = parts[1]
    path_text = unquote_git_path(path_text)
    if not path_text:
        return None
    return parse_git_status(line[0], line[1]), path_text


class GitRepo(StatusIndexRepo):
    """Status index, branch and ahead-count for a git working tree."""

    vcs_type = VCSType.GIT

    def __init__(self, path: Path | str | None = None) -> None:
        self.branch = ""
        self.ahead = 0
        super().__init__(path)

    def _reset(self) -> None:
        super()._reset()
        self.branch = ""
        self.ahead = 0

    def _run(self, args: Sequence[str]) -> str | None:
        assert self.root is not None
        return run_vcs_command(["git", "-C", str(self.root), *args])

    def _diff_args(self, rel_path: str) -> list[str]:
        return ["diff", "--no-color", "-U0", "--", rel_path]

    def _load(self, path: Path) -> None:
        root = find_git_root(path)
        if root is None:
            return
        self.root = root
        self._load_statuses()
        self.branch = get_current_branch(root)
        self.ahead = get_ahead_count(root)

    def _load_statuses(self) -> None:
        output = self._run(["status", "--porcelain", "-uall"])
        if output is not None:
            for line in output.split("\n"):
                parsed = parse_porcelain_line(line)
                if parsed is None:
                    continue
                status, rel_path = parsed
                self._record(rel_path, status)

        output = self._run(["status", "--porcelain", "--ignored", "-uall"])
        if output is not None:
            for line in output.split("\n"):
                if not line.startswith("!! "):
                    continue
                rel_path = unquote_git_path(line[3:])
                if rel_path:
                    self._record(rel_path, VCSStatus.IGNORED)

    def get_display_info(self) -> str:
        if self.ahead > 0:
            return f"{self.branch} ↑{self.ahead}"
        return self.branch


def find_git_root(path: Path | str) -> Path | None:
    """Return the top-level directory of the repository containing ``path``."""
    output = run_vcs_command(["git", "-C", str(path), "rev-parse", "--show-toplevel"])
    if output is None:
        return None
    top_level = output.strip()
    if not top_level:
        return None
    return Path(top_level).resolve()


def get_current_branch(root: Path | str) -> str:
    output = run_vcs_command(["git", "-C", str(root), "rev-parse", "--abbrev-ref", "HEAD"])
    return output.strip() if output is not None else ""


def get_ahead_count(root: Path | str) -> int:
    """Commits on HEAD not yet on its upstream; 0 without an upstream."""
    output = run_vcs_command(["git", "-C", str(root), "rev-list", "--count", "@{upstream}..HEAD"])
    if output is None:
        return 0
    try:
        return int(output.strip())
    except ValueError:
        return 0


__all__ = [
    "GitRepo",
    "parse_git_status",
    "parse_porcelain_line",
    "unquote_git_path",
    "find_git_root",
    "get_current_branch",
    "get_ahead_count",
]
