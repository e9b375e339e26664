"""Backend-independent VCS status plumbing.

Defines the ``VCSRepo`` capability protocol, the shared status-index base
used by both backends, path canonicalization, directory status propagation,
and the tolerant subprocess runner every backend query goes through.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .diff import classify_diff
from .types import CHANGED_STATUSES, DiffMarker, VCSStatus, VCSType

logger = logging.getLogger(__name__)

StatusIndex = dict[Path, VCSStatus]


def normalize_path(path: Path | str) -> Path:
    """Return an absolute, symlink-resolved path for status-index lookups.

    Components that do not exist (deleted files) are kept verbatim after the
    deepest resolvable ancestor.
    """
    try:
        return Path(path).resolve()
    except (OSError, RuntimeError):
        return Path(os.path.abspath(path))


def propagate_status_to_parent(statuses: StatusIndex, directory: Path) -> VCSStatus:
    """Derive a directory status from every indexed path beneath it.

    Any changed descendant makes the directory ``MODIFIED``; otherwise any
    untracked descendant makes it ``UNTRACKED``; otherwise ``NONE``.
    """
    prefix = str(directory).rstrip(os.sep) + os.sep
    has_untracked = False
    for file_path, status in statuses.items():
        if not str(file_path).startswith(prefix):
            continue
        if status in CHANGED_STATUSES:
            return VCSStatus.MODIFIED
        if status is VCSStatus.UNTRACKED:
            has_untracked = True
    return VCSStatus.UNTRACKED if has_untracked else VCSStatus.NONE


def run_vcs_command(args: Sequence[str], cwd: Path | str | None = None) -> str | None:
    """Run one VCS subprocess and return stdout, or ``None`` on any failure.

    Missing tools, non-zero exits, and OS errors all mean "no information".
    ``cwd`` pins the working directory for tools that resolve path arguments
    and print paths relative to it. Output is decoded as UTF-8 with
    replacement and newlines are left untranslated, so a lone ``\\r`` inside
    a diff line stays part of that line. No timeout is applied.
    """
    try:
        proc = subprocess.run(
            list(args),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            cwd=cwd,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("VCS command %s failed to start: %s", args[0] if args else "?", exc)
        return None
    if proc.returncode != 0:
        logger.debug("VCS command %s exited with %d", " ".join(args), proc.returncode)
        return None
    return proc.stdout.decode("utf-8", errors="replace")


class VCSRepo(Protocol):
    """Capability interface implemented once per version-control backend."""

    vcs_type: VCSType

    def is_inside_repo(self) -> bool:
        ...

    def get_status(self, path: Path | str) -> VCSStatus:
        ...

    def get_display_info(self) -> str:
        ...

    def get_root(self) -> Path | None:
        ...

    def refresh(self, path: Path | str) -> None:
        ...

    def get_deleted_files(self) -> list[Path]:
        ...

    def get_file_diff(self, path: Path | str) -> list[DiffMarker]:
        ...


class StatusIndexRepo:
    """Shared state and queries for backends built on a path->status index.

    Subclasses implement ``_load`` (populate ``root``/``statuses`` and any
    display identity), ``get_display_info``, ``_run`` and ``_diff_args``.
    """

    vcs_type = VCSType.AUTO

    def __init__(self, path: Path | str | None = None) -> None:
        self.root: Path | None = None
        self.statuses: StatusIndex = {}
        if path is not None:
            self.refresh(path)

    def _reset(self) -> None:
        self.root = None
        self.statuses = {}

    def _load(self, path: Path) -> None:
        raise NotImplementedError

    def _run(self, args: Sequence[str]) -> str | None:
        raise NotImplementedError

    def _diff_args(self, rel_path: str) -> list[str]:
        raise NotImplementedError

    def refresh(self, path: Path | str) -> None:
        """Re-derive root, status index and display identity from scratch."""
        self._reset()
        self._load(normalize_path(path))
        if self.root is None:
            logger.debug("%s: %s is not inside a repository", self.vcs_type.label, path)

    def is_inside_repo(self) -> bool:
        return self.root is not None

    def get_root(self) -> Path | None:
        return self.root

    def get_status(self, path: Path | str) -> VCSStatus:
        """Exact index match first, else status propagated from descendants."""
        if not self.statuses:
            return VCSStatus.NONE
        normalized = normalize_path(path)
        status = self.statuses.get(normalized)
        if status is not None:
            return status
        return propagate_status_to_parent(self.statuses, normalized)

    def get_deleted_files(self) -> list[Path]:
        return [file_path for file_path, status in self.statuses.items() if status is VCSStatus.DELETED]

    def get_display_info(self) -> str:
        raise NotImplementedError

    def get_file_diff(self, path: Path | str) -> list[DiffMarker]:
        """Classify the zero-context working-copy diff of one file."""
        if self.root is None:
            return []
        target = normalize_path(path)
        try:
            rel_path = target.relative_to(self.root)
        except ValueError:
            return []
        output = self._run(self._diff_args(rel_path.as_posix()))
        if not output:
            return []
        return classify_diff(output)

    def _record(self, rel_path: str, status: VCSStatus) -> None:
        assert self.root is not None
        self.statuses[normalize_path(self.root / rel_path)] = status


__all__ = [
    "StatusIndex",
    "VCSRepo",
    "StatusIndexRepo",
    "normalize_path",
    "propagate_status_to_parent",
    "run_vcs_command",
]
