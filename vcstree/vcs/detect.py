"""Backend probing and construction.

Backend choice is a pure function of the filesystem and the tools on
``PATH``: a ``.jj`` workspace with ``jj`` installed wins over git, since jj
repositories usually carry a colocated ``.git`` as well.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from .base import VCSRepo
from .git import GitRepo
from .jj import JJRepo, find_jj_workspace
from .types import VCSType


def has_jj_repo(path: Path | str) -> bool:
    """Return whether ``path`` or any ancestor holds a ``.jj`` directory."""
    return find_jj_workspace(path) is not None


def has_jj_command() -> bool:
    return shutil.which("jj") is not None


def select_vcs_type(path: Path | str, requested: VCSType = VCSType.AUTO) -> VCSType:
    """Resolve the backend kind to use for ``path``.

    ``JJ`` and ``AUTO`` use jj only when the marker and the tool are both
    present; everything else falls back to git.
    """
    if requested is VCSType.GIT:
        return VCSType.GIT
    if has_jj_repo(path) and has_jj_command():
        return VCSType.JJ
    return VCSType.GIT


def open_vcs_repo(path: Path | str, vcs_type: VCSType = VCSType.AUTO) -> VCSRepo:
    """Build and load the backend selected for ``path``.

    The result may be outside any repository; callers check
    ``is_inside_repo()`` rather than handling errors.
    """
    if select_vcs_type(path, vcs_type) is VCSType.JJ:
        return JJRepo(path)
    return GitRepo(path)


__all__ = [
    "has_jj_repo",
    "has_jj_command",
    "select_vcs_type",
    "open_vcs_repo",
]
