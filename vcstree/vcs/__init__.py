"""Version-control status for the tree view.

Two backends (git and jj) normalize their tool output into one
``VCSStatus`` vocabulary behind the ``VCSRepo`` capability interface.
Zero-context diffs from either backend are classified into per-line
``DiffMarker`` values by ``classify_diff``.
"""

from __future__ import annotations

from .base import StatusIndexRepo, VCSRepo, normalize_path, propagate_status_to_parent, run_vcs_command
from .detect import has_jj_command, has_jj_repo, open_vcs_repo, select_vcs_type
from .diff import clamp_diff_markers, classify_diff, diff_marker_map
from .git import GitRepo, parse_git_status
from .jj import JJRepo, parse_jj_status
from .types import CHANGED_STATUSES, DiffLineType, DiffMarker, VCSStatus, VCSType

__all__ = [
    "VCSStatus",
    "VCSType",
    "CHANGED_STATUSES",
    "DiffLineType",
    "DiffMarker",
    "VCSRepo",
    "StatusIndexRepo",
    "GitRepo",
    "JJRepo",
    "normalize_path",
    "propagate_status_to_parent",
    "run_vcs_command",
    "parse_git_status",
    "parse_jj_status",
    "classify_diff",
    "clamp_diff_markers",
    "diff_marker_map",
    "has_jj_repo",
    "has_jj_command",
    "select_vcs_type",
    "open_vcs_repo",
]
