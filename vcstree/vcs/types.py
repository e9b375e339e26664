"""Shared VCS vocabulary: file statuses, backend kinds, and diff markers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class VCSStatus(str, Enum):
    """Normalized status of one path, independent of the backend tool."""

    NONE = "none"
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    UNTRACKED = "untracked"
    IGNORED = "ignored"
    CONFLICT = "conflict"


# Statuses that make an ancestor directory show as modified.
CHANGED_STATUSES = frozenset(
    {
        VCSStatus.MODIFIED,
        VCSStatus.ADDED,
        VCSStatus.DELETED,
        VCSStatus.RENAMED,
        VCSStatus.CONFLICT,
    }
)


class VCSType(str, Enum):
    """Backend selection; ``AUTO`` probes the working directory."""

    AUTO = "auto"
    GIT = "git"
    JJ = "jj"

    @property
    def label(self) -> str:
        if self is VCSType.GIT:
            return "Git"
        if self is VCSType.JJ:
            return "JJ"
        return "Auto"

    @classmethod
    def from_name(cls, name: str | None) -> "VCSType":
        """Parse a config/CLI value, falling back to ``AUTO`` for unknown names."""
        if not name:
            return cls.AUTO
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.AUTO


class DiffLineType(str, Enum):
    """Kind of change recorded for one line of the working-copy file."""

    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"


@dataclass(frozen=True)
class DiffMarker:
    """Change marker for a 1-based line number in the current file."""

    line: int
    kind: DiffLineType


__all__ = [
    "VCSStatus",
    "CHANGED_STATUSES",
    "VCSType",
    "DiffLineType",
    "DiffMarker",
]
