"""Classify zero-context unified diffs into per-line change markers.

``classify_diff`` turns ``git diff -U0`` style output into at most one
``DiffMarker`` per line of the working-copy file. A deleted old line followed
by an added new line is a replacement (``modified``); a hunk that only
removes lines yields a single ``deleted`` marker on the first line after the
gap, because removed lines have no position in the new file.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .types import DiffLineType, DiffMarker

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def _append_marker(markers: list[DiffMarker], marker: DiffMarker) -> None:
    """Append while keeping lines strictly ascending and unique."""
    if markers:
        last = markers[-1]
        if marker.line < last.line:
            return
        if marker.line == last.line:
            # A gap marker yields to a concrete change on the same line.
            if last.kind is DiffLineType.DELETED and marker.kind is not DiffLineType.DELETED:
                markers[-1] = marker
            return
    markers.append(marker)


def classify_diff(diff_text: str) -> list[DiffMarker]:
    """Return change markers for the new side of a zero-context unified diff.

    Text outside hunks (``diff --git``, ``index``, ``---``/``+++`` headers) is
    ignored. Malformed input never raises; it just yields fewer markers.
    """
    markers: list[DiffMarker] = []
    in_hunk = False
    current_new_line = 0
    pending_deletions = 0
    hunk_has_additions = False
    old_remaining = 0
    new_remaining = 0

    def flush_pure_deletion() -> None:
        if pending_deletions > 0 and not hunk_has_additions and current_new_line > 0:
            _append_marker(markers, DiffMarker(current_new_line, DiffLineType.DELETED))

    for raw_line in diff_text.split("\n"):
        match = _HUNK_RE.match(raw_line)
        if match:
            flush_pure_deletion()
            new_start = int(match.group(3))
            new_count = int(match.group(4) or "1")
            old_remaining = int(match.group(2) or "1")
            new_remaining = new_count
            # "+N,0" means the removed block sits after line N of the new file.
            current_new_line = new_start + 1 if new_count == 0 else new_start
            pending_deletions = 0
            hunk_has_additions = False
            in_hunk = True
            continue

        if not in_hunk or not raw_line:
            continue
        if raw_line.startswith("diff "):
            in_hunk = False
            continue

        hunk_exhausted = old_remaining <= 0 and new_remaining <= 0
        prefix = raw_line[0]
        if prefix == "+":
            if hunk_exhausted and raw_line.startswith("+++"):
                continue
            hunk_has_additions = True
            if pending_deletions > 0:
                _append_marker(markers, DiffMarker(current_new_line, DiffLineType.MODIFIED))
                pending_deletions -= 1
            else:
                _append_marker(markers, DiffMarker(current_new_line, DiffLineType.ADDED))
            current_new_line += 1
            new_remaining -= 1
        elif prefix == "-":
            if hunk_exhausted and raw_line.startswith("---"):
                continue
            pending_deletions += 1
            old_remaining -= 1
        elif prefix == " ":
            # Context is not requested, but tolerate it.
            pending_deletions = 0
            hunk_has_additions = False
            current_new_line += 1
            old_remaining -= 1
            new_remaining -= 1

    flush_pure_deletion()
    return markers


def clamp_diff_markers(markers: Iterable[DiffMarker], line_count: int) -> list[DiffMarker]:
    """Clamp markers past the end of displayed content onto the last line.

    End-of-file deletions point one past the final line; previews show them on
    the last line instead of dropping them. Empty content leaves markers as-is.
    """
    marker_list = list(markers)
    if line_count <= 0:
        return marker_list

    clamped: list[DiffMarker] = []
    for marker in marker_list:
        if marker.line > line_count:
            marker = DiffMarker(line_count, marker.kind)
        _append_marker(clamped, marker)
    return clamped


def diff_marker_map(markers: Iterable[DiffMarker]) -> dict[int, DiffMarker]:
    """Index markers by line number for per-row preview lookup."""
    return {marker.line: marker for marker in markers}


__all__ = [
    "classify_diff",
    "clamp_diff_markers",
    "diff_marker_map",
]
