"""File preview content annotated with working-copy diff markers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .highlight import decode_source, sanitize_terminal_text
from .vcs import DiffMarker, VCSRepo, clamp_diff_markers, diff_marker_map

PREVIEW_MAX_BYTES = 512 * 1024
_BINARY_SNIFF_BYTES = 8192


@dataclass(frozen=True)
class FilePreview:
    """Display lines for one file plus per-line change markers."""

    path: Path
    lines: list[str]
    markers: list[DiffMarker] = field(default_factory=list)
    truncated: bool = False
    is_binary: bool = False

    @property
    def marker_by_line(self) -> dict[int, DiffMarker]:
        return diff_marker_map(self.markers)


def load_preview(path: Path, vcs: VCSRepo | None = None, max_bytes: int = PREVIEW_MAX_BYTES) -> FilePreview:
    """Read ``path`` for display and attach clamped diff markers.

    At most ``max_bytes`` are read and decoded in one pass; the binary check
    looks at the head of the same buffer. Markers past the end of the
    displayed content (end-of-file deletions or truncated previews) are
    clamped onto the last displayed line.
    """
    with path.open("rb") as handle:
        data = handle.read(max_bytes + 1)
    if b"\0" in data[:_BINARY_SNIFF_BYTES]:
        return FilePreview(path=path, lines=[], is_binary=True)

    truncated = len(data) > max_bytes
    source = sanitize_terminal_text(decode_source(data[:max_bytes]))
    lines = source.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()

    markers: list[DiffMarker] = []
    if vcs is not None and vcs.is_inside_repo():
        markers = clamp_diff_markers(vcs.get_file_diff(path), len(lines))
    return FilePreview(path=path, lines=lines, markers=markers, truncated=truncated)


__all__ = [
    "PREVIEW_MAX_BYTES",
    "FilePreview",
    "load_preview",
]
