"""Tree node datatype shared by the file-tree model."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(eq=False)
class Node:
    """One filesystem entry, or a ghost for a VCS-deleted file.

    Children are owned exclusively by their parent and stay empty until the
    directory is first expanded. Ghost nodes are never directories.
    """

    path: Path
    name: str
    is_dir: bool
    depth: int
    expanded: bool = False
    children: list["Node"] = field(default_factory=list)
    is_ghost: bool = False

    @classmethod
    def ghost(cls, path: Path, depth: int) -> "Node":
        return cls(path=path, name=path.name, is_dir=False, depth=depth, is_ghost=True)


def child_sort_key(node: Node) -> tuple[bool, str]:
    """Directories first, then case-sensitive name order (ghosts included)."""
    return (not node.is_dir, node.name)


__all__ = [
    "Node",
    "child_sort_key",
]
