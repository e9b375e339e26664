"""Filesystem reads for the file-tree model."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from .types import Node, child_sort_key

logger = logging.getLogger(__name__)


class TreeNotFoundError(FileNotFoundError):
    """The tree root (or refresh target) no longer exists."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Path not found: {path}")
        self.path = Path(path)


def stat_node(path: Path, depth: int) -> Node | None:
    """Build a node for ``path``, or ``None`` when it cannot be stat'ed."""
    try:
        st = path.stat()
    except OSError:
        return None
    return Node(path=path, name=path.name or str(path), is_dir=stat.S_ISDIR(st.st_mode), depth=depth)


def load_children(node: Node, show_hidden: bool) -> None:
    """Replace ``node.children`` with its sorted, visible directory entries.

    Dot-prefixed names are skipped unless ``show_hidden``. Entries that fail
    to stat (deleted mid-scan, dangling symlinks) are skipped individually.
    Raises ``OSError`` when the directory itself cannot be read.
    """
    if not node.is_dir:
        return

    node.children = []
    children: list[Node] = []
    with os.scandir(node.path) as entries:
        for entry in entries:
            name = entry.name
            if not show_hidden and name.startswith("."):
                continue
            try:
                # Follow symlinks so linked directories expand like directories.
                entry.stat()
                is_dir = entry.is_dir()
            except OSError as exc:
                logger.debug("skipping unreadable entry %s: %s", entry.path, exc)
                continue
            children.append(Node(path=node.path / name, name=name, is_dir=is_dir, depth=node.depth + 1))

    children.sort(key=child_sort_key)
    node.children = children


__all__ = [
    "TreeNotFoundError",
    "stat_node",
    "load_children",
]
