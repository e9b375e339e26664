"""Lazily loaded directory tree with an index-addressable flat view.

``FileTree.nodes`` is the pre-order list of visible nodes (children appear
only under expanded directories). It is rebuilt wholesale after every
structural change so indices handed out to the UI always match the tree.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .fs import TreeNotFoundError, load_children, stat_node
from .types import Node, child_sort_key

logger = logging.getLogger(__name__)


def _load_root(root_path: Path, show_hidden: bool) -> Node:
    root = stat_node(root_path, 0)
    if root is None:
        raise TreeNotFoundError(root_path)
    root.expanded = True
    try:
        load_children(root, show_hidden)
    except FileNotFoundError as exc:
        raise TreeNotFoundError(root_path) from exc
    return root


class FileTree:
    """Owns the root node and the flattened list of visible nodes."""

    def __init__(self, root: Node, show_hidden: bool = False) -> None:
        self.root = root
        self.show_hidden = show_hidden
        self.nodes: list[Node] = []
        self.rebuild_flat_list()

    @classmethod
    def build(cls, root_path: Path | str, show_hidden: bool = False) -> "FileTree":
        """Create a tree rooted at ``root_path`` with its first level loaded.

        Raises ``TreeNotFoundError`` when the path does not exist.
        """
        resolved = Path(root_path).expanduser().resolve()
        return cls(_load_root(resolved, show_hidden), show_hidden)

    def __len__(self) -> int:
        return len(self.nodes)

    def node_at(self, index: int) -> Node | None:
        if index < 0 or index >= len(self.nodes):
            return None
        return self.nodes[index]

    def rebuild_flat_list(self) -> None:
        nodes: list[Node] = []

        def walk(node: Node) -> None:
            nodes.append(node)
            if node.expanded:
                for child in node.children:
                    walk(child)

        walk(self.root)
        self.nodes = nodes

    def _expand_node(self, node: Node) -> None:
        node.expanded = True
        if not node.children:
            try:
                load_children(node, self.show_hidden)
            except OSError:
                node.expanded = False
                raise

    def expand(self, index: int) -> None:
        """Expand the directory at ``index``; no-op for files or open dirs."""
        node = self.node_at(index)
        if node is None or not node.is_dir or node.expanded:
            return
        self._expand_node(node)
        self.rebuild_flat_list()

    def collapse(self, index: int) -> None:
        """Collapse the directory at ``index``; no-op for files or closed dirs."""
        node = self.node_at(index)
        if node is None or not node.is_dir or not node.expanded:
            return
        node.expanded = False
        self.rebuild_flat_list()

    def toggle_expand(self, index: int) -> None:
        node = self.node_at(index)
        if node is None or not node.is_dir:
            return
        if node.expanded:
            self.collapse(index)
        else:
            self.expand(index)

    def expand_all(self) -> None:
        """Expand every directory, loading children as needed.

        A symlinked directory whose target was already expanded is left
        collapsed so link cycles terminate.
        """
        seen: set[str] = set()

        def walk(node: Node) -> None:
            if not node.is_dir:
                return
            real_path = os.path.realpath(node.path)
            if real_path in seen:
                return
            seen.add(real_path)
            self._expand_node(node)
            for child in node.children:
                walk(child)

        try:
            walk(self.root)
        finally:
            self.rebuild_flat_list()

    def collapse_all(self) -> None:
        """Collapse every directory; the root stays expanded."""

        def walk(node: Node) -> None:
            node.expanded = False
            for child in node.children:
                walk(child)

        walk(self.root)
        self.root.expanded = True
        self.rebuild_flat_list()

    def find_parent_index(self, index: int) -> int:
        """Flat-list index of the node's parent directory, or -1 if not visible."""
        node = self.node_at(index)
        if node is None:
            return -1
        parent_path = node.path.parent
        for idx, candidate in enumerate(self.nodes):
            if candidate.path == parent_path:
                return idx
        return -1

    def refresh(self) -> None:
        """Reload the whole tree from disk, discarding expansion state.

        Only the root path and ``show_hidden`` survive. On
        ``TreeNotFoundError`` the previous tree is left untouched.
        """
        self.root = _load_root(self.root.path, self.show_hidden)
        self.rebuild_flat_list()

    def set_show_hidden(self, show_hidden: bool) -> None:
        self.show_hidden = show_hidden
        self.refresh()

    def find_node(self, path: Path | str) -> Node | None:
        """Find a loaded node by absolute path (collapsed subtrees included)."""
        target = Path(path)

        def walk(node: Node) -> Node | None:
            if node.path == target:
                return node
            for child in node.children:
                if child.is_dir and not target.is_relative_to(child.path):
                    continue
                found = walk(child)
                if found is not None:
                    return found
            return None

        return walk(self.root)

    def add_ghost_nodes(self, deleted_paths: Iterable[Path | str]) -> None:
        """Insert ghost entries for VCS-deleted files under open directories.

        Paths whose parent is not loaded or not expanded are skipped, as are
        names the parent already lists, so repeated calls are idempotent.
        """
        inserted = 0
        for raw_path in deleted_paths:
            if self._add_ghost_node(Path(raw_path)):
                inserted += 1
        if inserted:
            logger.debug("inserted %d ghost node(s)", inserted)
            self.rebuild_flat_list()

    def _add_ghost_node(self, deleted_path: Path) -> bool:
        parent = self.find_node(deleted_path.parent)
        if parent is None or not parent.is_dir or not parent.expanded:
            return False
        name = deleted_path.name
        if any(child.name == name for child in parent.children):
            return False
        parent.children.append(Node.ghost(parent.path / name, parent.depth + 1))
        parent.children.sort(key=child_sort_key)
        return True


__all__ = [
    "FileTree",
]
