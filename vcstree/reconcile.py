"""Keep the tree, VCS status, and ghost entries consistent after changes.

After any mutation (file operation, watcher notification, manual refresh)
the owner calls ``refresh_tree_and_vcs``: the tree is rebuilt from disk, the
backend re-derives its status index, and deleted files are re-inserted as
ghosts. Callers must serialize these calls; nothing here is re-entrant.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .file_tree import FileTree
from .vcs import VCSRepo, VCSType, open_vcs_repo

logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    """A tree paired with the VCS backend selected for its root."""

    tree: FileTree
    vcs: VCSRepo

    def refresh(self) -> None:
        refresh_tree_and_vcs(self.tree, self.vcs)


def open_workspace(
    path: Path | str,
    show_hidden: bool = False,
    vcs_type: VCSType = VCSType.AUTO,
) -> Workspace:
    """Build the tree for ``path``, select a backend, and add ghost entries.

    Raises ``TreeNotFoundError`` when ``path`` does not exist; VCS problems
    only leave the backend outside any repository.
    """
    tree = FileTree.build(path, show_hidden)
    vcs = open_vcs_repo(tree.root.path, vcs_type)
    tree.add_ghost_nodes(vcs.get_deleted_files())
    return Workspace(tree=tree, vcs=vcs)


def refresh_tree_and_vcs(tree: FileTree, vcs: VCSRepo) -> None:
    """Rebuild tree and status from scratch, then re-add ghosts.

    ``TreeNotFoundError`` from the tree refresh propagates and the VCS state
    is left as it was.
    """
    tree.refresh()
    vcs.refresh(tree.root.path)
    deleted = vcs.get_deleted_files()
    logger.debug("refreshed %s: %d visible, %d deleted", tree.root.path, len(tree), len(deleted))
    tree.add_ghost_nodes(deleted)


__all__ = [
    "Workspace",
    "open_workspace",
    "refresh_tree_and_vcs",
]
