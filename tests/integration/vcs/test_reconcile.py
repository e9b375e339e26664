"""Tests for keeping tree, VCS status and ghost entries in sync."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path

from vcstree.file_tree import FileTree, TreeNotFoundError
from vcstree.reconcile import open_workspace, refresh_tree_and_vcs
from vcstree.vcs import GitRepo, VCSStatus, VCSType


class _RecordingVCS:
    vcs_type = VCSType.GIT

    def __init__(self, deleted: list[Path]) -> None:
        self.deleted = deleted
        self.refreshed: list[Path] = []

    def refresh(self, path) -> None:
        self.refreshed.append(Path(path))

    def get_deleted_files(self) -> list[Path]:
        return list(self.deleted)


class RefreshTreeAndVCSTests(unittest.TestCase):
    def test_refresh_reloads_tree_then_reinserts_ghosts(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("", encoding="utf-8")
            tree = FileTree.build(root)
            vcs = _RecordingVCS([root / "b.txt"])

            (root / "c.txt").write_text("", encoding="utf-8")
            refresh_tree_and_vcs(tree, vcs)

            self.assertEqual(vcs.refreshed, [root])
            self.assertEqual([node.name for node in tree.nodes][1:], ["a.txt", "b.txt", "c.txt"])
            self.assertTrue(tree.find_node(root / "b.txt").is_ghost)

            refresh_tree_and_vcs(tree, vcs)
            self.assertEqual(sum(1 for node in tree.nodes if node.is_ghost), 1)

    def test_missing_root_propagates_and_skips_vcs_refresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "project"
            root.mkdir()
            tree = FileTree.build(root)
            vcs = _RecordingVCS([])
            root.rmdir()

            with self.assertRaises(TreeNotFoundError):
                refresh_tree_and_vcs(tree, vcs)
            self.assertEqual(vcs.refreshed, [])


@unittest.skipIf(shutil.which("git") is None, "git is required for workspace tests")
class GitWorkspaceTests(unittest.TestCase):
    def _init_repo(self, root: Path) -> None:
        for args in (
            ["init", "-q"],
            ["config", "user.email", "tests@example.com"],
            ["config", "user.name", "Tests"],
            ["config", "commit.gpgsign", "false"],
        ):
            subprocess.run(["git", *args], cwd=root, check=True)

    def _commit_all(self, root: Path, message: str) -> None:
        subprocess.run(["git", "add", "-A"], cwd=root, check=True)
        subprocess.run(["git", "commit", "-q", "-m", message], cwd=root, check=True)

    def test_deleted_file_reappears_as_ghost_after_refresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            self._init_repo(root)
            (root / "a.txt").write_text("a\n", encoding="utf-8")
            (root / "b.txt").write_text("b\n", encoding="utf-8")
            self._commit_all(root, "initial")

            workspace = open_workspace(root, vcs_type=VCSType.GIT)
            self.assertIsInstance(workspace.vcs, GitRepo)
            self.assertFalse(any(node.is_ghost for node in workspace.tree.nodes))

            (root / "b.txt").unlink()
            workspace.refresh()

            names = [node.name for node in workspace.tree.nodes]
            self.assertEqual(names[1:], ["a.txt", "b.txt"])
            ghost = workspace.tree.find_node(root / "b.txt")
            self.assertTrue(ghost.is_ghost)
            self.assertIs(workspace.vcs.get_status(ghost.path), VCSStatus.DELETED)

    def test_open_workspace_adds_ghosts_immediately(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            self._init_repo(root)
            (root / "sub").mkdir()
            (root / "sub" / "x.txt").write_text("x\n", encoding="utf-8")
            (root / "top.txt").write_text("t\n", encoding="utf-8")
            self._commit_all(root, "initial")
            (root / "top.txt").unlink()
            (root / "sub" / "x.txt").unlink()
            (root / "sub" / "y.txt").write_text("y\n", encoding="utf-8")

            workspace = open_workspace(root, vcs_type=VCSType.GIT)

            ghosts = [node.path for node in workspace.tree.nodes if node.is_ghost]
            # sub is collapsed, so only the top-level deletion is visible.
            self.assertEqual(ghosts, [root / "top.txt"])

            workspace.tree.expand([node.name for node in workspace.tree.nodes].index("sub"))
            workspace.tree.add_ghost_nodes(workspace.vcs.get_deleted_files())
            ghosts = [node.path for node in workspace.tree.nodes if node.is_ghost]
            self.assertEqual(ghosts, [root / "sub" / "x.txt", root / "top.txt"])


if __name__ == "__main__":
    unittest.main()
