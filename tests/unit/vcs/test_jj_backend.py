"""Tests for the jj backend with the jj subprocess replaced by canned output."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from vcstree.vcs import DiffLineType, DiffMarker, JJRepo, VCSStatus, VCSType, parse_jj_status
from vcstree.vcs.jj import clean_bookmark, parse_jj_status_output, rename_target

JJ_STATUS_OUTPUT = """Working copy changes:
M src/main.py
A src/new.py
D old.txt
R docs/{intro.md => overview.md}
C merge.txt
Working copy  (@) : kntqzsqt 1234abcd feature
Parent commit (@-): zzzzzzzz 00000000 (empty) root
"""

JJ_DIFF_OUTPUT = """diff --git a/src/main.py b/src/main.py
index 1111111..2222222 100644
--- a/src/main.py
+++ b/src/main.py
@@ -3,1 +3,2 @@
-old
+new
+extra
"""


def _fake_jj(root: Path, bookmarks: str = "feature* main\n"):
    calls: list[list[str]] = []
    cwds: list[Path | None] = []

    def run(args, cwd=None):
        args = list(args)
        calls.append(args)
        cwds.append(None if cwd is None else Path(cwd))
        if args[-1] == "root":
            return f"{root}\n"
        subcommand = args[3]
        if subcommand == "status":
            return JJ_STATUS_OUTPUT
        if subcommand == "log":
            template = args[-1]
            if template == "change_id.short(8)":
                return "kntqzsqt"
            if template == "bookmarks":
                return bookmarks
        if subcommand == "diff":
            return JJ_DIFF_OUTPUT
        return None

    return run, calls, cwds


class ParseJJStatusTests(unittest.TestCase):
    def test_status_codes_map_to_shared_vocabulary(self) -> None:
        cases = {
            "M": VCSStatus.MODIFIED,
            "A": VCSStatus.ADDED,
            "D": VCSStatus.DELETED,
            "R": VCSStatus.RENAMED,
            "C": VCSStatus.CONFLICT,
            "?": VCSStatus.NONE,
            "x": VCSStatus.NONE,
        }
        for code, expected in cases.items():
            with self.subTest(code=code):
                self.assertIs(parse_jj_status(code), expected)

    def test_only_working_copy_section_is_parsed(self) -> None:
        output = "Some preamble\nM not/this.txt\n" + JJ_STATUS_OUTPUT + "M after/section.txt\n"
        records = parse_jj_status_output(output)
        self.assertEqual(
            records,
            [
                (VCSStatus.MODIFIED, "src/main.py"),
                (VCSStatus.ADDED, "src/new.py"),
                (VCSStatus.DELETED, "old.txt"),
                (VCSStatus.RENAMED, "docs/overview.md"),
                (VCSStatus.CONFLICT, "merge.txt"),
            ],
        )

    def test_clean_working_copy_has_no_records(self) -> None:
        output = "The working copy has no changes.\nWorking copy  (@) : abc\nParent commit (@-): def\n"
        self.assertEqual(parse_jj_status_output(output), [])

    def test_rename_target_handles_braced_and_plain_forms(self) -> None:
        self.assertEqual(rename_target("src/{a.py => b.py}"), "src/b.py")
        self.assertEqual(rename_target("{old => new}/file.txt"), "new/file.txt")
        self.assertEqual(rename_target("old.txt => new.txt"), "new.txt")
        self.assertEqual(rename_target("unchanged.txt"), "unchanged.txt")

    def test_clean_bookmark_strips_decoration_and_keeps_first(self) -> None:
        self.assertEqual(clean_bookmark("main*\n"), "main")
        self.assertEqual(clean_bookmark("feature* main"), "feature")
        self.assertEqual(clean_bookmark("  \n"), "")


class JJRepoTests(unittest.TestCase):
    def test_refresh_builds_index_display_and_deleted_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            fake_run, _calls, _cwds = _fake_jj(root)
            with mock.patch("vcstree.vcs.jj.run_vcs_command", side_effect=fake_run):
                repo = JJRepo(root)

            self.assertIs(repo.vcs_type, VCSType.JJ)
            self.assertTrue(repo.is_inside_repo())
            self.assertEqual(repo.get_root(), root)
            self.assertIs(repo.get_status(root / "src" / "main.py"), VCSStatus.MODIFIED)
            self.assertIs(repo.get_status(root / "docs" / "overview.md"), VCSStatus.RENAMED)
            self.assertIs(repo.get_status(root / "src"), VCSStatus.MODIFIED)
            self.assertEqual(repo.get_deleted_files(), [root / "old.txt"])
            self.assertEqual(repo.get_display_info(), "@kntqzsqt (feature)")

    def test_display_info_without_bookmark(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            fake_run, _calls, _cwds = _fake_jj(root, bookmarks="")
            with mock.patch("vcstree.vcs.jj.run_vcs_command", side_effect=fake_run):
                repo = JJRepo(root)
            self.assertEqual(repo.get_display_info(), "@kntqzsqt")

    def test_file_diff_uses_relative_path_and_zero_context(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            fake_run, calls, _cwds = _fake_jj(root)
            with mock.patch("vcstree.vcs.jj.run_vcs_command", side_effect=fake_run):
                repo = JJRepo(root)
                markers = repo.get_file_diff(root / "src" / "main.py")

            self.assertEqual(
                markers,
                [DiffMarker(3, DiffLineType.MODIFIED), DiffMarker(4, DiffLineType.ADDED)],
            )
            self.assertIn(
                ["jj", "-R", str(root), "diff", "--git", "--context", "0", "--", "src/main.py"],
                calls,
            )

    def test_commands_run_from_workspace_root_when_opened_in_subdirectory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".jj").mkdir()
            (root / "src").mkdir()
            fake_run, calls, cwds = _fake_jj(root)
            with mock.patch("vcstree.vcs.jj.run_vcs_command", side_effect=fake_run):
                repo = JJRepo(root / "src")
                repo.get_file_diff(root / "src" / "main.py")

            self.assertEqual(repo.get_root(), root)
            self.assertEqual(calls[0], ["jj", "-R", str(root), "root"])
            self.assertEqual(cwds, [root] * len(calls))
            self.assertIs(repo.get_status(root / "src" / "main.py"), VCSStatus.MODIFIED)
            self.assertIs(repo.get_status(root / "main.py"), VCSStatus.NONE)

    def test_missing_tool_degrades_to_not_inside_repo(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("vcstree.vcs.jj.run_vcs_command", return_value=None):
                repo = JJRepo(tmp)
            self.assertFalse(repo.is_inside_repo())
            self.assertEqual(repo.get_display_info(), "")
            self.assertIs(repo.get_status(Path(tmp) / "x"), VCSStatus.NONE)
            self.assertEqual(repo.get_file_diff(Path(tmp) / "x"), [])

    def test_file_outside_root_has_no_diff(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "repo"
            root.mkdir()
            fake_run, calls, _cwds = _fake_jj(root)
            with mock.patch("vcstree.vcs.jj.run_vcs_command", side_effect=fake_run):
                repo = JJRepo(root)
                self.assertEqual(repo.get_file_diff(Path(tmp) / "elsewhere.txt"), [])
            self.assertFalse(any("diff" in call for call in calls))


if __name__ == "__main__":
    unittest.main()
