"""Tests for git/multi.py."""

from __future__ import annotations

from pathlib import Path

from fleetcheck.git.multi import find_repos, list_child_dirs


class TestListChildDirs:
    def test_missing_base(self, tmp_path: Path) -> None:
        assert list_child_dirs(tmp_path / "missing") == []

    def test_file_base(self, tmp_path: Path) -> None:
        base = tmp_path / "file.txt"
        base.write_text("", encoding="utf-8")
        assert list_child_dirs(base) == []

    def test_sorted_case_insensitively(self, tmp_path: Path) -> None:
        for name in ("beta", "Alpha", "gamma"):
            (tmp_path / name).mkdir()
        (tmp_path / "notes.txt").write_text("", encoding="utf-8")

        assert [p.name for p in list_child_dirs(tmp_path)] == ["Alpha", "beta", "gamma"]


class TestFindRepos:
    """Tests for find_repos function."""

    def test_empty_dir(self, tmp_path: Path) -> None:
        assert find_repos(tmp_path) == []

    def test_finds_git_dirs_and_files(self, tmp_path: Path) -> None:
        (tmp_path / "app" / ".git").mkdir(parents=True)
        (tmp_path / "worktree").mkdir()
        (tmp_path / "worktree" / ".git").write_text("gitdir: /elsewhere\n", encoding="utf-8")
        (tmp_path / "docs").mkdir()

        assert [p.name for p in find_repos(tmp_path)] == ["app", "worktree"]

    def test_not_recursive(self, tmp_path: Path) -> None:
        (tmp_path / "group" / "nested" / ".git").mkdir(parents=True)

        assert find_repos(tmp_path) == []
