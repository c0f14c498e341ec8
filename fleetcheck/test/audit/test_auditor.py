"""Tests for fleetcheck.audit.auditor module."""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from fleetcheck.audit.auditor import audit, audit_repo, open_repo
from fleetcheck.audit.errors import (
    FetchError,
    HookReadError,
    NotARepository,
    RemoteNotFoundError,
    RepositoryStateError,
)
from fleetcheck.audit.model import (
    BranchSync,
    Divergence,
    HookDiff,
    HookDiffKind,
    NoUpstream,
    RepoReport,
)
from fleetcheck.core.config import Config, RemoteConfig, StatusConfig
from fleetcheck.core.result import Err, Ok
from fleetcheck.git.memory import MemoryBranch, MemoryRepository
from fleetcheck.git.repository import StatusEntry

if TYPE_CHECKING:
    from fleetcheck.test.conftest import Clone

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not available")


class TestAudit:
    """audit() against the in-memory backend."""

    def test_clean_repository(self, tmp_path: Path) -> None:
        report = audit(MemoryRepository(root=tmp_path))

        assert report == RepoReport(
            path=tmp_path,
            dirty=False,
            stash_count=0,
            sync=Divergence("main", "origin/main", 0, 0),
        )
        assert report.has_findings is False

    def test_all_findings(self, tmp_path: Path) -> None:
        (tmp_path / ".githooks").mkdir()
        (tmp_path / ".githooks" / "pre-commit").write_text("x", encoding="utf-8")
        repo = MemoryRepository(
            root=tmp_path,
            entries=(StatusEntry(" M", "a.py"),),
            stashes=1,
            branches={
                "main": MemoryBranch("refs/remotes/origin/main", ahead=1, behind=2),
                "wip": MemoryBranch(),
            },
        )

        report = audit(repo)

        assert report.dirty is True
        assert report.stashed is True
        assert (report.ahead, report.behind) == (1, 2)
        assert report.branches == (BranchSync("wip", NoUpstream("wip")),)
        assert report.hook_mismatches == (
            HookDiff("pre-commit", HookDiffKind.MISSING_IN_TARGET),
        )
        assert report.errors == ()

    def test_uses_configured_remote(self, tmp_path: Path) -> None:
        repo = MemoryRepository(root=tmp_path, remote_names=("origin", "upstream"))
        config = Config(remote=RemoteConfig(name="upstream"))

        audit(repo, config)

        assert repo.fetches == ["upstream"]

    def test_fetch_disabled(self, tmp_path: Path) -> None:
        repo = MemoryRepository(root=tmp_path)

        report = audit(repo, Config(remote=RemoteConfig(fetch=False)))

        assert repo.fetches == []
        assert report.sync == Divergence("main", "origin/main", 0, 0)

    def test_untracked_setting(self, tmp_path: Path) -> None:
        repo = MemoryRepository(root=tmp_path, entries=(StatusEntry("??", "notes.txt"),))

        assert audit(repo).dirty is True
        assert audit(repo, Config(status=StatusConfig(include_untracked=False))).dirty is False


class TestPartialReport:
    """A failing check records its error and the others still run."""

    def test_fetch_failure(self, tmp_path: Path) -> None:
        repo = MemoryRepository(
            root=tmp_path,
            entries=(StatusEntry(" M", "a.py"),),
            stashes=1,
            fetch_error="Connection timed out",
        )

        report = audit(repo)

        assert report.dirty is True
        assert report.stash_count == 1
        assert report.sync is None
        assert report.ahead is None
        assert report.behind is None
        assert report.errors == (FetchError("origin", "Connection timed out", 128),)
        assert report.has_findings is True

    def test_missing_remote(self, tmp_path: Path) -> None:
        report = audit(MemoryRepository(root=tmp_path, remote_names=()))

        assert report.errors == (RemoteNotFoundError("origin", ()),)
        assert report.dirty is False

    def test_status_and_stash_failures(self, tmp_path: Path) -> None:
        repo = MemoryRepository(root=tmp_path, status_error="corrupt", stash_error="bad ref")

        report = audit(repo)

        assert report.dirty is None
        assert report.stash_count is None
        assert report.sync == Divergence("main", "origin/main", 0, 0)
        assert [type(e) for e in report.errors] == [RepositoryStateError, RepositoryStateError]

    def test_hooks_failure(self, tmp_path: Path) -> None:
        report = audit(MemoryRepository(root=tmp_path, hooks_error="bad config"))

        assert report.hook_mismatches == ()
        assert report.errors == (RepositoryStateError(tmp_path, "rev-parse", "bad config"),)

    def test_unreadable_hooks_directory(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        tracked = tmp_path / ".githooks"
        tracked.mkdir()
        listdir = Path.iterdir

        def deny_tracked(self: Path) -> Iterator[Path]:
            if self == tracked:
                raise PermissionError(13, "Permission denied", str(self))
            return listdir(self)

        monkeypatch.setattr(Path, "iterdir", deny_tracked)

        report = audit(MemoryRepository(root=tmp_path))

        assert report.hook_mismatches == ()
        assert report.errors == (HookReadError(tracked, "Permission denied"),)
        assert report.sync == Divergence("main", "origin/main", 0, 0)


class TestOpenRepo:
    def test_not_a_repository(self, tmp_path: Path) -> None:
        assert open_repo(tmp_path) == Err(NotARepository(tmp_path))

    @requires_git
    def test_corrupted_repository(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()

        result = audit_repo(tmp_path)

        assert isinstance(result, Err)
        assert isinstance(result.error, RepositoryStateError)
        assert result.error.path == tmp_path


@requires_git
class TestAuditRepo:
    """End-to-end audits of real clones."""

    def test_stash_only(
        self,
        make_clone: Callable[..., Clone],
        git: Callable[..., str],
    ) -> None:
        clone = make_clone()
        for hooks in (clone.path / ".githooks", clone.path / ".git" / "hooks"):
            hooks.mkdir(exist_ok=True)
            (hooks / "pre-commit").write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        clone.commit(clone.path, ".githooks/pre-commit", "#!/bin/sh\nexit 0\n")
        git(clone.path, "push", "origin", "main")
        (clone.path / "README.md").write_text("work in progress\n", encoding="utf-8")
        git(clone.path, "stash", "push")

        result = audit_repo(clone.path)

        assert isinstance(result, Ok)
        report = result.value
        assert report.dirty is False
        assert report.stashed is True
        assert report.ahead == 0
        assert report.behind == 0
        assert report.hook_mismatches == ()
        assert report.errors == ()

    def test_hook_drift(self, make_clone: Callable[..., Clone]) -> None:
        clone = make_clone()
        active = clone.path / ".git" / "hooks"
        active.mkdir(exist_ok=True)
        (active / "pre-push").write_text("#!/bin/sh\nexit 1\n", encoding="utf-8")
        clone.commit(clone.path, "local.txt")

        result = audit_repo(clone.path, Config(remote=RemoteConfig(fetch=False)))

        assert isinstance(result, Ok)
        assert result.value.hook_mismatches == (
            HookDiff("pre-push", HookDiffKind.MISSING_IN_SOURCE),
        )
        assert result.value.ahead == 1

    def test_other_branches(
        self,
        make_clone: Callable[..., Clone],
        git: Callable[..., str],
    ) -> None:
        clone = make_clone()
        for name in ("b1", "b2", "b3"):
            git(clone.path, "branch", name)
            git(clone.path, "push", "-u", "origin", name)
        for name in ("b1", "b3"):
            git(clone.path, "checkout", name)
            clone.commit(clone.path, f"{name}-local.txt")
        git(clone.path, "checkout", "main")
        git(clone.seed, "fetch", "origin")
        for name in ("b2", "b3"):
            git(clone.seed, "checkout", "-b", name, f"origin/{name}")
            clone.commit(clone.seed, f"{name}-remote.txt")
            git(clone.seed, "push", "origin", name)

        result = audit_repo(clone.path)

        assert isinstance(result, Ok)
        report = result.value
        assert report.sync == Divergence("main", "origin/main", 0, 0)
        assert report.branches == (
            BranchSync("b1", Divergence("b1", "origin/b1", 1, 0)),
            BranchSync("b2", Divergence("b2", "origin/b2", 0, 1)),
            BranchSync("b3", Divergence("b3", "origin/b3", 1, 1)),
        )
        assert report.errors == ()
