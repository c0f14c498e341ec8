"""In-memory GitBackend for tests.

MemoryRepository answers the same queries as Repository from plain fields,
so audit logic can be exercised without creating real repositories. Set an
`*_error` field to make the corresponding query fail.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fleetcheck.core.result import Err, Ok, Result
from fleetcheck.git.repository import GitError, StatusEntry

__all__ = ["MemoryBranch", "MemoryRepository"]


@dataclass(frozen=True, slots=True)
class MemoryBranch:
    """A local branch and its position relative to its upstream.

    Attributes:
        upstream: Full ref of the remote-tracking branch, None if unset
        ahead: Commits only on the local branch
        behind: Commits only on the upstream
    """

    upstream: str | None = None
    ahead: int = 0
    behind: int = 0


def _default_branches() -> dict[str, MemoryBranch]:
    return {"main": MemoryBranch(upstream="refs/remotes/origin/main")}


def _empty_fetches() -> list[str]:
    return []


@dataclass
class MemoryRepository:
    """GitBackend implementation holding its answers in memory."""

    root: Path
    entries: tuple[StatusEntry, ...] = ()
    stashes: int = 0
    remote_names: tuple[str, ...] = ("origin",)
    branch: str | None = "main"
    branches: dict[str, MemoryBranch] = field(default_factory=_default_branches)
    hooks_path: Path | None = None
    status_error: str | None = None
    stash_error: str | None = None
    fetch_error: str | None = None
    hooks_error: str | None = None
    fetches: list[str] = field(default_factory=_empty_fetches)

    @property
    def path(self) -> Path:
        return self.root

    def status_entries(self) -> Result[tuple[StatusEntry, ...], GitError]:
        if self.status_error is not None:
            return Err(GitError(command="status", message=self.status_error))
        return Ok(self.entries)

    def stash_count(self) -> Result[int, GitError]:
        if self.stash_error is not None:
            return Err(GitError(command="stash list", message=self.stash_error))
        return Ok(self.stashes)

    def remotes(self) -> Result[tuple[str, ...], GitError]:
        return Ok(self.remote_names)

    def fetch(self, remote: str, *, timeout: float | None = None) -> Result[str, GitError]:
        self.fetches.append(remote)
        if self.fetch_error is not None:
            return Err(
                GitError(command=f"fetch {remote}", message=self.fetch_error, returncode=128)
            )
        return Ok("")

    def current_branch(self) -> Result[str | None, GitError]:
        return Ok(self.branch)

    def local_branches(self) -> Result[tuple[str, ...], GitError]:
        return Ok(tuple(self.branches))

    def upstream(self, branch: str) -> str | None:
        info = self.branches.get(branch)
        return info.upstream if info else None

    def ahead_behind(self, local: str, upstream: str) -> Result[tuple[int, int], GitError]:
        name = local.removeprefix("refs/heads/")
        info = self.branches.get(name)
        if info is None or info.upstream != upstream:
            return Err(GitError(command="rev-list", message=f"unknown revision: {local}"))
        return Ok((info.ahead, info.behind))

    def hooks_dir(self) -> Result[Path, GitError]:
        if self.hooks_error is not None:
            return Err(GitError(command="rev-parse", message=self.hooks_error))
        return Ok(self.hooks_path or self.root / ".git" / "hooks")
