"""Report records produced by the audit.

All records are immutable and built bottom-up: checkers return HookDiff and
SyncState values, the auditor assembles them into one RepoReport per
repository.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from fleetcheck.audit.errors import AuditError

__all__ = [
    "BranchSync",
    "Divergence",
    "HookDiff",
    "HookDiffKind",
    "NoUpstream",
    "RepoReport",
    "SyncState",
]


class HookDiffKind(Enum):
    """How a hook differs between the tracked and the active hooks directory."""

    MISSING_IN_TARGET = auto()
    """Only in the tracked directory (not installed)."""

    MISSING_IN_SOURCE = auto()
    """Only in the active directory (not tracked)."""

    CONTENT_MISMATCH = auto()
    """In both, with different contents."""

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


@dataclass(frozen=True, slots=True)
class HookDiff:
    """One mismatched or missing hook file."""

    name: str
    kind: HookDiffKind


@dataclass(frozen=True, slots=True)
class Divergence:
    """Position of a branch relative to its remote-tracking branch.

    Attributes:
        branch: Local branch name
        upstream: Remote-tracking branch, short form (e.g. "origin/main")
        ahead: Commits on the branch that the upstream lacks
        behind: Commits on the upstream that the branch lacks
    """

    branch: str
    upstream: str
    ahead: int = 0
    behind: int = 0

    @property
    def in_sync(self) -> bool:
        return self.ahead == 0 and self.behind == 0

    @property
    def diverged(self) -> bool:
        """True if both sides have commits the other lacks."""
        return self.ahead > 0 and self.behind > 0


@dataclass(frozen=True, slots=True)
class NoUpstream:
    """The branch has no remote-tracking branch to compare against.

    Attributes:
        branch: Local branch name, None for a detached HEAD
    """

    branch: str | None = None


SyncState = Divergence | NoUpstream


@dataclass(frozen=True, slots=True)
class BranchSync:
    """Sync state of one local branch."""

    branch: str
    state: SyncState


@dataclass(frozen=True, slots=True)
class RepoReport:
    """One repository's audit outcome.

    A check that failed leaves its field as None and adds an entry to
    `errors`; the other fields are still filled in.

    Attributes:
        path: Working tree root
        dirty: Working tree or index has changes
        stash_count: Number of stash entries
        sync: Current branch relative to its upstream
        branches: Sync state of the other local branches
        hook_mismatches: Hook differences, sorted by name
        errors: Errors from individual checks
    """

    path: Path
    dirty: bool | None = False
    stash_count: int | None = 0
    sync: SyncState | None = None
    branches: tuple[BranchSync, ...] = ()
    hook_mismatches: tuple[HookDiff, ...] = ()
    errors: tuple[AuditError, ...] = ()

    @property
    def stashed(self) -> bool:
        return bool(self.stash_count)

    @property
    def ahead(self) -> int | None:
        """Commits to push, None if there is nothing to compare against."""
        if isinstance(self.sync, Divergence):
            return self.sync.ahead
        return None

    @property
    def behind(self) -> int | None:
        """Commits to pull, None if there is nothing to compare against."""
        if isinstance(self.sync, Divergence):
            return self.sync.behind
        return None

    @property
    def diverging_branches(self) -> list[BranchSync]:
        """Other local branches that are ahead of or behind their upstream."""
        return [
            b for b in self.branches if isinstance(b.state, Divergence) and not b.state.in_sync
        ]

    @property
    def has_findings(self) -> bool:
        """True if anything in this repository needs attention."""
        return bool(
            self.dirty
            or self.stashed
            or self.ahead
            or self.behind
            or isinstance(self.sync, NoUpstream)
            or self.diverging_branches
            or self.hook_mismatches
            or self.errors
        )
