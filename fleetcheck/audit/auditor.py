"""Repository Auditor.

Opens one repository and runs every check against it, assembling a single
RepoReport. Only a failure to open the repository aborts the audit; a
failing check leaves its field empty, records the error on the report and
lets the remaining checks run.
"""

from __future__ import annotations

from pathlib import Path

from fleetcheck.audit.errors import (
    AuditError,
    NotARepository,
    OpenError,
    RepositoryStateError,
)
from fleetcheck.audit.hooks import check_repo_hooks
from fleetcheck.audit.model import BranchSync, HookDiff, RepoReport, SyncState
from fleetcheck.audit.remote import check_all_branches, check_remote_sync
from fleetcheck.audit.worktree import check_dirty, check_stash
from fleetcheck.core.config import Config
from fleetcheck.core.result import Err, Ok, Result
from fleetcheck.git.repository import GitBackend, Repository, has_git_metadata

__all__ = ["audit", "audit_repo", "open_repo"]


def open_repo(path: Path) -> Result[Repository, OpenError]:
    """Open the repository at path, classifying the failure."""
    if not has_git_metadata(path):
        return Err(NotARepository(path))
    return Repository.open(path).map_err(lambda e: RepositoryStateError.from_git(path, e))


def audit_repo(path: Path, config: Config | None = None) -> Result[RepoReport, OpenError]:
    """Audit the repository whose working tree root is `path`."""
    opened = open_repo(path)
    if isinstance(opened, Err):
        return opened
    return Ok(audit(opened.value, config))


def audit(repo: GitBackend, config: Config | None = None) -> RepoReport:
    """Run all checks against an open repository."""
    config = config or Config()
    errors: list[AuditError] = []

    dirty: bool | None = None
    match check_dirty(repo, include_untracked=config.status.include_untracked):
        case Ok(value):
            dirty = value
        case Err(e):
            errors.append(e)

    stash_count: int | None = None
    match check_stash(repo):
        case Ok(count):
            stash_count = count
        case Err(e):
            errors.append(e)

    sync: SyncState | None = None
    branches: tuple[BranchSync, ...] = ()
    remote_result = check_remote_sync(
        repo,
        config.remote.name,
        fetch=config.remote.fetch,
        timeout=config.remote.fetch_timeout,
    )
    match remote_result:
        case Ok(state):
            sync = state
            match check_all_branches(repo, exclude=state.branch):
                case Ok(others):
                    branches = tuple(others)
                case Err(e):
                    errors.append(e)
        case Err(e):
            errors.append(e)

    hook_mismatches: tuple[HookDiff, ...] = ()
    match check_repo_hooks(repo, config.hooks):
        case Ok(diffs):
            hook_mismatches = tuple(diffs)
        case Err(e):
            errors.append(e)

    return RepoReport(
        path=repo.path,
        dirty=dirty,
        stash_count=stash_count,
        sync=sync,
        branches=branches,
        hook_mismatches=hook_mismatches,
        errors=tuple(errors),
    )
