"""Working-tree status and stash checks."""

from __future__ import annotations

from fleetcheck.audit.errors import RepositoryStateError
from fleetcheck.core.result import Err, Ok, Result
from fleetcheck.git.repository import GitBackend, StatusEntry

__all__ = ["check_dirty", "check_stash", "is_dirty_entry"]


def is_dirty_entry(entry: StatusEntry, *, include_untracked: bool = True) -> bool:
    """True if the entry counts as an uncommitted change."""
    if entry.is_ignored:
        return False
    if entry.is_untracked:
        return include_untracked
    return entry.is_change


def check_dirty(
    repo: GitBackend,
    *,
    include_untracked: bool = True,
) -> Result[bool, RepositoryStateError]:
    """Check for uncommitted changes in the working tree or the index.

    Modified, added, deleted, renamed, copied, type-changed and unmerged
    entries always count; untracked files count when `include_untracked`
    is set. Ignored files never count.
    """
    match repo.status_entries():
        case Err(e):
            return Err(RepositoryStateError.from_git(repo.path, e))
        case Ok(entries):
            return Ok(any(is_dirty_entry(e, include_untracked=include_untracked) for e in entries))


def check_stash(repo: GitBackend) -> Result[int, RepositoryStateError]:
    """Count stash entries."""
    return repo.stash_count().map_err(lambda e: RepositoryStateError.from_git(repo.path, e))
