"""Remote Sync Checker.

Fetches the configured remote, then compares each local branch with its
remote-tracking branch. A branch without an upstream is reported as
NoUpstream, never as "0 ahead, 0 behind": an unconfigured branch is not a
synchronized one.
"""

from __future__ import annotations

from fleetcheck.audit.errors import (
    FetchError,
    RemoteError,
    RemoteNotFoundError,
    RepositoryStateError,
)
from fleetcheck.audit.model import BranchSync, Divergence, NoUpstream, SyncState
from fleetcheck.core.config import DEFAULT_REMOTE
from fleetcheck.core.result import Err, Ok, Result
from fleetcheck.git.repository import GitBackend, short_ref_name

__all__ = [
    "branch_sync",
    "check_all_branches",
    "check_remote_sync",
    "fetch_remote",
]


def fetch_remote(
    repo: GitBackend,
    remote: str = DEFAULT_REMOTE,
    *,
    timeout: float | None = None,
) -> Result[None, RemoteError]:
    """Locate the remote and fetch it once.

    No retry is attempted; a failed fetch is reported as FetchError.
    """
    names = repo.remotes()
    if isinstance(names, Err):
        return Err(RepositoryStateError.from_git(repo.path, names.error))
    if remote not in names.value:
        return Err(RemoteNotFoundError(remote=remote, available=names.value))

    fetched = repo.fetch(remote, timeout=timeout)
    if isinstance(fetched, Err):
        return Err(
            FetchError(
                remote=remote,
                detail=fetched.error.message,
                returncode=fetched.error.returncode,
            )
        )
    return Ok(None)


def branch_sync(repo: GitBackend, branch: str) -> Result[SyncState, RepositoryStateError]:
    """Compare one local branch with its upstream, without fetching."""
    upstream = repo.upstream(branch)
    if upstream is None:
        return Ok(NoUpstream(branch))

    match repo.ahead_behind(f"refs/heads/{branch}", upstream):
        case Err(e):
            return Err(RepositoryStateError.from_git(repo.path, e))
        case Ok((ahead, behind)):
            return Ok(
                Divergence(
                    branch=branch,
                    upstream=short_ref_name(upstream),
                    ahead=ahead,
                    behind=behind,
                )
            )


def check_remote_sync(
    repo: GitBackend,
    remote: str = DEFAULT_REMOTE,
    branch: str | None = None,
    *,
    fetch: bool = True,
    timeout: float | None = None,
) -> Result[SyncState, RemoteError]:
    """Fetch `remote` and classify `branch` (default: current) against its upstream.

    Returns:
        Ok(Divergence) with ahead/behind counts,
        Ok(NoUpstream) if the branch has no upstream or HEAD is detached,
        Err(RemoteNotFoundError | FetchError | RepositoryStateError) otherwise.
    """
    if fetch:
        fetched = fetch_remote(repo, remote, timeout=timeout)
        if isinstance(fetched, Err):
            return fetched

    if branch is None:
        current = repo.current_branch()
        if isinstance(current, Err):
            return Err(RepositoryStateError.from_git(repo.path, current.error))
        if current.value is None:
            return Ok(NoUpstream(None))
        branch = current.value

    return branch_sync(repo, branch)


def check_all_branches(
    repo: GitBackend,
    *,
    exclude: str | None = None,
) -> Result[list[BranchSync], RepositoryStateError]:
    """Sync state of every local branch (no fetch; call after check_remote_sync).

    Args:
        repo: Repository to inspect
        exclude: Branch to leave out, typically the current one
    """
    names = repo.local_branches()
    if isinstance(names, Err):
        return Err(RepositoryStateError.from_git(repo.path, names.error))

    results: list[BranchSync] = []
    for name in names.value:
        if name == exclude:
            continue
        match branch_sync(repo, name):
            case Err(e):
                return Err(e)
            case Ok(state):
                results.append(BranchSync(branch=name, state=state))
    return Ok(results)
