"""Hook Diff Checker.

Compares the hooks a repository tracks (by default `.githooks/` in the
working tree) with the hooks git actually runs (`.git/hooks/`, or
`core.hooksPath`). Hooks are paired by filename and compared by SHA-256
digest. Files ending with the sample suffix (`pre-commit.sample`, as
created by `git init`) are ignored.
"""

from __future__ import annotations

from pathlib import Path

from fleetcheck.audit import hashing
from fleetcheck.audit.errors import HookReadError, RepositoryStateError
from fleetcheck.audit.model import HookDiff, HookDiffKind
from fleetcheck.core.config import DEFAULT_SAMPLE_SUFFIX, HooksConfig
from fleetcheck.core.result import Err, Ok, Result
from fleetcheck.git.repository import GitBackend

__all__ = ["check_hooks", "check_repo_hooks", "hook_names"]


def hook_names(
    directory: Path,
    *,
    sample_suffix: str = DEFAULT_SAMPLE_SUFFIX,
) -> Result[set[str], HookReadError]:
    """Names of hook files in a directory.

    Only regular files count, and names ending with `sample_suffix` are
    skipped. A missing directory has no hooks; an unreadable one is an error.
    """
    if not directory.is_dir():
        return Ok(set())
    try:
        return Ok(
            {
                entry.name
                for entry in directory.iterdir()
                if entry.is_file() and not entry.name.endswith(sample_suffix)
            }
        )
    except OSError as e:
        return Err(HookReadError(path=directory, detail=e.strerror or str(e)))


def check_hooks(
    tracked_dir: Path,
    active_dir: Path,
    *,
    report_active_only: bool = True,
    sample_suffix: str = DEFAULT_SAMPLE_SUFFIX,
) -> Result[list[HookDiff], HookReadError]:
    """Compare a tracked hooks directory with the active one.

    Args:
        tracked_dir: Hooks under version control
        active_dir: Hooks git runs
        report_active_only: Also report hooks that exist only in active_dir
        sample_suffix: Suffix of template files to ignore

    Returns:
        Ok(list of HookDiff sorted by name), empty when the directories agree.
        Err(HookReadError) if a directory or a hook present in both cannot be read.
    """
    tracked_names = hook_names(tracked_dir, sample_suffix=sample_suffix)
    if isinstance(tracked_names, Err):
        return tracked_names
    active_names = hook_names(active_dir, sample_suffix=sample_suffix)
    if isinstance(active_names, Err):
        return active_names
    tracked, active = tracked_names.value, active_names.value

    diffs: list[HookDiff] = []

    for name in tracked - active:
        diffs.append(HookDiff(name, HookDiffKind.MISSING_IN_TARGET))

    if report_active_only:
        for name in active - tracked:
            diffs.append(HookDiff(name, HookDiffKind.MISSING_IN_SOURCE))

    for name in tracked & active:
        match _same_contents(tracked_dir / name, active_dir / name):
            case Err(e):
                return Err(e)
            case Ok(same):
                if not same:
                    diffs.append(HookDiff(name, HookDiffKind.CONTENT_MISMATCH))

    diffs.sort(key=lambda d: d.name)
    return Ok(diffs)


def check_repo_hooks(
    repo: GitBackend,
    config: HooksConfig | None = None,
) -> Result[list[HookDiff], HookReadError | RepositoryStateError]:
    """Run check_hooks on a repository's tracked and active hooks directories."""
    config = config or HooksConfig()

    active = repo.hooks_dir()
    if isinstance(active, Err):
        return Err(RepositoryStateError.from_git(repo.path, active.error))

    return check_hooks(
        repo.path / config.tracked_dir,
        active.value,
        report_active_only=config.report_active_only,
        sample_suffix=config.sample_suffix,
    )


def _same_contents(a: Path, b: Path) -> Result[bool, HookReadError]:
    digests: list[bytes] = []
    for path in (a, b):
        try:
            digests.append(hashing.digest_file(path))
        except OSError as e:
            return Err(HookReadError(path=path, detail=e.strerror or str(e)))
    return Ok(hashing.equal(digests[0], digests[1]))
