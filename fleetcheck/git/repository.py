"""Git repository abstraction.

This module defines the read-only query surface the audit needs
(GitBackend) and its production implementation (Repository), which drives
the `git` command line. Every query returns a Result.

Usage:
    match Repository.open(Path("/path/to/repo")):
        case Ok(repo):
            entries = repo.status_entries()
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from fleetcheck.core.result import Err, Ok, Result
from fleetcheck.platform.process import ProcessError
from fleetcheck.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = [
    "GitBackend",
    "GitError",
    "Repository",
    "StatusEntry",
    "has_git_metadata",
    "short_ref_name",
]

_CHANGE_CODES = frozenset("MADRCTU")


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code (-1 if git never ran or timed out)
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in `git status --porcelain=v1`.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    @property
    def is_untracked(self) -> bool:
        """True if file is untracked."""
        return self.xy == "??"

    @property
    def is_ignored(self) -> bool:
        return self.xy == "!!"

    @property
    def is_change(self) -> bool:
        """True for modified, added, deleted, renamed, copied, type-changed or unmerged."""
        return any(code in _CHANGE_CODES for code in self.xy) and not self.is_untracked


class GitBackend(Protocol):
    """Read-only queries the audit runs against one repository.

    Repository implements this with the git CLI; MemoryRepository
    implements it in memory for tests.
    """

    @property
    def path(self) -> Path:
        """Working tree root."""
        ...

    def status_entries(self) -> Result[tuple[StatusEntry, ...], GitError]:
        """Working tree and index entries, ignored files excluded."""
        ...

    def stash_count(self) -> Result[int, GitError]:
        """Number of stash entries."""
        ...

    def remotes(self) -> Result[tuple[str, ...], GitError]:
        """Names of configured remotes."""
        ...

    def fetch(self, remote: str, *, timeout: float | None = None) -> Result[str, GitError]:
        """Fetch the named remote once."""
        ...

    def current_branch(self) -> Result[str | None, GitError]:
        """Checked-out branch name, None for a detached HEAD."""
        ...

    def local_branches(self) -> Result[tuple[str, ...], GitError]:
        """Names of all local branches."""
        ...

    def upstream(self, branch: str) -> str | None:
        """Full ref name of the branch's remote-tracking reference, if any."""
        ...

    def ahead_behind(self, local: str, upstream: str) -> Result[tuple[int, int], GitError]:
        """Commits reachable only from `local`, and only from `upstream`."""
        ...

    def hooks_dir(self) -> Result[Path, GitError]:
        """Directory git runs hooks from."""
        ...


def has_git_metadata(path: Path) -> bool:
    """True if path holds a `.git` directory or a `.git` file (worktree, submodule)."""
    return (path / ".git").exists()


def short_ref_name(ref: str) -> str:
    """Strip `refs/remotes/` or `refs/heads/` for display."""
    for prefix in ("refs/remotes/", "refs/heads/"):
        if ref.startswith(prefix):
            return ref[len(prefix) :]
    return ref


class Repository:
    """Git repository backed by the `git` executable.

    Use `Repository.open` to get an instance: it verifies that git can read
    the repository before any check runs.

    Attributes:
        path: Path to the working tree root
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @classmethod
    def open(cls, path: Path) -> Result[Repository, GitError]:
        """Open the repository whose working tree root is `path`.

        Fails if `path` has no git metadata, or if git cannot read it
        (corrupted `.git`, bare repository, missing git executable), or if
        HEAD names a commit missing from the object store. A repository
        without commits opens.
        """
        if not has_git_metadata(path):
            return Err(GitError(command="open", message=f"not a git repository: {path}"))

        repo = cls(path)
        result = repo._run(["rev-parse", "--absolute-git-dir", "--show-toplevel"])
        if isinstance(result, Err):
            return Err(repo._error("rev-parse", result.error, "cannot open repository"))

        # Resolves the ref only; fails on an unborn branch
        if isinstance(repo._run(["rev-parse", "--verify", "--quiet", "HEAD"]), Err):
            return Ok(repo)

        head = repo._run(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])
        match head:
            case Err(e):
                return Err(repo._error("rev-parse", e, "HEAD commit is missing or corrupt"))
            case Ok(_):
                return Ok(repo)

    def status_entries(self) -> Result[tuple[StatusEntry, ...], GitError]:
        """Run `git status --porcelain=v1` and parse the entries.

        Untracked files are listed; ignored files are not.
        """
        result = self._run(["status", "--porcelain=v1", "--untracked-files=normal"])
        match result:
            case Err(e):
                return Err(self._error("status", e, "git status failed"))
            case Ok(stdout):
                return Ok(self._parse_entries(stdout))

    def stash_count(self) -> Result[int, GitError]:
        result = self._run(["stash", "list", "--format=%H"])
        match result:
            case Err(e):
                return Err(self._error("stash list", e, "git stash list failed"))
            case Ok(stdout):
                return Ok(sum(1 for ln in stdout.splitlines() if ln.strip()))

    def remotes(self) -> Result[tuple[str, ...], GitError]:
        result = self._run(["remote"])
        match result:
            case Err(e):
                return Err(self._error("remote", e, "git remote failed"))
            case Ok(stdout):
                return Ok(tuple(ln.strip() for ln in stdout.splitlines() if ln.strip()))

    def fetch(self, remote: str, *, timeout: float | None = None) -> Result[str, GitError]:
        """Fetch from the named remote.

        Runs non-interactively: a remote that needs credentials the
        credential helper cannot supply fails instead of prompting.
        """
        result = self._run(
            ["fetch", "--quiet", remote],
            timeout=timeout,
        )
        match result:
            case Err(e):
                return Err(self._error(f"fetch {remote}", e, "fetch failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def current_branch(self) -> Result[str | None, GitError]:
        """Get current branch name, None on a detached HEAD.

        Works on an unborn branch (no commits yet).
        """
        result = self._run(["symbolic-ref", "--quiet", "--short", "HEAD"])
        match result:
            case Ok(stdout):
                return Ok(stdout.strip() or None)
            case Err(e) if e.returncode == 1 and not e.stderr.strip():
                return Ok(None)
            case Err(e):
                return Err(self._error("symbolic-ref", e, "cannot resolve HEAD"))

    def local_branches(self) -> Result[tuple[str, ...], GitError]:
        result = self._run(["for-each-ref", "--format=%(refname:short)", "refs/heads"])
        match result:
            case Err(e):
                return Err(self._error("for-each-ref", e, "cannot list branches"))
            case Ok(stdout):
                return Ok(tuple(ln.strip() for ln in stdout.splitlines() if ln.strip()))

    def upstream(self, branch: str) -> str | None:
        """Get the full ref of the branch's upstream.

        Returns None if no upstream is configured, or if the configured
        remote-tracking ref does not exist (never fetched, or deleted on
        the remote).
        """
        result = self._run(
            ["rev-parse", "--symbolic-full-name", f"refs/heads/{branch}@{{upstream}}"]
        )
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def ahead_behind(self, local: str, upstream: str) -> Result[tuple[int, int], GitError]:
        """Count commits on each side of the symmetric difference.

        Runs `git rev-list --left-right --count local...upstream`.
        """
        result = self._run(["rev-list", "--left-right", "--count", f"{local}...{upstream}"])
        match result:
            case Err(e):
                return Err(self._error("rev-list", e, "cannot compare commit graphs"))
            case Ok(stdout):
                parts = stdout.split()
                if len(parts) != 2 or not all(p.isdigit() for p in parts):
                    return Err(
                        GitError(
                            command="rev-list",
                            message=f"unexpected rev-list output: {stdout.strip()!r}",
                        )
                    )
                return Ok((int(parts[0]), int(parts[1])))

    def hooks_dir(self) -> Result[Path, GitError]:
        """Resolve the active hooks directory (honours core.hooksPath)."""
        result = self._run(["rev-parse", "--git-path", "hooks"])
        match result:
            case Err(e):
                return Err(self._error("rev-parse", e, "cannot resolve hooks path"))
            case Ok(stdout):
                return Ok(self._path / stdout.strip())

    def _run(self, args: list[str], *, timeout: float | None = None) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        if timeout is None:
            timeout = (
                _GIT_NETWORK_TIMEOUT_SECONDS
                if command in {"fetch", "pull", "push", "clone"}
                else _GIT_TIMEOUT_SECONDS
            )
        return run_process(
            ["git", "-C", str(self._path), *args],
            cwd=self._path,
            env=self._env(),
            timeout=timeout,
        )

    def _env(self) -> dict[str, str]:
        env = dict(os.environ)
        env["GIT_TERMINAL_PROMPT"] = "0"
        env["GIT_CEILING_DIRECTORIES"] = str(self._path.resolve().parent)
        env["LC_ALL"] = "C"
        return env

    def _error(self, command: str, error: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=error.stderr.strip() or error.stdout.strip() or fallback,
            returncode=error.returncode,
        )

    def _parse_entries(self, output: str) -> tuple[StatusEntry, ...]:
        entries: list[StatusEntry] = []
        for line in output.splitlines():
            entry = self._parse_entry(line)
            if entry:
                entries.append(entry)
        return tuple(entries)

    def _parse_entry(self, line: str) -> StatusEntry | None:
        """Parse a single status entry line."""
        if len(line) < 4:
            return None

        # Format: XY path, or XY orig -> path for renames
        return StatusEntry(xy=line[:2], path=line[3:])
