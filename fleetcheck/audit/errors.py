"""Audit error taxonomy.

Each error is attached to the repository it happened in; none of them stops
the scan of other repositories.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fleetcheck.git.repository import GitError

__all__ = [
    "AuditError",
    "FetchError",
    "HookReadError",
    "NotARepository",
    "OpenError",
    "RemoteError",
    "RemoteNotFoundError",
    "RepositoryStateError",
]


@dataclass(frozen=True, slots=True)
class NotARepository:
    """The directory has no git metadata."""

    path: Path

    @property
    def message(self) -> str:
        return f"not a git repository: {self.path}"


@dataclass(frozen=True, slots=True)
class RepositoryStateError:
    """Git could not open or read the repository."""

    path: Path
    operation: str
    detail: str

    @property
    def message(self) -> str:
        return f"{self.operation} failed: {self.detail}"

    @classmethod
    def from_git(cls, path: Path, error: GitError) -> RepositoryStateError:
        return cls(path=path, operation=error.command, detail=error.message)


@dataclass(frozen=True, slots=True)
class RemoteNotFoundError:
    """The configured remote does not exist in this repository."""

    remote: str
    available: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        msg = f"remote '{self.remote}' not found"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        return msg


@dataclass(frozen=True, slots=True)
class FetchError:
    """Fetching the remote failed (network, authentication, timeout)."""

    remote: str
    detail: str
    returncode: int = 1

    @property
    def message(self) -> str:
        return f"failed to fetch '{self.remote}': {self.detail}"


@dataclass(frozen=True, slots=True)
class HookReadError:
    """A hooks directory or hook file exists but could not be read."""

    path: Path
    detail: str

    @property
    def message(self) -> str:
        return f"cannot read hooks at {self.path}: {self.detail}"


OpenError = NotARepository | RepositoryStateError

RemoteError = RemoteNotFoundError | FetchError | RepositoryStateError

AuditError = (
    NotARepository | RepositoryStateError | RemoteNotFoundError | FetchError | HookReadError
)
