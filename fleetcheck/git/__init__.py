"""Git operations module.

This module provides the read-only git queries the audit is built on:
- GitBackend: the query surface (protocol)
- Repository: implementation over the `git` executable
- MemoryRepository: in-memory implementation for tests
- find_repos: one-level repository discovery

Usage:
    from fleetcheck.git import Repository, find_repos

    for path in find_repos(root):
        match Repository.open(path):
            case Ok(repo):
                print(repo.stash_count())
            case Err(e):
                print(e.message)
"""

from fleetcheck.git.memory import MemoryBranch, MemoryRepository
from fleetcheck.git.multi import find_repos, list_child_dirs
from fleetcheck.git.repository import (
    GitBackend,
    GitError,
    Repository,
    StatusEntry,
    has_git_metadata,
    short_ref_name,
)

__all__ = [
    # Repository
    "GitBackend",
    "GitError",
    "Repository",
    "StatusEntry",
    "has_git_metadata",
    "short_ref_name",
    # Memory
    "MemoryBranch",
    "MemoryRepository",
    # Multi
    "find_repos",
    "list_child_dirs",
]
