"""Repository discovery across a directory of clones.

Usage:
    from fleetcheck.git.multi import find_repos

    for path in find_repos(Path("~/src").expanduser()):
        print(path.name)
"""

from __future__ import annotations

from pathlib import Path

from fleetcheck.git.repository import has_git_metadata

__all__ = ["find_repos", "list_child_dirs"]


def list_child_dirs(base: Path) -> list[Path]:
    """List the immediate subdirectories of base, sorted case-insensitively.

    Returns an empty list if base is not a directory.

    Raises:
        OSError: If base exists but cannot be listed
    """
    if not base.is_dir():
        return []

    return sorted((child for child in base.iterdir() if child.is_dir()), key=_sort_key)


def find_repos(base: Path) -> list[Path]:
    """Find all git repositories directly under a directory.

    Searches one level deep for directories containing `.git` (a directory,
    or a file for linked worktrees and submodules). Deeper directories are
    never visited.

    Args:
        base: Directory to search

    Returns:
        Sorted list of repository paths
    """
    return [child for child in list_child_dirs(base) if has_git_metadata(child)]


def _sort_key(path: Path) -> tuple[str, str]:
    return (path.name.lower(), path.name)
