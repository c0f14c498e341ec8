"""Shared fixtures: isolated git environment and throwaway clones."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise RuntimeError(
            f"git {' '.join(args)} failed (code {result.returncode}): {result.stderr.strip()}"
        )
    return result.stdout.strip()


@dataclass(frozen=True, slots=True)
class Clone:
    """A clone with a bare remote and a second working copy to push from."""

    path: Path
    remote: Path
    seed: Path

    def commit(self, where: Path, filename: str, content: str = "content\n") -> None:
        (where / filename).write_text(content, encoding="utf-8")
        _git(where, "add", filename)
        _git(where, "commit", "-m", f"add {filename}")

    def wipe_objects(self) -> None:
        """Delete the clone's object store contents, leaving refs pointing nowhere."""
        for child in (self.path / ".git" / "objects").iterdir():
            if child.is_dir():
                shutil.rmtree(child)
            else:
                child.unlink()


@pytest.fixture(autouse=True)
def isolated_git_config(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Keep the user's git config (hooksPath, templates, signing) out of tests."""
    home = tmp_path_factory.mktemp("home")
    global_config = home / ".gitconfig"
    global_config.write_text("", encoding="utf-8")

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


@pytest.fixture
def git() -> Callable[..., str]:
    """Run git in a directory, raising on failure."""
    return _git


@pytest.fixture
def make_clone(tmp_path: Path) -> Callable[..., Clone]:
    """Factory for `<fleet>/<name>` clones of a fresh bare remote.

    The clone tracks origin/main and is in sync with it. Use `seed` to push
    commits the clone has not fetched yet.
    """

    def factory(name: str = "repo", *, parent: Path | None = None) -> Clone:
        parent = parent or tmp_path / "fleet"
        parent.mkdir(parents=True, exist_ok=True)

        remote = tmp_path / "remotes" / f"{name}.git"
        seed = tmp_path / "seeds" / name
        remote.parent.mkdir(parents=True, exist_ok=True)
        seed.mkdir(parents=True)

        _git(tmp_path, "init", "--bare", "--initial-branch=main", str(remote))
        _git(seed, "init", "--initial-branch=main")
        (seed / "README.md").write_text("hello\n", encoding="utf-8")
        _git(seed, "add", "README.md")
        _git(seed, "commit", "-m", "init")
        _git(seed, "remote", "add", "origin", str(remote))
        _git(seed, "push", "-u", "origin", "main")

        path = parent / name
        _git(parent, "clone", str(remote), str(path))
        return Clone(path=path, remote=remote, seed=seed)

    return factory
