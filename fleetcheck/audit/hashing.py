"""Content digests for hook comparison (SHA-256)."""

from __future__ import annotations

import hashlib
from pathlib import Path

__all__ = ["DIGEST_SIZE", "digest", "digest_file", "equal"]

DIGEST_SIZE = hashlib.sha256().digest_size

_CHUNK_SIZE = 1024 * 1024


def digest(data: bytes) -> bytes:
    """SHA-256 of `data`. Empty input is valid."""
    return hashlib.sha256(data).digest()


def digest_file(path: Path) -> bytes:
    """SHA-256 of a file's contents, read in chunks.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.digest()


def equal(a: bytes, b: bytes) -> bool:
    """Byte-exact digest comparison."""
    return a == b
