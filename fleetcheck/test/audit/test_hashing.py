"""Tests for fleetcheck.audit.hashing module."""

from __future__ import annotations

from pathlib import Path

import pytest

from fleetcheck.audit.hashing import DIGEST_SIZE, digest, digest_file, equal


class TestDigest:
    def test_deterministic(self) -> None:
        assert digest(b"#!/bin/sh\nexit 0\n") == digest(b"#!/bin/sh\nexit 0\n")

    def test_distinct_inputs(self) -> None:
        assert digest(b"exit 0") != digest(b"exit 1")

    def test_empty_input(self) -> None:
        result = digest(b"")
        assert len(result) == DIGEST_SIZE == 32
        assert result.hex() == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )


class TestDigestFile:
    def test_matches_in_memory_digest(self, tmp_path: Path) -> None:
        data = b"x" * (3 * 1024 * 1024 + 7)
        path = tmp_path / "pre-commit"
        path.write_bytes(data)

        assert digest_file(path) == digest(data)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            digest_file(tmp_path / "missing")


class TestEqual:
    def test_equal(self) -> None:
        assert equal(digest(b"a"), digest(b"a")) is True

    def test_not_equal(self) -> None:
        assert equal(digest(b"a"), digest(b"b")) is False
