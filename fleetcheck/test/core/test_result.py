"""Tests for fleetcheck.core.result module."""

import pytest

from fleetcheck.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    """Tests for Ok type."""

    def test_unwrap(self) -> None:
        assert Ok(3).unwrap() == 3

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(3).unwrap_or(0) == 3

    def test_unwrap_err_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap_err on Ok"):
            Ok(3).unwrap_err()

    def test_map(self) -> None:
        assert Ok(2).map(lambda x: x + 1) == Ok(3)

    def test_map_err_is_noop(self) -> None:
        assert Ok(2).map_err(lambda e: f"wrapped: {e}") == Ok(2)

    def test_flat_map_chains(self) -> None:
        result: Result[int, str] = Ok(2)
        assert result.flat_map(lambda x: Err(f"bad {x}")) == Err("bad 2")


class TestErr:
    """Tests for Err type."""

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_unwrap_err(self) -> None:
        assert Err("boom").unwrap_err() == "boom"

    def test_map_is_noop(self) -> None:
        assert Err("boom").map(lambda x: x + 1) == Err("boom")

    def test_map_err_transforms_error(self) -> None:
        assert Err(128).map_err(lambda code: f"exit {code}") == Err("exit 128")


class TestPatternMatching:
    """Results are consumed with match statements throughout the audit."""

    def test_match_ok(self) -> None:
        match Ok(1):
            case Ok(value):
                assert value == 1
            case Err(_):
                pytest.fail("expected Ok")

    def test_match_err(self) -> None:
        match Err("x"):
            case Ok(_):
                pytest.fail("expected Err")
            case Err(error):
                assert error == "x"


class TestTypeGuards:
    def test_is_ok(self) -> None:
        assert is_ok(Ok(1)) is True
        assert is_ok(Err(1)) is False

    def test_is_err(self) -> None:
        assert is_err(Err(1)) is True
        assert is_err(Ok(1)) is False
