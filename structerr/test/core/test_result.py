"""Tests for structerr.core.result module."""

import pytest

from structerr.core.result import Err, Ok, Result


class TestResult:
    """Tests for Ok / Err and pattern matching."""

    def test_ok_value(self) -> None:
        assert Ok(42).value == 42

    def test_err_error(self) -> None:
        assert Err("bad").error == "bad"

    def test_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(1)

    def test_match(self) -> None:
        def describe(result: Result[int, str]) -> str:
            match result:
                case Ok(value):
                    return f"ok {value}"
                case Err(error):
                    return f"err {error}"

        assert describe(Ok(1)) == "ok 1"
        assert describe(Err("x")) == "err x"
