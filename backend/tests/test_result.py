import pytest

from exceptions import UserNotFoundError
from utils.result import Result


def test_ok():
    result = Result.ok(3)

    assert result.is_ok and not result.is_err
    assert result.value == 3
    assert result.unwrap_or(0) == 3
    assert result.map(lambda v: v * 2).value == 6
    with pytest.raises(ValueError):
        result.error


def test_err_with_exception_reraises_it():
    error = UserNotFoundError(4)
    result = Result.err(error)

    assert result.is_err
    assert result.error is error
    assert result.unwrap_or("fallback") == "fallback"
    assert result.map(lambda v: v * 2).error is error
    with pytest.raises(UserNotFoundError):
        result.unwrap()
    with pytest.raises(ValueError):
        result.value


def test_err_with_plain_value_unwraps_to_value_error():
    with pytest.raises(ValueError, match="boom"):
        Result.err("boom").unwrap()
