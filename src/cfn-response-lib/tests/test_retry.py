"""
tests/test_retry.py — with_retries fixed-delay wrapper.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from cfn_response.models import RetryPolicy
from cfn_response.retry import with_retries


def test_returns_first_success(sleep: Any) -> None:
    fn = MagicMock(return_value="ok")

    assert with_retries(RetryPolicy(), fn, sleep=sleep)("a", b=1) == "ok"
    fn.assert_called_once_with("a", b=1)
    assert sleep.delays == []


def test_retries_until_success(sleep: Any) -> None:
    fn = MagicMock(side_effect=[OSError("1"), OSError("2"), "ok"])

    assert with_retries(RetryPolicy(attempts=5, delay_seconds=2), fn, sleep=sleep)() == "ok"
    assert fn.call_count == 3
    assert sleep.delays == [2, 2]


def test_reraises_last_error(sleep: Any) -> None:
    errors = [OSError("first"), OSError("second"), OSError("last")]
    fn = MagicMock(side_effect=errors)

    with pytest.raises(OSError) as exc_info:
        with_retries(RetryPolicy(attempts=3), fn, sleep=sleep)()

    assert exc_info.value is errors[-1]
    assert fn.call_count == 3
    assert sleep.delays == [1.0, 1.0]


def test_single_attempt_never_sleeps(sleep: Any) -> None:
    fn = MagicMock(side_effect=OSError("nope"))

    with pytest.raises(OSError):
        with_retries(RetryPolicy(attempts=1), fn, sleep=sleep)()

    assert fn.call_count == 1
    assert sleep.delays == []


def test_wrapper_is_reusable(sleep: Any) -> None:
    fn = MagicMock(side_effect=[OSError("x"), "a", "b"])
    wrapped = with_retries(RetryPolicy(attempts=2), fn, sleep=sleep)

    assert wrapped() == "a"
    assert wrapped() == "b"
    assert sleep.delays == [1.0]
