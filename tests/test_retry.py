"""Tests for the retry decorator."""
from unittest.mock import Mock, patch

import pytest

from imdbwagon.utils.retry import retry_with_exponential_backoff


@patch("imdbwagon.utils.retry.time.sleep")
def test_retries_until_success(mock_sleep: Mock) -> None:
    func = Mock(side_effect=[ConnectionError("down"), ConnectionError("down"), "ok"])
    func.__name__ = "fetch"

    wrapped = retry_with_exponential_backoff(max_retries=3, base_delay=1.0, exceptions=ConnectionError)(func)

    assert wrapped() == "ok"
    assert func.call_count == 3
    assert [call.args[0] for call in mock_sleep.call_args_list] == [1.0, 2.0]


@patch("imdbwagon.utils.retry.time.sleep")
def test_raises_after_max_retries(mock_sleep: Mock) -> None:
    func = Mock(side_effect=TimeoutError("slow"))
    func.__name__ = "fetch"

    wrapped = retry_with_exponential_backoff(max_retries=2, base_delay=10.0, max_delay=15.0, exceptions=TimeoutError)(
        func
    )

    with pytest.raises(TimeoutError):
        wrapped()

    assert func.call_count == 3
    assert [call.args[0] for call in mock_sleep.call_args_list] == [10.0, 15.0]


@patch("imdbwagon.utils.retry.time.sleep")
def test_other_exceptions_are_not_retried(mock_sleep: Mock) -> None:
    func = Mock(side_effect=ValueError("bad"))
    func.__name__ = "fetch"

    wrapped = retry_with_exponential_backoff(exceptions=ConnectionError)(func)

    with pytest.raises(ValueError):
        wrapped()

    assert func.call_count == 1
    mock_sleep.assert_not_called()
