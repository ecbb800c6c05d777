from __future__ import annotations

import httpx
import pytest

from newsnexus.utils import retry
from newsnexus.utils.retry import is_retryable_status, with_retry


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch) -> list[float]:
    delays: list[float] = []
    monkeypatch.setattr(retry.time, "sleep", delays.append)
    return delays


def _status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://example.com")
    return httpx.HTTPStatusError(
        "error", request=request, response=httpx.Response(code, request=request),
    )


def test_retryable_statuses() -> None:
    assert is_retryable_status(503)
    assert is_retryable_status(429)
    assert not is_retryable_status(404)


def test_retries_transient_errors_with_backoff(no_sleep) -> None:
    calls = iter([httpx.ConnectTimeout("slow"), httpx.ReadError("reset"), "ok"])

    def flaky() -> str:
        outcome = next(calls)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    assert with_retry(flaky, max_retries=3, base_delay=0.5) == "ok"
    assert no_sleep == [0.5, 1.0]


def test_client_errors_are_not_retried(no_sleep) -> None:
    def not_found() -> None:
        raise _status_error(404)

    with pytest.raises(httpx.HTTPStatusError):
        with_retry(not_found, max_retries=3)
    assert no_sleep == []


def test_gives_up_after_max_retries(no_sleep) -> None:
    def unavailable() -> None:
        raise _status_error(503)

    with pytest.raises(httpx.HTTPStatusError):
        with_retry(unavailable, max_retries=2)
    assert no_sleep == [1.0, 2.0]
