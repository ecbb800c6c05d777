from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

import httpx

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (
    httpx.TimeoutException,
    httpx.ConnectError,
    httpx.RemoteProtocolError,
    httpx.ReadError,
)

T = TypeVar("T")


def is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def with_retry(
    fn: Callable[..., T],
    *args: object,
    max_retries: int = 3,
    base_delay: float = 1.0,
    **kwargs: object,
) -> T:
    """Call *fn*, retrying transient network failures with exponential backoff.

    Delays are ``base_delay * 2**attempt`` (1s, 2s, 4s, ...).  Timeouts,
    connection and protocol errors are retried, as are
    :class:`httpx.HTTPStatusError` responses for 429 and 5xx.  Anything
    else propagates on the first failure.
    """
    last_exc: Exception | None = None
    for attempt in range(max_retries + 1):
        try:
            return fn(*args, **kwargs)
        except TRANSIENT_ERRORS as exc:
            last_exc = exc
        except httpx.HTTPStatusError as exc:
            if not is_retryable_status(exc.response.status_code):
                raise
            last_exc = exc

        if attempt < max_retries:
            delay = base_delay * (2 ** attempt)
            logger.debug(
                "Retry %d/%d for %s in %.1fs: %s",
                attempt + 1, max_retries,
                getattr(fn, "__name__", "request"), delay, last_exc,
            )
            time.sleep(delay)

    logger.warning("Giving up after %d attempt(s): %s", max_retries + 1, last_exc)
    raise last_exc  # type: ignore[misc]
