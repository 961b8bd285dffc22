"""
HTTP error classification, exponential backoff, and per-page retry logic.

The backoff schedule for retry ``n`` (0-based) of a page is::

    retry_delay_ms * 2**n + uniform jitter in [0, MAX_JITTER_MS)

Only rate-limit and server-side statuses are retried.  Any other failure
propagates unchanged on the first occurrence.
"""

from __future__ import annotations

import random
import time
from typing import Callable

import requests

from .config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY_MS,
    MAX_JITTER_MS,
    RETRYABLE_STATUS_CODES,
)
from .reporting import DEFAULT_REPORTER


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------

class HttpStatusCategory:
    """
    Status-code classification for failed page requests.

    Transient statuses (rate limiting, server errors) are retried with
    backoff; every other status, and errors that carry no HTTP response at
    all, abort the fetch immediately.
    """

    RETRIABLE: frozenset[int] = RETRYABLE_STATUS_CODES

    @staticmethod
    def status_of(error: BaseException) -> int | None:
        """
        Return the HTTP status attached to a ``requests`` exception.

        ``requests.Response`` is falsy for 4xx/5xx, so the response is
        compared against ``None`` rather than tested for truthiness.
        """
        response = getattr(error, "response", None)
        if response is None:
            return None
        return getattr(response, "status_code", None)

    @classmethod
    def is_retryable(cls, error: BaseException) -> bool:
        return cls.status_of(error) in cls.RETRIABLE


# ---------------------------------------------------------------------------
# Backoff helpers
# ---------------------------------------------------------------------------

def exponential_backoff(
    retry_count: int,
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS,
    rng: random.Random | None = None,
    max_jitter_ms: int = MAX_JITTER_MS,
) -> float:
    """
    Return the wait in milliseconds before retry number ``retry_count``.

    Args:
        retry_count: Retries already made for this page (0 for the first).
        retry_delay_ms: Base delay.
        rng: Random source for the jitter; a fresh ``random.Random`` if None.
        max_jitter_ms: Exclusive upper bound of the jitter.

    Returns:
        Delay in milliseconds.
    """
    rng = rng or random.Random()
    return retry_delay_ms * (2 ** retry_count) + rng.random() * max_jitter_ms


def should_retry(
    error: BaseException,
    retry_count: int,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> bool:
    """
    Decide whether a failed page request should be retried.

    Args:
        error: Exception raised by the page request.
        retry_count: Retries already made for this page.
        max_retries: Retry budget per page.

    Returns:
        ``True`` if the status is transient and the budget is not exhausted.
    """
    if retry_count >= max_retries:
        return False
    return HttpStatusCategory.is_retryable(error)


# ---------------------------------------------------------------------------
# Main retry wrapper
# ---------------------------------------------------------------------------

def fetch_page_with_retry(
    page: int,
    fetch_page: Callable[[int], dict],
    max_retries: int = DEFAULT_MAX_RETRIES,
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS,
    sleep: Callable[[float], None] = time.sleep,
    rng: random.Random | None = None,
    reporter=DEFAULT_REPORTER,
) -> dict:
    """
    Request one page, retrying transient failures with exponential backoff.

    The retry counter starts at zero for every call, so each page gets its
    own budget.  At most ``1 + max_retries`` requests are made.

    Args:
        page: 1-based page number.
        fetch_page: Callable issuing a single request for a page number and
                    returning the decoded body; raises on failure.
        max_retries: Retry budget for this page.
        retry_delay_ms: Base backoff delay.
        sleep: Blocking sleep taking seconds.
        rng: Random source for the backoff jitter.
        reporter: Progress reporter.

    Returns:
        The decoded page body from the first successful request.

    Raises:
        requests.RequestException: The original error, unchanged, when it is
            not retryable or the retry budget is exhausted.
    """
    rng = rng or random.Random()
    retry_count = 0

    while True:
        try:
            return fetch_page(page)
        except requests.RequestException as exc:
            status = HttpStatusCategory.status_of(exc)

            if not should_retry(exc, retry_count, max_retries):
                reporter.error(
                    f"Failed to fetch patients page {page} after "
                    f"{retry_count} retries (status {status}): {exc}"
                )
                raise

            delay_ms = exponential_backoff(retry_count, retry_delay_ms, rng)
            reporter.warning(
                f"Request failed with status {status}, retrying in "
                f"{round(delay_ms)}ms (attempt {retry_count + 1}/{max_retries})"
            )
            sleep(delay_ms / 1000)
            retry_count += 1
