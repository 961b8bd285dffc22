"""
Paginated patient retrieval.

Pages are requested strictly in order, one outstanding request at a time,
until the source reports ``hasNext == false``.  The result is all-or-nothing:
either every page's records concatenated in page order, or the first fatal
error propagated to the caller.
"""

from __future__ import annotations

import random
import time
from functools import partial
from typing import Callable

from .config import FIRST_PAGE, PAGE_LIMIT, PAGE_PACING_DELAY_MS, ApiSettings
from .executor import execute_page_request
from .parser import parse_patients_page
from .reporting import DEFAULT_REPORTER
from .retry import fetch_page_with_retry


def fetch_all_patients(
    settings: ApiSettings,
    fetch_page: Callable[[int], dict] | None = None,
    page_limit: int = PAGE_LIMIT,
    pacing_delay_ms: int = PAGE_PACING_DELAY_MS,
    sleep: Callable[[float], None] = time.sleep,
    rng: random.Random | None = None,
    reporter=DEFAULT_REPORTER,
) -> list[dict]:
    """
    Fetch every patient record by walking the paginated ``/patients`` endpoint.

    Workflow per page:
    - Request the page via :func:`retry.fetch_page_with_retry` (fresh retry
      budget of ``settings.max_retries`` per page).
    - Append the page's records to the accumulated list.
    - Stop if ``pagination.hasNext`` is false; otherwise pause
      ``pacing_delay_ms`` and request the next page.

    ``total`` and ``totalPages`` are only used in progress output.

    Args:
        settings: Connection and retry settings.
        fetch_page: Single-request page transport; defaults to
                    :func:`executor.execute_page_request` bound to ``settings``.
        page_limit: Records per page.
        pacing_delay_ms: Pause between successful page requests.
        sleep: Blocking sleep taking seconds (backoff and pacing).
        rng: Random source for backoff jitter.
        reporter: Progress reporter.

    Returns:
        All records, in page order.

    Raises:
        requests.RequestException: Fatal or retry-exhausted page failure.
        ValueError: A page body is not in the expected format.
    """
    if fetch_page is None:
        fetch_page = partial(execute_page_request, settings, limit=page_limit)
    rng = rng or random.Random()

    patients: list[dict] = []
    page = FIRST_PAGE

    reporter.info("Starting to fetch all patients...")

    while True:
        body = fetch_page_with_retry(
            page,
            fetch_page,
            max_retries=settings.max_retries,
            retry_delay_ms=settings.retry_delay_ms,
            sleep=sleep,
            rng=rng,
            reporter=reporter,
        )
        records, pagination = parse_patients_page(body)
        patients.extend(records)

        total_pages = pagination.get("totalPages", "?")
        reporter.info(
            f"  Fetched page {page}/{total_pages} "
            f"({len(patients)} patients so far)"
        )

        if not pagination["hasNext"]:
            break

        page += 1
        sleep(pacing_delay_ms / 1000)

    reporter.info(f"Finished fetching all patients. Total: {len(patients)}")
    return patients
