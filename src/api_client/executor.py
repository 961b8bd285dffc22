"""
Request construction and single-shot HTTP execution.

Each function here issues at most one request and raises the ``requests``
exception unchanged on failure; retry decisions live in retry.py and the
page loop in batch.py.
"""

from __future__ import annotations

import requests

from .config import (
    API_KEY_HEADER,
    PAGE_LIMIT,
    PATIENTS_PATH,
    REQUEST_TIMEOUT_SECONDS,
    SUBMISSION_PATH,
    ApiSettings,
)


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------

def build_request_headers(settings: ApiSettings, json_body: bool = False) -> dict:
    """
    Construct HTTP authentication headers for an API call.

    Args:
        settings: Connection settings holding the API key.
        json_body: Add ``Content-Type: application/json`` (POST requests).

    Returns:
        Dict of HTTP header name → value pairs.
    """
    headers = {API_KEY_HEADER: settings.api_key}
    if json_body:
        headers["Content-Type"] = "application/json"
    return headers


def build_endpoint_url(settings: ApiSettings, path: str) -> str:
    """Join the configured base URL and an endpoint path."""
    return f"{settings.base_url.rstrip('/')}/{path.lstrip('/')}"


# ---------------------------------------------------------------------------
# API call execution
# ---------------------------------------------------------------------------

def execute_page_request(
    settings: ApiSettings,
    page: int,
    limit: int = PAGE_LIMIT,
) -> dict:
    """
    Request one page of patient records.

    Args:
        settings: Connection settings.
        page: 1-based page number.
        limit: Records per page.

    Returns:
        JSON-decoded response body.

    Raises:
        requests.HTTPError: On non-2xx HTTP status (retry decided by caller).
        requests.RequestException: On connection failure or timeout.
    """
    response = requests.get(
        build_endpoint_url(settings, PATIENTS_PATH),
        headers=build_request_headers(settings),
        params={"page": page, "limit": limit},
        timeout=REQUEST_TIMEOUT_SECONDS,
    )
    response.raise_for_status()  # raises HTTPError for 4xx/5xx
    return response.json()


def execute_submission(settings: ApiSettings, submission: dict) -> dict:
    """
    POST an alert-list submission and return the response body verbatim.

    Args:
        settings: Connection settings.
        submission: Dict with ``high_risk_patients``, ``fever_patients`` and
                    ``data_quality_issues`` lists.

    Returns:
        JSON-decoded response body.

    Raises:
        requests.HTTPError: On non-2xx HTTP status.
        requests.RequestException: On connection failure or timeout.
    """
    response = requests.post(
        build_endpoint_url(settings, SUBMISSION_PATH),
        headers=build_request_headers(settings, json_body=True),
        json=submission,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    return response.json()
