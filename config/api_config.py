"""
Assessment API endpoint, authentication, and retry configuration.

This is the AUTHORITATIVE source for API configuration.
src/api_client/config.py imports from here; do not maintain parallel copies.

BEFORE RUNNING AN ASSESSMENT:
1. Set API_KEY to the key issued for the assessment API.
2. Optionally override API_BASE_URL, MAX_RETRIES and RETRY_DELAY.

ENVIRONMENT VARIABLES:
    API_BASE_URL   — Base URL of the patient / submission API
    API_KEY        — Sent as the x-api-key header on every request (required)
    MAX_RETRIES    — Retries per page on transient failures (default 10)
    RETRY_DELAY    — Base backoff delay in milliseconds (default 1000)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

BASE_URL_ENV = "API_BASE_URL"
API_KEY_ENV = "API_KEY"
MAX_RETRIES_ENV = "MAX_RETRIES"
RETRY_DELAY_ENV = "RETRY_DELAY"

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "https://assessment.ksensetech.com/api"
DEFAULT_MAX_RETRIES = 10
DEFAULT_RETRY_DELAY_MS = 1000

# Header carrying the API key on both the patients and submission endpoints
API_KEY_HEADER = "x-api-key"

# ---------------------------------------------------------------------------
# Endpoint paths (appended to the base URL)
# ---------------------------------------------------------------------------

PATIENTS_PATH = "/patients"
SUBMISSION_PATH = "/submit-assessment"


@dataclass(frozen=True)
class ApiSettings:
    """Immutable connection and retry settings, read once at startup."""

    base_url: str
    api_key: str
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(
            f"'{name}' must be an integer, got '{raw}'."
        ) from None
    if value < 0:
        raise ValueError(f"'{name}' must not be negative, got {value}.")
    return value


def load_api_settings(environ: Mapping[str, str] | None = None) -> ApiSettings:
    """
    Build :class:`ApiSettings` from environment variables.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``.

    Returns:
        Frozen settings object.

    Raises:
        ValueError: If the API key is unset, or a numeric setting is not a
                    non-negative integer.
    """
    if environ is None:
        environ = os.environ

    api_key = (environ.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise ValueError(
            f"API key not found. Set the '{API_KEY_ENV}' environment variable "
            f"before running the assessment."
        )

    base_url = (environ.get(BASE_URL_ENV) or "").strip() or DEFAULT_BASE_URL

    return ApiSettings(
        base_url=base_url.rstrip("/"),
        api_key=api_key,
        max_retries=_read_int(environ, MAX_RETRIES_ENV, DEFAULT_MAX_RETRIES),
        retry_delay_ms=_read_int(environ, RETRY_DELAY_ENV, DEFAULT_RETRY_DELAY_MS),
    )
