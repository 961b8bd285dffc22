"""
Execution constants for the patient fetch and assessment submission.

Connection settings (base URL, API key, retry budget) come from
config/api_config.py; this module holds the fixed protocol parameters so
that config is separated from logic.
"""

from config.api_config import (
    API_KEY_HEADER,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY_MS,
    PATIENTS_PATH,
    SUBMISSION_PATH,
    ApiSettings,
    load_api_settings,
)

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

# Maximum page size the patients endpoint accepts
PAGE_LIMIT: int = 20
FIRST_PAGE: int = 1

# Pause between successful page requests to avoid self-induced rate limiting
PAGE_PACING_DELAY_MS: int = 200

# ---------------------------------------------------------------------------
# Retry / backoff
# ---------------------------------------------------------------------------

# Rate limiting and server-side failures; everything else is fatal
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

# Upper bound of the uniform random addend on each backoff delay
MAX_JITTER_MS: int = 1000

# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

REQUEST_TIMEOUT_SECONDS: int = 30

__all__ = [
    "API_KEY_HEADER",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY_MS",
    "FIRST_PAGE",
    "MAX_JITTER_MS",
    "PAGE_LIMIT",
    "PAGE_PACING_DELAY_MS",
    "PATIENTS_PATH",
    "REQUEST_TIMEOUT_SECONDS",
    "RETRYABLE_STATUS_CODES",
    "SUBMISSION_PATH",
    "ApiSettings",
    "load_api_settings",
]
