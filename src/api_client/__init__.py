"""
src/api_client — HTTP layer for the patient risk assessment.

Module layout
-------------
config.py     — page size, pacing delay, retryable statuses, timeouts
reporting.py  — console progress reporter (injectable for tests)
parser.py     — page payload parsing, submission validation, response summary
retry.py      — status classification, exponential backoff, per-page retry
executor.py   — request construction, single page / submission requests
batch.py      — paginated fetch of the full patient collection

Public interface
----------------
Fetch every patient record:
    fetch_all_patients(settings)

Submit alert lists (single attempt, never retried):
    execute_submission(settings, submission)

Check a submission body before posting:
    validate_submission(submission)
"""

from .batch import fetch_all_patients
from .executor import execute_page_request, execute_submission
from .parser import (
    parse_patients_page,
    summarize_assessment_response,
    validate_submission,
)
from .reporting import ConsoleReporter
from .retry import HttpStatusCategory, fetch_page_with_retry

__all__ = [
    # Fetch
    "fetch_all_patients",
    "fetch_page_with_retry",
    "execute_page_request",
    "HttpStatusCategory",
    # Submission
    "execute_submission",
    "validate_submission",
    # Parsing / output
    "parse_patients_page",
    "summarize_assessment_response",
    "ConsoleReporter",
]
