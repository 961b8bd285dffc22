"""
Shared pytest fixtures for the assessment client tests.

No test touches the network: page and submission transports are scripted
fakes, sleeps are recorded instead of slept, and the jitter source is fixed.
"""

from __future__ import annotations

import pytest
import requests

from config.api_config import ApiSettings


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def build_patient(
    patient_id: str = "DEMO001",
    blood_pressure="120/80",
    temperature=98.6,
    age=45,
    **extra,
) -> dict:
    """Build a single patient record as the patients endpoint returns it."""
    record = {
        "patient_id": patient_id,
        "name": f"Patient {patient_id}",
        "age": age,
        "gender": "F",
        "blood_pressure": blood_pressure,
        "temperature": temperature,
        "visit_date": "2024-01-15",
        "diagnosis": "Hypertension",
        "medications": "Lisinopril 10mg daily",
    }
    record.update(extra)
    return record


def build_page(
    records: list[dict],
    page: int = 1,
    has_next: bool = False,
    total_pages: int = 1,
    limit: int = 20,
) -> dict:
    """Build a raw /patients response body."""
    return {
        "data": records,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": len(records) * total_pages,
            "totalPages": total_pages,
            "hasNext": has_next,
            "hasPrevious": page > 1,
        },
        "metadata": {
            "timestamp": "2024-01-15T10:00:00Z",
            "version": "v1.0",
            "requestId": f"req-{page}",
        },
    }


def build_http_error(status: int, body: str = "") -> requests.HTTPError:
    """Build the HTTPError ``raise_for_status()`` would raise for ``status``."""
    response = requests.Response()
    response.status_code = status
    response._content = body.encode("utf-8")
    return requests.HTTPError(f"{status} Error for url", response=response)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

class ScriptedPageSource:
    """
    Page transport returning (or raising) scripted outcomes in order.

    Records every requested page number in ``calls``.
    """

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[int] = []

    def __call__(self, page: int) -> dict:
        self.calls.append(page)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    """Stand-in for time.sleep that records requested durations (seconds)."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FixedRandom:
    """Random source whose ``random()`` always returns ``value``."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value


class RecordingReporter:
    """Reporter collecting messages per level instead of printing."""

    def __init__(self):
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings():
    """Settings with a small retry budget and 1 s base delay."""
    return ApiSettings(
        base_url="https://api.example.test/api",
        api_key="test-key",
        max_retries=3,
        retry_delay_ms=1000,
    )


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def fixed_rng():
    return FixedRandom(0.5)


@pytest.fixture
def patient():
    """Builder for patient records."""
    return build_patient


@pytest.fixture
def page():
    """Builder for /patients response bodies."""
    return build_page


@pytest.fixture
def http_error():
    """Builder for status-coded requests.HTTPError instances."""
    return build_http_error


@pytest.fixture
def page_source():
    """Factory for ScriptedPageSource."""
    return ScriptedPageSource
