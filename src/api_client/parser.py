"""
Page payload parsing and submission payload validation.

No I/O occurs here; all functions are pure transformations of dicts to
support easy unit testing.
"""

from __future__ import annotations

# Keys of the submission body, in the order the endpoint documents them
SUBMISSION_KEYS: tuple[str, ...] = (
    "high_risk_patients",
    "fever_patients",
    "data_quality_issues",
)


def parse_patients_page(response_json: dict) -> tuple[list[dict], dict]:
    """
    Split a raw ``/patients`` response into its records and pagination block.

    Expected payload::

        {"data": [...], "pagination": {"page": 1, "limit": 20, "total": 50,
         "totalPages": 3, "hasNext": true, "hasPrevious": false},
         "metadata": {...}}

    Only ``data`` and ``pagination.hasNext`` are required; ``total`` and
    ``totalPages`` are informational.

    Args:
        response_json: JSON-decoded response body.

    Returns:
        Tuple of (records: list[dict], pagination: dict).

    Raises:
        ValueError: If ``data`` is not a list or ``pagination.hasNext`` is
                    missing.
    """
    if not isinstance(response_json, dict):
        raise ValueError(
            f"Unrecognized patients page format: expected an object, "
            f"got {type(response_json).__name__}."
        )

    records = response_json.get("data")
    if not isinstance(records, list):
        raise ValueError(
            "Unrecognized patients page format: 'data' must be a list. "
            f"Top-level keys present: {list(response_json.keys())}"
        )

    pagination = response_json.get("pagination")
    if not isinstance(pagination, dict) or "hasNext" not in pagination:
        raise ValueError(
            "Unrecognized patients page format: 'pagination.hasNext' is missing."
        )

    return records, pagination


def validate_submission(submission: dict) -> list[str]:
    """
    Check a submission body against the endpoint's input contract.

    Each of the three lists must be present, be a list, be non-empty, and
    contain only strings.  The scoring pipeline itself never rejects empty
    lists; this check belongs to callers posting a hand-built or
    pipeline-produced payload.

    Args:
        submission: Dict with the keys in :data:`SUBMISSION_KEYS`.

    Returns:
        List of problem descriptions (empty when the payload is valid).
    """
    problems: list[str] = []

    for key in SUBMISSION_KEYS:
        if key not in submission:
            problems.append(f"{key} is missing")
            continue

        value = submission[key]
        if not isinstance(value, list):
            problems.append(f"{key} must be a list")
            continue

        if not value:
            problems.append(f"{key} must not be empty")

        if any(not isinstance(item, str) for item in value):
            problems.append(f"Each {key} item must be a string")

    return problems


def summarize_assessment_response(response_json: dict) -> list[str]:
    """
    Render the interesting fields of a submission response as text lines.

    The response is otherwise treated as opaque; missing fields are skipped
    rather than raising.

    Args:
        response_json: JSON-decoded body returned by the submission endpoint.

    Returns:
        List of display lines.
    """
    lines: list[str] = []
    if "message" in response_json:
        lines.append(f"Message: {response_json['message']}")

    results = response_json.get("results") or {}
    if "score" in results:
        lines.append(
            f"Score: {results['score']} ({results.get('percentage', '?')}%), "
            f"status {results.get('status', 'unknown')}"
        )

    for category, detail in (results.get("breakdown") or {}).items():
        lines.append(
            f"  {category:<13} {detail.get('score', '?')}/{detail.get('max', '?')} "
            f"(matches {detail.get('matches', '?')}, "
            f"submitted {detail.get('submitted', '?')}, "
            f"correct {detail.get('correct', '?')})"
        )

    feedback = results.get("feedback") or {}
    for strength in feedback.get("strengths", []):
        lines.append(f"  + {strength}")
    for issue in feedback.get("issues", []):
        lines.append(f"  - {issue}")

    if "remaining_attempts" in results:
        lines.append(
            f"Attempt {results.get('attempt_number', '?')}, "
            f"{results['remaining_attempts']} remaining"
        )

    return lines
