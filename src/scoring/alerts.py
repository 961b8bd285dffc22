"""
Alert-list classification over a batch of patient records.

Records are scored in fetch order into RiskScore tuples; the three alert
lists are selected from those tuples and sorted ascending by patient ID.
A patient may appear in several lists.  Duplicate IDs delivered by the
source are kept as-is, and a record with no ID is listed as ``None``.

The same scores are also collected into a risk-score table (one row per
record) for the run summary.
"""

from __future__ import annotations

import pandas as pd

from .config import HIGH_RISK_THRESHOLD, RISK_SCORE_COLUMNS
from .risk import RiskScore, calculate_risk_score

# Column dtypes of the risk-score table; applied explicitly so an empty
# table still supports boolean masking.
_TABLE_DTYPES = {
    "bp_score": "int64",
    "temp_score": "int64",
    "age_score": "int64",
    "total_score": "int64",
    "has_fever": "bool",
    "has_data_quality_issue": "bool",
}


def score_patients(patients: list[dict]) -> list[RiskScore]:
    """Score every record, preserving fetch order."""
    return [calculate_risk_score(patient) for patient in patients]


def build_score_table(scores: list[RiskScore]) -> pd.DataFrame:
    """
    Collect risk scores in a DataFrame.

    Args:
        scores: Output of :func:`score_patients`.

    Returns:
        DataFrame with columns ``RISK_SCORE_COLUMNS``, one row per score,
        in input order.  Empty (with the same columns) for no scores.
    """
    rows = [score._asdict() for score in scores]
    table = pd.DataFrame(rows, columns=RISK_SCORE_COLUMNS)
    return table.astype(_TABLE_DTYPES)


def _id_sort_key(patient_id) -> tuple[bool, str]:
    # Missing IDs sort last
    return (patient_id is None, "" if patient_id is None else str(patient_id))


def _sorted_ids(scores: list[RiskScore], predicate) -> list:
    return sorted(
        (score.patient_id for score in scores if predicate(score)),
        key=_id_sort_key,
    )


def build_alert_lists(scores: list[RiskScore]) -> dict[str, list]:
    """
    Select the three alert lists from per-record risk scores.

    - high_risk_patients:  total_score >= 4
    - fever_patients:      has_fever
    - data_quality_issues: has_data_quality_issue

    Identifiers are passed through unchanged, so the result serializes to
    JSON exactly as the source delivered them.

    Args:
        scores: Output of :func:`score_patients`.

    Returns:
        Dict in submission-payload shape, each list ascending by ID.
    """
    return {
        "high_risk_patients": _sorted_ids(
            scores, lambda s: s.total_score >= HIGH_RISK_THRESHOLD
        ),
        "fever_patients": _sorted_ids(scores, lambda s: s.has_fever),
        "data_quality_issues": _sorted_ids(scores, lambda s: s.has_data_quality_issue),
    }


def classify_patients(patients: list[dict]) -> dict[str, list]:
    """Score ``patients`` and return the three sorted alert lists."""
    return build_alert_lists(score_patients(patients))


def summarize_scores(score_table: pd.DataFrame) -> dict:
    """
    Aggregate counts over a risk-score table.

    Returns:
        Dict with keys ``n_patients``, ``n_high_risk``, ``n_fever``,
        ``n_data_quality_issues``, ``mean_total_score`` (0.0 when empty).
    """
    n_patients = len(score_table)
    mean_total = float(score_table["total_score"].mean()) if n_patients else 0.0

    return {
        "n_patients": n_patients,
        "n_high_risk": int((score_table["total_score"] >= HIGH_RISK_THRESHOLD).sum()),
        "n_fever": int(score_table["has_fever"].sum()),
        "n_data_quality_issues": int(score_table["has_data_quality_issue"].sum()),
        "mean_total_score": round(mean_total, 2),
    }
