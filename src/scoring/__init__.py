"""
src/scoring — Risk scoring and alert classification for patient records.

Module layout
-------------
config.py    — Clinical thresholds, point values, sentinel tokens
risk.py      — Per-dimension scores and the composite RiskScore (pure)
alerts.py    — Alert-list selection, risk-score table, summary counts
pipeline.py  — Fetch → score → classify → submit orchestration and CLI

Public interface
----------------
Run a full assessment:
    process_and_submit(settings)

Run individual stages:
    process_records(settings)
    submit_assessment(settings, alert_lists)

Score records without any I/O:
    calculate_risk_score(patient)
    classify_patients(patients)
"""

from .pipeline import process_and_submit, process_records, submit_assessment

from .risk import (
    DimensionScore,
    RiskScore,
    TemperatureScore,
    calculate_risk_score,
    has_fever,
    score_age,
    score_blood_pressure,
    score_temperature,
)
from .alerts import (
    build_alert_lists,
    build_score_table,
    classify_patients,
    score_patients,
    summarize_scores,
)

__all__ = [
    # Pipeline orchestration
    "process_and_submit",
    "process_records",
    "submit_assessment",
    # Dimension scoring
    "score_blood_pressure",
    "score_temperature",
    "score_age",
    "calculate_risk_score",
    "has_fever",
    "DimensionScore",
    "TemperatureScore",
    "RiskScore",
    # Classification
    "score_patients",
    "build_score_table",
    "build_alert_lists",
    "classify_patients",
    "summarize_scores",
]
