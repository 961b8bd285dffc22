"""
Per-dimension clinical risk scoring for a single patient record.

Every function here is pure and total: malformed or missing input never
raises, it yields a score of 0 with ``is_valid=False``.  Point tables:

Blood pressure (first match wins):
  - Stage 2   systolic >= 140 OR diastolic >= 90        → 3
  - Stage 1   systolic 130-139 OR diastolic 80-89       → 2
  - Elevated  systolic 120-129 AND diastolic < 80       → 1
  - Normal    anything else                             → 0

Temperature (°F):
  - >= 101.0       → 2, fever
  - 99.6 - <101    → 1, fever
  - otherwise      → 0

Age:
  - > 65    → 2
  - 40-65   → 1
  - < 40    → 0
"""

from __future__ import annotations

import math
import re
from typing import Any, NamedTuple

from .config import (
    AGE_FIELD,
    AGE_MIDDLE_FROM,
    AGE_POINTS,
    AGE_SENIOR_ABOVE,
    AGE_SENTINELS,
    BP_ELEVATED_DIASTOLIC_BELOW,
    BP_ELEVATED_SYSTOLIC,
    BP_FIELD,
    BP_POINTS,
    BP_SENTINELS,
    BP_STAGE_1_DIASTOLIC,
    BP_STAGE_1_SYSTOLIC,
    BP_STAGE_2_DIASTOLIC,
    BP_STAGE_2_SYSTOLIC,
    HIGH_FEVER_THRESHOLD,
    LOW_FEVER_THRESHOLD,
    PATIENT_ID_FIELD,
    TEMP_FIELD,
    TEMP_POINTS,
    TEMP_SENTINELS,
)


class DimensionScore(NamedTuple):
    score: int
    is_valid: bool


class TemperatureScore(NamedTuple):
    score: int
    is_valid: bool
    has_fever: bool


class RiskScore(NamedTuple):
    """Composite score for one record; one per record per classification pass."""

    patient_id: Any
    bp_score: int
    temp_score: int
    age_score: int
    total_score: int
    has_fever: bool
    has_data_quality_issue: bool


_INVALID = DimensionScore(0, False)
_INVALID_TEMP = TemperatureScore(0, False, False)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

# Leading numeric prefix of a string: optional sign, then "Infinity" or a
# decimal with optional exponent.  Trailing text such as units is ignored.
_NUMERIC_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


def parse_number(value: Any) -> float | None:
    """
    Coerce a JSON scalar to a float, or ``None`` if it is not numeric.

    Strings are read by their leading numeric prefix after trimming, so
    "100.2F", "150mmHg" and "45 years" parse as 100.2, 150 and 45.  A
    string with no such prefix ("abc", "inf", "nan") is not numeric, and
    digit separators are not understood ("1_01" reads as 1).  Booleans and
    NaN are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value.strip())
        if match is None:
            return None
        number = float(match.group(0))
    else:
        return None

    if math.isnan(number):
        return None
    return number


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# ---------------------------------------------------------------------------
# Dimension scores
# ---------------------------------------------------------------------------

def score_blood_pressure(blood_pressure: Any) -> DimensionScore:
    """
    Score a "systolic/diastolic" reading.

    Invalid when absent, not a string, blank, a sentinel ("N/A",
    "INVALID"), not exactly two ``/``-separated parts, either part blank
    (e.g. "150/" or "/90"), or either part non-numeric.

    Args:
        blood_pressure: Raw ``blood_pressure`` field.

    Returns:
        DimensionScore with 0-3 points.
    """
    if not isinstance(blood_pressure, str):
        return _INVALID

    trimmed = blood_pressure.strip()
    if not trimmed or trimmed in BP_SENTINELS:
        return _INVALID

    parts = trimmed.split("/")
    if len(parts) != 2:
        return _INVALID

    systolic_str, diastolic_str = (part.strip() for part in parts)
    if not systolic_str or not diastolic_str:
        return _INVALID

    systolic = parse_number(systolic_str)
    diastolic = parse_number(diastolic_str)
    if systolic is None or diastolic is None:
        return _INVALID

    if systolic >= BP_STAGE_2_SYSTOLIC or diastolic >= BP_STAGE_2_DIASTOLIC:
        return DimensionScore(BP_POINTS["stage_2"], True)

    if systolic >= BP_STAGE_1_SYSTOLIC or diastolic >= BP_STAGE_1_DIASTOLIC:
        return DimensionScore(BP_POINTS["stage_1"], True)

    # Elevated needs BOTH conditions, unlike the OR of the stages above
    if systolic >= BP_ELEVATED_SYSTOLIC and diastolic < BP_ELEVATED_DIASTOLIC_BELOW:
        return DimensionScore(BP_POINTS["elevated"], True)

    return DimensionScore(BP_POINTS["normal"], True)


def score_temperature(temperature: Any) -> TemperatureScore:
    """
    Score a body temperature in °F and derive the fever flag.

    Sentinels ("N/A", "INVALID", "TEMP_ERROR") are matched case-insensitively.
    Any valid reading at or above 99.6 sets the fever flag.  The low-fever
    band is bounded below only, so a reading such as 100.95 that lies past
    the nominal 100.9 upper limit but under 101 is deliberately a low fever
    (1 point) rather than scoring 0 without fever; every listed band edge
    scores as tabulated.

    Args:
        temperature: Raw ``temperature`` field (number or string).

    Returns:
        TemperatureScore with 0-2 points.
    """
    if _is_blank(temperature):
        return _INVALID_TEMP
    if isinstance(temperature, str) and temperature.strip().upper() in TEMP_SENTINELS:
        return _INVALID_TEMP

    temp = parse_number(temperature)
    if temp is None:
        return _INVALID_TEMP

    if temp >= HIGH_FEVER_THRESHOLD:
        return TemperatureScore(TEMP_POINTS["high_fever"], True, True)

    if temp >= LOW_FEVER_THRESHOLD:
        return TemperatureScore(TEMP_POINTS["low_fever"], True, True)

    return TemperatureScore(TEMP_POINTS["normal"], True, False)


def score_age(age: Any) -> DimensionScore:
    """
    Score patient age in years.

    Sentinels ("n/a", "unknown", "invalid") are matched case-insensitively;
    negative ages are invalid.

    Args:
        age: Raw ``age`` field (number or string).

    Returns:
        DimensionScore with 0-2 points.
    """
    if _is_blank(age):
        return _INVALID
    if isinstance(age, str) and age.strip().lower() in AGE_SENTINELS:
        return _INVALID

    years = parse_number(age)
    if years is None or years < 0:
        return _INVALID

    if years > AGE_SENIOR_ABOVE:
        return DimensionScore(AGE_POINTS["over_65"], True)

    if years >= AGE_MIDDLE_FROM:
        return DimensionScore(AGE_POINTS["40_to_65"], True)

    return DimensionScore(AGE_POINTS["under_40"], True)


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------

def calculate_risk_score(patient: dict) -> RiskScore:
    """
    Score all three dimensions of one record.

    Invalid dimensions contribute 0 to the total and set the data-quality
    flag; they never raise.

    Args:
        patient: Record dict with ``patient_id``, ``blood_pressure``,
                 ``temperature`` and ``age`` keys (any may be missing).

    Returns:
        RiskScore for the record.
    """
    bp = score_blood_pressure(patient.get(BP_FIELD))
    temp = score_temperature(patient.get(TEMP_FIELD))
    age = score_age(patient.get(AGE_FIELD))

    return RiskScore(
        patient_id=patient.get(PATIENT_ID_FIELD),
        bp_score=bp.score,
        temp_score=temp.score,
        age_score=age.score,
        total_score=bp.score + temp.score + age.score,
        has_fever=temp.has_fever,
        has_data_quality_issue=not (bp.is_valid and temp.is_valid and age.is_valid),
    )


def has_fever(patient: dict) -> bool:
    """Return True if the record's temperature is >= 99.6 °F."""
    return score_temperature(patient.get(TEMP_FIELD)).has_fever
