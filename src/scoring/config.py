"""
Scoring-layer configuration: clinical thresholds, point values, sentinel
tokens, and alert cut-offs.

All constants used by risk.py and alerts.py are centralized here so that
configuration is separated from logic.
"""

# ---------------------------------------------------------------------------
# Blood pressure (mmHg)
# ---------------------------------------------------------------------------

# Tiers are checked from the top, so each only needs its lower bound.
# Stage 2: systolic >= 140 OR diastolic >= 90
BP_STAGE_2_SYSTOLIC = 140
BP_STAGE_2_DIASTOLIC = 90
# Stage 1: systolic 130-139 OR diastolic 80-89
BP_STAGE_1_SYSTOLIC = 130
BP_STAGE_1_DIASTOLIC = 80
# Elevated: systolic 120-129 AND diastolic < 80
BP_ELEVATED_SYSTOLIC = 120
BP_ELEVATED_DIASTOLIC_BELOW = 80

BP_POINTS = {"normal": 0, "elevated": 1, "stage_1": 2, "stage_2": 3}

# Compared case-sensitively after trimming
BP_SENTINELS: frozenset[str] = frozenset({"N/A", "INVALID"})

# ---------------------------------------------------------------------------
# Temperature (°F)
# ---------------------------------------------------------------------------

HIGH_FEVER_THRESHOLD = 101.0
# Also the fever flag cut-off
LOW_FEVER_THRESHOLD = 99.6

TEMP_POINTS = {"normal": 0, "low_fever": 1, "high_fever": 2}

# Compared upper-cased after trimming
TEMP_SENTINELS: frozenset[str] = frozenset({"N/A", "INVALID", "TEMP_ERROR"})

# ---------------------------------------------------------------------------
# Age (years)
# ---------------------------------------------------------------------------

AGE_SENIOR_ABOVE = 65
AGE_MIDDLE_FROM = 40

AGE_POINTS = {"under_40": 0, "40_to_65": 1, "over_65": 2}

# Compared lower-cased after trimming
AGE_SENTINELS: frozenset[str] = frozenset({"n/a", "unknown", "invalid"})

# ---------------------------------------------------------------------------
# Alert lists
# ---------------------------------------------------------------------------

HIGH_RISK_THRESHOLD = 4

# Record field names as delivered by the patients endpoint
PATIENT_ID_FIELD = "patient_id"
BP_FIELD = "blood_pressure"
TEMP_FIELD = "temperature"
AGE_FIELD = "age"

RISK_SCORE_COLUMNS: list[str] = [
    "patient_id",
    "bp_score",
    "temp_score",
    "age_score",
    "total_score",
    "has_fever",
    "has_data_quality_issue",
]
