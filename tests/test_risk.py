"""
Unit tests for src/scoring/risk.py.

Covers the blood pressure, temperature and age point tables at every stated
boundary, the sentinel / malformed inputs that must score 0 and be flagged
invalid without raising, and the composite RiskScore arithmetic.
"""

from __future__ import annotations

import itertools

import pytest

from src.scoring.risk import (
    DimensionScore,
    RiskScore,
    TemperatureScore,
    calculate_risk_score,
    has_fever,
    parse_number,
    score_age,
    score_blood_pressure,
    score_temperature,
)


# ---------------------------------------------------------------------------
# Class: blood pressure
# ---------------------------------------------------------------------------

class TestBloodPressureScore:

    @pytest.mark.parametrize(
        "reading, expected",
        [
            ("110/70", 0),   # normal
            ("119/79", 0),
            ("120/79", 1),   # elevated
            ("129/79", 1),
            ("130/79", 2),   # stage 1 via systolic
            ("139/89", 2),
            ("120/80", 2),   # stage 1 via diastolic alone
            ("115/85", 2),
            ("140/80", 3),   # stage 2 via systolic
            ("120/90", 3),   # stage 2 via diastolic
            ("160/100", 3),
        ],
    )
    def test_stage_boundaries(self, reading, expected):
        result = score_blood_pressure(reading)
        assert result == DimensionScore(expected, True)

    def test_low_systolic_high_diastolic_uses_higher_stage(self):
        """Diastolic in the stage-1 band wins over a normal systolic."""
        assert score_blood_pressure("110/85").score == 2

    def test_elevated_requires_both_conditions(self):
        """Systolic 120-129 with diastolic >= 80 is stage 1, not elevated."""
        assert score_blood_pressure("125/80").score == 2
        assert score_blood_pressure("125/79").score == 1

    def test_whitespace_around_parts_is_accepted(self):
        assert score_blood_pressure("  135 / 85 ") == DimensionScore(2, True)

    def test_decimal_readings_are_accepted(self):
        assert score_blood_pressure("129.5/70") == DimensionScore(1, True)
        assert score_blood_pressure("139.5/70") == DimensionScore(2, True)

    @pytest.mark.parametrize(
        "reading",
        [
            None,
            "",
            "   ",
            "N/A",
            "INVALID",
            "150/",
            "/90",
            "150",
            "120/80/70",
            "abc/80",
            "120/xyz",
            150,
            ["120", "80"],
        ],
    )
    def test_invalid_readings_score_zero_and_flag(self, reading):
        assert score_blood_pressure(reading) == DimensionScore(0, False)

    def test_score_is_monotonic_in_both_components(self):
        """Raising systolic or diastolic never lowers the score."""
        systolics = [90, 119, 119.5, 120, 125, 129, 129.5, 130, 135, 139, 139.5, 140, 180]
        diastolics = [60, 79, 79.5, 80, 85, 89, 89.5, 90, 110]

        def score(s, d):
            return score_blood_pressure(f"{s}/{d}").score

        for s, d in itertools.product(systolics, diastolics):
            assert score(s, d) in {0, 1, 2, 3}
        for d in diastolics:
            scores = [score(s, d) for s in systolics]
            assert scores == sorted(scores), f"not monotonic in systolic at d={d}"
        for s in systolics:
            scores = [score(s, d) for d in diastolics]
            assert scores == sorted(scores), f"not monotonic in diastolic at s={s}"


# ---------------------------------------------------------------------------
# Class: temperature
# ---------------------------------------------------------------------------

class TestTemperatureScore:

    @pytest.mark.parametrize(
        "temperature, expected",
        [
            (98.6, TemperatureScore(0, True, False)),
            (99.5, TemperatureScore(0, True, False)),
            (99.6, TemperatureScore(1, True, True)),
            (100.0, TemperatureScore(1, True, True)),
            (100.9, TemperatureScore(1, True, True)),
            (101.0, TemperatureScore(2, True, True)),
            (103.2, TemperatureScore(2, True, True)),
        ],
    )
    def test_fever_boundaries(self, temperature, expected):
        assert score_temperature(temperature) == expected

    def test_reading_between_bands_is_low_fever(self):
        assert score_temperature(100.95) == TemperatureScore(1, True, True)

    def test_numeric_strings_are_parsed(self):
        assert score_temperature("101.5") == TemperatureScore(2, True, True)
        assert score_temperature(" 99.6 ") == TemperatureScore(1, True, True)

    def test_integer_temperature(self):
        assert score_temperature(101) == TemperatureScore(2, True, True)

    @pytest.mark.parametrize(
        "temperature",
        [None, "", "  ", "N/A", "n/a", "INVALID", "invalid", "TEMP_ERROR",
         " temp_error ", "hot", True, {"value": 99}],
    )
    def test_invalid_temperatures_score_zero_without_fever(self, temperature):
        assert score_temperature(temperature) == TemperatureScore(0, False, False)


# ---------------------------------------------------------------------------
# Class: age
# ---------------------------------------------------------------------------

class TestAgeScore:

    @pytest.mark.parametrize(
        "age, expected",
        [
            (0, 0),
            (25, 0),
            (39, 0),
            (40, 1),
            (52, 1),
            (65, 1),
            (66, 2),
            (90, 2),
        ],
    )
    def test_age_boundaries(self, age, expected):
        assert score_age(age) == DimensionScore(expected, True)

    def test_fractional_age_above_65(self):
        assert score_age(65.5) == DimensionScore(2, True)

    def test_numeric_string_age(self):
        assert score_age("70") == DimensionScore(2, True)

    @pytest.mark.parametrize(
        "age",
        [None, "", "n/a", "N/A", "unknown", "Unknown", " INVALID ",
         "fifty-three", -1, "-5", False],
    )
    def test_invalid_ages_score_zero_and_flag(self, age):
        assert score_age(age) == DimensionScore(0, False)


# ---------------------------------------------------------------------------
# Class: parse_number
# ---------------------------------------------------------------------------

class TestParseNumber:

    def test_accepts_ints_floats_and_numeric_strings(self):
        assert parse_number(42) == 42.0
        assert parse_number(98.6) == 98.6
        assert parse_number(" 120 ") == 120.0

    def test_rejects_booleans_nan_and_text(self):
        assert parse_number(True) is None
        assert parse_number(float("nan")) is None
        assert parse_number("nan") is None
        assert parse_number("abc12") is None
        assert parse_number(None) is None

    def test_huge_integer_does_not_raise(self):
        assert parse_number(10 ** 400) == float("inf")

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("100.2F", 100.2),
            ("150mmHg", 150.0),
            ("45 years", 45.0),
            ("12abc", 12.0),
            ("-3.5e2x", -350.0),
            (".5", 0.5),
            ("7.", 7.0),
            ("1e", 1.0),
        ],
    )
    def test_trailing_text_after_number_is_ignored(self, text, expected):
        assert parse_number(text) == expected

    def test_infinity_spelled_out_is_accepted(self):
        assert parse_number("Infinity") == float("inf")
        assert parse_number("-Infinity") == float("-inf")

    @pytest.mark.parametrize("text", ["inf", "-inf", "infinity", "NaN", "e5", "+"])
    def test_python_only_spellings_are_rejected(self, text):
        assert parse_number(text) is None

    def test_digit_separators_stop_the_number(self):
        assert parse_number("1_01") == 1.0


# ---------------------------------------------------------------------------
# Class: readings with units or unusual spellings
# ---------------------------------------------------------------------------

class TestReadingsWithTrailingText:

    def test_temperature_with_unit_suffix(self):
        assert score_temperature("100.2F") == TemperatureScore(1, True, True)

    def test_blood_pressure_with_unit_on_systolic(self):
        assert score_blood_pressure("150mmHg/95") == DimensionScore(3, True)

    def test_age_with_unit_suffix(self):
        assert score_age("45 years") == DimensionScore(1, True)

    def test_inf_blood_pressure_is_invalid(self):
        assert score_blood_pressure("inf/80") == DimensionScore(0, False)

    def test_underscore_temperature_reads_leading_digits(self):
        assert score_temperature("1_01") == TemperatureScore(0, True, False)


# ---------------------------------------------------------------------------
# Class: composite risk score
# ---------------------------------------------------------------------------

class TestCalculateRiskScore:

    def test_total_is_sum_of_dimensions(self, patient):
        score = calculate_risk_score(
            patient("DEMO001", blood_pressure="145/95", temperature=101.2, age=70)
        )
        assert score == RiskScore(
            patient_id="DEMO001",
            bp_score=3,
            temp_score=2,
            age_score=2,
            total_score=7,
            has_fever=True,
            has_data_quality_issue=False,
        )

    def test_invalid_dimensions_contribute_zero_and_set_flag(self, patient):
        score = calculate_risk_score(
            patient("DEMO002", blood_pressure="N/A", temperature="TEMP_ERROR", age=70)
        )
        assert score.bp_score == 0
        assert score.temp_score == 0
        assert score.age_score == 2
        assert score.total_score == 2
        assert score.has_data_quality_issue is True
        assert score.has_fever is False

    def test_single_invalid_dimension_flags_record(self, patient):
        score = calculate_risk_score(patient(age="unknown"))
        assert score.has_data_quality_issue is True

    def test_all_valid_has_no_quality_issue(self, patient):
        assert calculate_risk_score(patient()).has_data_quality_issue is False

    def test_missing_fields_do_not_raise(self):
        score = calculate_risk_score({"patient_id": "DEMO003"})
        assert score.total_score == 0
        assert score.has_data_quality_issue is True

    @pytest.mark.parametrize(
        "bp, temp, age",
        [
            ("150/95", 99.8, 80),
            ("INVALID", None, "n/a"),
            ("125/75", "100.1", "39"),
            ("", 0, 0),
        ],
    )
    def test_total_equals_component_sum(self, patient, bp, temp, age):
        score = calculate_risk_score(patient(blood_pressure=bp, temperature=temp, age=age))
        assert score.total_score == score.bp_score + score.temp_score + score.age_score
        assert 0 <= score.bp_score <= 3
        assert 0 <= score.temp_score <= 2
        assert 0 <= score.age_score <= 2

    def test_scoring_is_idempotent(self, patient):
        record = patient(blood_pressure="138/88", temperature="99.9", age="41")
        assert calculate_risk_score(record) == calculate_risk_score(record)

    def test_scoring_does_not_mutate_record(self, patient):
        record = patient(blood_pressure=" 130/85 ")
        snapshot = dict(record)
        calculate_risk_score(record)
        assert record == snapshot


class TestHasFever:

    def test_fever_at_threshold(self, patient):
        assert has_fever(patient(temperature=99.6)) is True

    def test_no_fever_just_below_threshold(self, patient):
        assert has_fever(patient(temperature=99.5)) is False

    def test_invalid_temperature_is_not_fever(self, patient):
        assert has_fever(patient(temperature="TEMP_ERROR")) is False
