"""Dose string parsing tests.

Strings are taken from the shipped formulary wherever possible, so a
formulary edit that the parser cannot read shows up here first.
"""

import pytest

from pain_rulesets.dose_parser import parse_dose_range, parse_max_dose_limit


# =====================================================================
# parse_dose_range
# =====================================================================


def test_parse_range_mg():
    """A hyphenated per-kg range keeps both bounds."""
    parsed = parse_dose_range("0.05-0.1 mg/kg/dose")
    assert parsed.min_per_kg == pytest.approx(0.05)
    assert parsed.max_per_kg == pytest.approx(0.1)
    assert parsed.unit == "mg"


def test_parse_single_value():
    """A single value gives equal bounds."""
    parsed = parse_dose_range("0.5 mg/kg/dose")
    assert parsed.min_per_kg == parsed.max_per_kg == pytest.approx(0.5)


def test_parse_mcg_range():
    """Microgram doses keep their unit."""
    parsed = parse_dose_range("1.5-2 mcg/kg/dose")
    assert (parsed.min_per_kg, parsed.max_per_kg, parsed.unit) == (1.5, 2.0, "mcg")


def test_parse_range_with_spaces():
    """Whitespace around the hyphen is tolerated."""
    parsed = parse_dose_range("10 - 15 mg/kg/dose")
    assert (parsed.min_per_kg, parsed.max_per_kg) == (10.0, 15.0)


@pytest.mark.parametrize(
    "text, unit",
    [
        ("5 MG/KG/dose", "mg"),
        ("2 Mcg/kg", "mcg"),
        ("0.5 ml/kg", "mL"),
        ("1 G/kg", "g"),
    ],
)
def test_units_are_case_insensitive(text, unit):
    """Unit tokens match in any case and come back in canonical spelling."""
    assert parse_dose_range(text).unit == unit


def test_parse_dose_ignores_trailing_weight_band():
    """The first per-kg figure wins over a trailing weight band."""
    parsed = parse_dose_range("15 mg/kg/dose (10-50kg)")
    assert parsed.min_per_kg == parsed.max_per_kg == 15.0


def test_parse_dose_without_dose_suffix():
    """"/kg" alone is enough; the rest of the text is free."""
    parsed = parse_dose_range("0.1 mg/kg at bedtime")
    assert parsed.min_per_kg == pytest.approx(0.1)


@pytest.mark.parametrize(
    "text",
    [
        "NOT RECOMMENDED",
        "N/A",
        "NOT for use: 1 mg/kg",
        "",
        None,
        "15-30 mg/dose",
        "1-2g per 10 cm²",
        "Apply thick layer",
        "0.1-0.3 mg patch",
    ],
)
def test_parse_dose_returns_none(text):
    """Markers, empty text and fixed doses are not weight-based."""
    assert parse_dose_range(text) is None


def test_not_marker_is_case_sensitive():
    """Only the upper-case marker disqualifies a string."""
    assert parse_dose_range("2 mg/kg, not with food") is not None


# =====================================================================
# parse_max_dose_limit
# =====================================================================


def test_max_per_kg_per_day_with_absolute_grams():
    """Both facets are read and grams become milligrams."""
    parsed = parse_max_dose_limit("75 mg/kg/day (max 4g/day)")
    assert parsed.per_kg_per_day == 75.0
    assert parsed.per_kg_per_day_unit == "mg"
    assert parsed.absolute_max == 4000.0
    assert parsed.absolute_unit == "mg"
    assert parsed.absolute_period == "day"


def test_max_fractional_grams():
    """2.4 g/day is 2400 mg/day."""
    parsed = parse_max_dose_limit("40 mg/kg/day (max 2.4g/day)")
    assert parsed.absolute_max == pytest.approx(2400.0)


def test_max_per_kg_per_day_only():
    """A bare per-kg-per-day ceiling has no absolute facet."""
    parsed = parse_max_dose_limit("40 mg/kg/day")
    assert parsed.per_kg_per_day == 40.0
    assert parsed.absolute_max is None
    assert parsed.absolute_period is None


def test_max_per_kg_per_day_mcg():
    """Microgram per-kg ceilings keep their unit."""
    parsed = parse_max_dose_limit("10 mcg/kg/day")
    assert (parsed.per_kg_per_day, parsed.per_kg_per_day_unit) == (10.0, "mcg")


def test_max_per_dose():
    """A per-dose ceiling is read when there is no daily one."""
    parsed = parse_max_dose_limit("30 mg/dose, 5 days max")
    assert parsed.absolute_max == 30.0
    assert parsed.absolute_unit == "mg"
    assert parsed.absolute_period == "dose"
    assert parsed.per_kg_per_day is None


def test_max_per_dose_with_qualifier():
    """Trailing qualifiers do not hide the ceiling."""
    parsed = parse_max_dose_limit("15 mg/dose (opioid-naive)")
    assert (parsed.absolute_max, parsed.absolute_period) == (15.0, "dose")


def test_daily_ceiling_takes_precedence_over_per_dose():
    """When both are printed, the daily ceiling is reported."""
    parsed = parse_max_dose_limit("max 60 mg/day, 15 mg/dose")
    assert parsed.absolute_max == 60.0
    assert parsed.absolute_period == "day"


@pytest.mark.parametrize(
    "text",
    [
        "120 mg/day, 5 days max",
        "100 mcg",
        "2 mg",
        "10 cm² (0-3 mo)",
        "50 mg/kg/day (max 3600 mg)",
        "",
        None,
    ],
)
def test_max_without_recognised_facet(text):
    """Text without a recognised pattern yields no absolute ceiling."""
    parsed = parse_max_dose_limit(text)
    assert parsed is None or parsed.absolute_max is None
