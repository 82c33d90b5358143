"""Age resolver tests: corrected age, postmenstrual age, bands and display.

Band reference (inclusive upper bounds, in days):
    neonate <= 28 < infant <= 365 < toddler <= 1095 < child <= 4380 < adolescent
Negative corrected ages (very premature, recently born) are neonates.
"""

from datetime import datetime, timedelta

import pytest

from helpers.utils import AS_OF, born_days_ago
from pain_rulesets.age import (
    age_category,
    age_category_label,
    age_in_days,
    chronological_age_days,
    format_age,
    postmenstrual_age_weeks,
    resolve_age,
)
from pain_rulesets.errors import InvalidInputError
from pain_rulesets.models import AgeCategory


# =====================================================================
# age_in_days — chronological and corrected
# =====================================================================


def test_age_in_days_without_gestational_age():
    """Without a gestational age the result is plain date arithmetic."""
    assert age_in_days(born_days_ago(100), as_of=AS_OF) == 100


def test_age_in_days_born_today_is_zero():
    """A patient born on the reference date is 0 days old."""
    assert age_in_days(AS_OF, as_of=AS_OF) == 0


def test_premature_correction_subtracts_missing_weeks():
    """32 weeks GA at 7 days old: 7 - (40 - 32) * 7 = -49."""
    assert age_in_days(born_days_ago(7), 32, as_of=AS_OF) == -49


def test_premature_correction_after_catch_up():
    """28 weeks GA at 200 days old: 200 - 84 = 116 corrected days."""
    assert age_in_days(born_days_ago(200), 28, as_of=AS_OF) == 116


@pytest.mark.parametrize("weeks", [40, 41, 42, 44])
def test_term_and_post_term_are_not_corrected(weeks):
    """Only a deficit below 40 weeks changes the age; post-term adds nothing."""
    assert age_in_days(born_days_ago(50), weeks, as_of=AS_OF) == 50


def test_future_birth_date_rejected():
    """A birth date after the reference date is invalid input."""
    with pytest.raises(InvalidInputError, match="future"):
        age_in_days(AS_OF + timedelta(days=1), as_of=AS_OF)


@pytest.mark.parametrize("weeks", [21, 45, 0])
def test_gestational_age_outside_range_rejected(weeks):
    """Gestational age must lie in 22-44 weeks."""
    with pytest.raises(InvalidInputError, match="Gestational age"):
        age_in_days(born_days_ago(10), weeks, as_of=AS_OF)


def test_invalid_input_is_a_value_error():
    """Callers mapping ValueError to a bad-request response keep working."""
    with pytest.raises(ValueError):
        age_in_days(AS_OF + timedelta(days=3), as_of=AS_OF)


def test_datetime_birth_date_accepted():
    """A datetime is truncated to its date."""
    dob = datetime(2025, 5, 22, 23, 59)
    assert chronological_age_days(dob, as_of=AS_OF) == 10


def test_chronological_age_ignores_prematurity():
    """chronological_age_days never applies the correction."""
    assert chronological_age_days(born_days_ago(7), as_of=AS_OF) == 7


# =====================================================================
# postmenstrual_age_weeks
# =====================================================================


def test_postmenstrual_age():
    """32 weeks GA + 7 days = 33 weeks PMA."""
    assert postmenstrual_age_weeks(born_days_ago(7), 32, as_of=AS_OF) == pytest.approx(33.0)


def test_postmenstrual_age_fractional():
    """Partial weeks are kept: 30 weeks + 10 days."""
    pma = postmenstrual_age_weeks(born_days_ago(10), 30, as_of=AS_OF)
    assert pma == pytest.approx(30 + 10 / 7)


# =====================================================================
# age_category — partition of days into five bands
# =====================================================================


@pytest.mark.parametrize(
    "days, expected",
    [
        (10, AgeCategory.NEONATE),
        (100, AgeCategory.INFANT),
        (500, AgeCategory.TODDLER),
        (1500, AgeCategory.CHILD),
        (3000, AgeCategory.CHILD),
        (5000, AgeCategory.ADOLESCENT),
    ],
)
def test_age_category_reference_values(days, expected):
    """Reference ages map to their documented band."""
    assert age_category(days) is expected


@pytest.mark.parametrize(
    "days, expected",
    [
        (0, AgeCategory.NEONATE),
        (28, AgeCategory.NEONATE),
        (29, AgeCategory.INFANT),
        (365, AgeCategory.INFANT),
        (366, AgeCategory.TODDLER),
        (1095, AgeCategory.TODDLER),
        (1096, AgeCategory.CHILD),
        (4380, AgeCategory.CHILD),
        (4381, AgeCategory.ADOLESCENT),
    ],
)
def test_age_category_boundaries(days, expected):
    """Each band starts on the day after the previous band's upper bound."""
    assert age_category(days) is expected


@pytest.mark.parametrize("days", [-1, -49, -126])
def test_negative_corrected_age_is_neonate(days):
    """Very premature infants may have a negative corrected age."""
    assert age_category(days) is AgeCategory.NEONATE


def test_age_bands_cover_and_never_go_backwards():
    """Walking day by day only ever moves forward through the five bands."""
    order = list(AgeCategory)
    seen = []
    for days in range(0, 7000):
        category = age_category(days)
        if not seen or seen[-1] is not category:
            seen.append(category)
    assert seen == order


def test_age_category_label():
    """Labels carry the band's age span."""
    assert age_category_label(AgeCategory.NEONATE) == "Neonate (0-28 days)"
    assert age_category_label("adolescent") == "Adolescent (12+ years)"


# =====================================================================
# format_age — chronological, single unit
# =====================================================================


@pytest.mark.parametrize(
    "days, expected",
    [
        (0, "0 days"),
        (1, "1 day"),
        (45, "45 days"),
        (59, "59 days"),
        (60, "2 months"),
        (182, "6 months"),
        (365, "12 months"),
        (729, "24 months"),
        (730, "2 years"),
        (1826, "5 years"),
        (3652, "10 years"),
    ],
)
def test_format_age(days, expected):
    """Days below 60, months below 730, whole years otherwise."""
    assert format_age(born_days_ago(days), as_of=AS_OF) == expected


def test_format_age_uses_uncorrected_age():
    """The display ignores prematurity correction."""
    dob = born_days_ago(45)
    assert format_age(dob, 30, as_of=AS_OF) == format_age(dob, as_of=AS_OF) == "45 days"


# =====================================================================
# resolve_age — bundled profile
# =====================================================================


def test_resolve_age_premature_infant():
    """All facets agree with the individual functions."""
    profile = resolve_age(born_days_ago(7), 32, as_of=AS_OF)
    assert profile.chronological_age_days == 7
    assert profile.corrected_age_days == -49
    assert profile.gestational_age_weeks == 32
    assert profile.postmenstrual_age_weeks == pytest.approx(33.0)
    assert profile.category is AgeCategory.NEONATE
    assert profile.display == "7 days"


def test_resolve_age_without_gestational_age():
    """No gestational age means no PMA and no correction."""
    profile = resolve_age(born_days_ago(1500), as_of=AS_OF)
    assert profile.corrected_age_days == profile.chronological_age_days == 1500
    assert profile.postmenstrual_age_weeks is None
    assert profile.category is AgeCategory.CHILD
