"""Age resolution: birth date (plus optional gestational age) to age category.

Ages are whole days.  When a gestational age below full term is supplied the
age is *corrected* for prematurity by subtracting the missing weeks; the
corrected age drives every age-dependent rule (scale and intervention
selection).  A very premature infant seen shortly after birth therefore has
a negative corrected age, which still maps to the neonate band.

Every function takes the reference date as the keyword ``as_of`` so results
are reproducible; it defaults to today.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from pain_rulesets.constants import (
    AGE_CATEGORY_LABELS,
    AGE_CATEGORY_UPPER_BOUNDS,
    DAYS_PER_MONTH,
    DAYS_PER_WEEK,
    DAYS_PER_YEAR,
    FORMAT_DAYS_BELOW,
    FORMAT_MONTHS_BELOW,
    FULL_TERM_GESTATIONAL_WEEKS,
    MAX_GESTATIONAL_WEEKS,
    MIN_GESTATIONAL_WEEKS,
)
from pain_rulesets.errors import InvalidInputError
from pain_rulesets.models import AgeCategory, AgeProfile

logger = logging.getLogger(__name__)


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _validate_gestational_weeks(gestational_weeks: Optional[int]) -> None:
    if gestational_weeks is None:
        return
    if not MIN_GESTATIONAL_WEEKS <= gestational_weeks <= MAX_GESTATIONAL_WEEKS:
        raise InvalidInputError(
            f"Gestational age {gestational_weeks} weeks outside supported range "
            f"{MIN_GESTATIONAL_WEEKS}-{MAX_GESTATIONAL_WEEKS}"
        )


def chronological_age_days(dob: date, *, as_of: Optional[date] = None) -> int:
    """Whole days from *dob* to *as_of*, without prematurity correction.

    Raises:
        InvalidInputError: if *dob* is after *as_of*.
    """
    dob = _as_date(dob)
    ref = _as_date(as_of) if as_of is not None else date.today()
    if dob > ref:
        raise InvalidInputError(f"Date of birth {dob.isoformat()} is in the future")
    return (ref - dob).days


def age_in_days(
    dob: date,
    gestational_weeks: Optional[int] = None,
    *,
    as_of: Optional[date] = None,
) -> int:
    """Age in days, corrected for prematurity when *gestational_weeks* < 40.

    Post-term births are not credited extra days.  The result may be
    negative for a very premature infant in the first weeks of life.

    Raises:
        InvalidInputError: future birth date, or gestational age outside
            the supported range.
    """
    _validate_gestational_weeks(gestational_weeks)
    days = chronological_age_days(dob, as_of=as_of)
    if gestational_weeks is not None and gestational_weeks < FULL_TERM_GESTATIONAL_WEEKS:
        days -= (FULL_TERM_GESTATIONAL_WEEKS - gestational_weeks) * DAYS_PER_WEEK
    return days


def postmenstrual_age_weeks(
    dob: date,
    gestational_weeks: int,
    *,
    as_of: Optional[date] = None,
) -> float:
    """Gestational age at birth plus chronological age, in weeks."""
    _validate_gestational_weeks(gestational_weeks)
    return gestational_weeks + chronological_age_days(dob, as_of=as_of) / DAYS_PER_WEEK


def age_category(days: int) -> AgeCategory:
    """Map a (possibly corrected, possibly negative) age in days to its band."""
    for upper, category in AGE_CATEGORY_UPPER_BOUNDS:
        if days <= upper:
            return category
    return AgeCategory.ADOLESCENT


def age_category_label(category: AgeCategory | str) -> str:
    """Display label for a band, e.g. "Toddler (1-3 years)"."""
    return AGE_CATEGORY_LABELS[AgeCategory(category)]


def _pluralise(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def format_age(
    dob: date,
    gestational_weeks: Optional[int] = None,
    *,
    as_of: Optional[date] = None,
) -> str:
    """Human display of the *chronological* age in a single unit.

    Days under 60 days, whole months (30-day) under 730 days, whole years
    otherwise: "45 days", "6 months", "1 year".  The gestational age is
    validated but does not change the display.
    """
    _validate_gestational_weeks(gestational_weeks)
    days = chronological_age_days(dob, as_of=as_of)
    if days < FORMAT_DAYS_BELOW:
        return _pluralise(days, "day")
    if days < FORMAT_MONTHS_BELOW:
        return _pluralise(days // DAYS_PER_MONTH, "month")
    return _pluralise(days // DAYS_PER_YEAR, "year")


def resolve_age(
    dob: date,
    gestational_weeks: Optional[int] = None,
    *,
    as_of: Optional[date] = None,
) -> AgeProfile:
    """Compute every age facet the rules use in one call."""
    ref = _as_date(as_of) if as_of is not None else date.today()
    chronological = chronological_age_days(dob, as_of=ref)
    corrected = age_in_days(dob, gestational_weeks, as_of=ref)
    pma = (
        postmenstrual_age_weeks(dob, gestational_weeks, as_of=ref)
        if gestational_weeks is not None
        else None
    )
    profile = AgeProfile(
        chronological_age_days=chronological,
        corrected_age_days=corrected,
        gestational_age_weeks=gestational_weeks,
        postmenstrual_age_weeks=pma,
        category=age_category(corrected),
        display=format_age(dob, gestational_weeks, as_of=ref),
    )
    logger.debug(
        "Resolved age: %d days (corrected %d), category=%s",
        chronological,
        corrected,
        profile.category.value,
    )
    return profile
