"""Weight-based dose calculation with practical rounding and ceiling checks.

The calculator scales a parsed per-kg range by the patient's weight, rounds
each bound to an increment that can actually be measured, and flags the
result when the rounded upper bound exceeds an absolute ceiling.  Weight
plausibility is checked separately and is advisory only.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from pain_rulesets.constants import (
    AGE_CATEGORY_LABELS,
    DEFAULT_WEIGHT_CATEGORY,
    MCG_PER_MG,
    MG_PER_G,
    WEIGHT_RANGES,
)
from pain_rulesets.errors import InvalidInputError
from pain_rulesets.models import (
    AgeCategory,
    CalculatedDose,
    ParsedDoseRange,
    ParsedMaxDose,
    WeightCheck,
)

logger = logging.getLogger(__name__)

# Mass units expressed in micrograms; mL has no mass equivalent.
_MCG_PER_UNIT = {
    "mcg": 1,
    "mg": MCG_PER_MG,
    "g": MCG_PER_MG * MG_PER_G,
}


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def _round_half_up(value: float, places: int) -> float:
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def _round_to_increment(value: float, increment: int) -> float:
    return float(math.floor(value / increment + 0.5) * increment)


def practical_round(value: float, unit: str) -> float:
    """Round a dose to an increment clinicians can measure.

    ==========  =======================  ======================
    unit        range                    rounded to
    ==========  =======================  ======================
    mcg         < 50                     nearest 5
    mcg         >= 50                    nearest 10
    mg          < 1                      2 decimal places
    mg          < 10                     1 decimal place
    mg          < 100                    nearest integer
    mg          >= 100                   nearest 5
    other       any                      2 decimal places
    ==========  =======================  ======================

    Halves round up (towards +inf), e.g. 0.125 mg -> 0.13, 12.5 mcg -> 15.
    """
    if unit == "mcg":
        return _round_to_increment(value, 5 if value < 50 else 10)
    if unit == "mg":
        if value < 1:
            return _round_half_up(value, 2)
        if value < 10:
            return _round_half_up(value, 1)
        if value < 100:
            return _round_half_up(value, 0)
        return _round_to_increment(value, 5)
    return _round_half_up(value, 2)


# ---------------------------------------------------------------------------
# Calculation
# ---------------------------------------------------------------------------

def _convert(value: float, from_unit: str, to_unit: str) -> Optional[float]:
    """Convert between mass units; ``None`` if either unit is not a mass."""
    if from_unit == to_unit:
        return value
    if from_unit not in _MCG_PER_UNIT or to_unit not in _MCG_PER_UNIT:
        return None
    return value * _MCG_PER_UNIT[from_unit] / _MCG_PER_UNIT[to_unit]


def require_valid_weight(weight_kg: float) -> None:
    """Reject a missing, non-positive or non-finite (NaN, infinite) weight."""
    if weight_kg is None or not (math.isfinite(weight_kg) and weight_kg > 0):
        raise InvalidInputError(
            f"Weight must be a finite number greater than 0 kg, got {weight_kg!r}"
        )


def calculate_dose(
    weight_kg: float,
    dose_range: ParsedDoseRange,
    max_dose: Optional[ParsedMaxDose] = None,
    *,
    route: str = "",
    frequency: str = "",
    notes: Optional[str] = None,
) -> CalculatedDose:
    """Compute the patient-specific dose for one dosing-table row.

    Both bounds are ``per_kg * weight_kg`` passed through
    :func:`practical_round`.  Only the rounded upper bound is compared, and
    only against an absolute ceiling (converted to the dose unit when the
    two differ).  A per-kg-per-day ceiling is scaled by weight and reported
    in ``per_kg_per_day_limit`` (unit in ``per_kg_per_day_limit_unit``)
    without being compared.

    Raises:
        InvalidInputError: if *weight_kg* is not a finite positive number.
    """
    require_valid_weight(weight_kg)
    unit = dose_range.unit

    min_dose = practical_round(dose_range.min_per_kg * weight_kg, unit)
    max_dose_value = practical_round(dose_range.max_per_kg * weight_kg, unit)

    exceeds_max = False
    warning: Optional[str] = None
    daily_limit: Optional[float] = None
    daily_unit: Optional[str] = None

    if max_dose is not None:
        if max_dose.absolute_max is not None:
            limit = _convert(max_dose.absolute_max, max_dose.absolute_unit, unit)
            if limit is None:
                logger.debug(
                    "Cannot compare %s dose against %s ceiling",
                    unit,
                    max_dose.absolute_unit,
                )
            elif max_dose_value > limit:
                exceeds_max = True
                warning = (
                    f"Calculated dose exceeds maximum of {max_dose.absolute_max:g} "
                    f"{max_dose.absolute_unit}/{max_dose.absolute_period}"
                )
        if max_dose.per_kg_per_day is not None:
            daily_unit = max_dose.per_kg_per_day_unit or unit
            daily_limit = practical_round(max_dose.per_kg_per_day * weight_kg, daily_unit)

    return CalculatedDose(
        route=route,
        frequency=frequency,
        min_dose=min_dose,
        max_dose=max_dose_value,
        unit=unit,
        exceeds_max=exceeds_max,
        warning=warning,
        per_kg_per_day_limit=daily_limit,
        per_kg_per_day_limit_unit=daily_unit,
        notes=notes,
    )


# ---------------------------------------------------------------------------
# Weight plausibility
# ---------------------------------------------------------------------------

def check_weight(
    weight_kg: float,
    age_category: AgeCategory | str | None = None,
) -> WeightCheck:
    """Advisory check that a weight is plausible for an age band.

    An unknown or missing category uses the child band.  The result never
    blocks a calculation; an implausible weight only carries a message.

    Raises:
        InvalidInputError: if *weight_kg* is not a finite positive number.
    """
    require_valid_weight(weight_kg)
    try:
        category = AgeCategory(age_category)
    except ValueError:
        category = DEFAULT_WEIGHT_CATEGORY

    min_kg, max_kg, typical = WEIGHT_RANGES[category]
    label = AGE_CATEGORY_LABELS[category]

    message: Optional[str] = None
    if weight_kg < min_kg:
        message = (
            f"Weight {weight_kg:g} kg is unusually low for {label}; "
            f"typical range is {typical}. Please verify."
        )
    elif weight_kg > max_kg:
        message = (
            f"Weight {weight_kg:g} kg is unusually high for {label}; "
            f"typical range is {typical}. Please verify."
        )
    if message:
        logger.warning("Implausible weight: %s", message)

    return WeightCheck(
        plausible=message is None,
        message=message,
        min_kg=min_kg,
        max_kg=max_kg,
        typical_range=typical,
    )
