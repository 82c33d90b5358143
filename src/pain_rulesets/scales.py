"""Instrument selection and score interpretation.

Three concerns live here:

  - recommend_scales(): which validated instruments suit a patient's age
  - classify(): raw score → PainLevel using the instrument's threshold table
  - score_assessment(): component selections → total → PainLevel

Scale selection uses the corrected age (see :mod:`pain_rulesets.age`), and
postmenstrual age for PIPP-R, against the age windows declared in
``scales.yaml``.  Several instruments are usually appropriate at once; results
are ordered by ``SCALE_RECOMMENDATION_ORDER``.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Mapping, Optional

from pain_rulesets.age import age_in_days, postmenstrual_age_weeks
from pain_rulesets.catalog import ScaleCatalog, get_catalog
from pain_rulesets.constants import SCALE_RECOMMENDATION_ORDER
from pain_rulesets.errors import InvalidInputError, ScoreOutOfRangeError
from pain_rulesets.models import (
    AssessmentScore,
    PainLevel,
    PainScaleDefinition,
    PainScaleId,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Recommendation
# ---------------------------------------------------------------------------

def scales_for_age(
    corrected_age_days: int,
    postmenstrual_weeks: Optional[float] = None,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> list[PainScaleId]:
    """Apply each instrument's catalog age window to an already-resolved age.

    PIPP-R is only considered when a postmenstrual age is known, i.e. when
    the caller recorded a gestational age at birth.
    """
    catalog = catalog or get_catalog()
    return [
        scale_id
        for scale_id in SCALE_RECOMMENDATION_ORDER
        if catalog.get_scale(scale_id).applies_to(corrected_age_days, postmenstrual_weeks)
    ]


def recommend_scales(
    dob: date,
    gestational_weeks: Optional[int] = None,
    *,
    as_of: Optional[date] = None,
    catalog: Optional[ScaleCatalog] = None,
) -> list[PainScaleId]:
    """Return the instruments appropriate for a patient, most specific first.

    Never empty for a valid input: every age satisfies at least one rule.

    Raises:
        InvalidInputError: future birth date or out-of-range gestational age.
    """
    ref = as_of or date.today()
    corrected = age_in_days(dob, gestational_weeks, as_of=ref)
    pma = (
        postmenstrual_age_weeks(dob, gestational_weeks, as_of=ref)
        if gestational_weeks is not None
        else None
    )
    result = scales_for_age(corrected, pma, catalog=catalog)
    logger.debug(
        "Scales for corrected age %d days (PMA %s): %s",
        corrected,
        pma,
        [s.value for s in result],
    )
    return result


def recommend_scale_definitions(
    dob: date,
    gestational_weeks: Optional[int] = None,
    *,
    as_of: Optional[date] = None,
    catalog: Optional[ScaleCatalog] = None,
) -> list[PainScaleDefinition]:
    """Same as :func:`recommend_scales` but returns the full definitions."""
    catalog = catalog or get_catalog()
    return [
        catalog.get_scale(scale_id)
        for scale_id in recommend_scales(dob, gestational_weeks, as_of=as_of, catalog=catalog)
    ]


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify(
    scale_id: PainScaleId | str,
    raw_score: float,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> PainLevel:
    """Map a raw score to a pain level using the instrument's thresholds.

    Out-of-range and non-finite (NaN, infinite) scores are rejected rather
    than clamped.

    Raises:
        InvalidInputError: unknown instrument id.
        ScoreOutOfRangeError: score below 0 or above the instrument maximum.
    """
    scale = (catalog or get_catalog()).get_scale(scale_id)
    if not math.isfinite(raw_score) or raw_score < 0 or raw_score > scale.max_score:
        raise ScoreOutOfRangeError(scale.id.value, raw_score, scale.max_score)

    # Thresholds are contiguous from 0, so the last band starting at or
    # below the score is the match (this also places fractional scores).
    level = scale.thresholds[0].level
    for band in scale.thresholds:
        if raw_score >= band.min_score:
            level = band.level
    return level


def score_assessment(
    scale_id: PainScaleId | str,
    selections: Mapping[str, int],
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> AssessmentScore:
    """Total a completed assessment and classify it.

    *selections* maps every component id of the instrument to the value of
    the chosen option.

    Raises:
        InvalidInputError: unknown instrument, unknown or missing component,
            or a value that is not one of the component's options.
    """
    scale = (catalog or get_catalog()).get_scale(scale_id)
    expected = {comp.id for comp in scale.components}

    unknown = sorted(set(selections) - expected)
    if unknown:
        raise InvalidInputError(f"Unknown components for {scale.id.value}: {unknown}")
    missing = [comp.id for comp in scale.components if comp.id not in selections]
    if missing:
        raise InvalidInputError(f"Incomplete {scale.id.value} assessment, missing: {missing}")

    total = 0
    for comp in scale.components:
        value = selections[comp.id]
        if value not in comp.allowed_values:
            raise InvalidInputError(
                f"{scale.id.value}.{comp.id}: {value!r} is not a valid option "
                f"(allowed: {sorted(comp.allowed_values)})"
            )
        total += value

    level = classify(scale.id, total, catalog=catalog)
    return AssessmentScore(
        scale_id=scale.id,
        component_scores={comp.id: selections[comp.id] for comp in scale.components},
        total_score=total,
        level=level,
    )
