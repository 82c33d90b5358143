"""Non-pharmacological intervention recommendations and guideline lookups
(per pain level and per age band)."""

from __future__ import annotations

import logging
import math
from typing import Optional

from pain_rulesets.catalog import ScaleCatalog, coerce_id, get_catalog
from pain_rulesets.errors import InvalidInputError
from pain_rulesets.models import (
    AgeCategory,
    AgeSpecificGuideline,
    ClinicalGuideline,
    InterventionCategory,
    InterventionDefinition,
    InterventionId,
    PainLevel,
    ReassessmentContext,
)

logger = logging.getLogger(__name__)


def recommend_intervention_definitions(
    level: PainLevel | str,
    age_category: AgeCategory | str,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> list[InterventionDefinition]:
    """Age-appropriate interventions for a pain level, strongest evidence first.

    No pain yields no recommendations.  Every other level yields every
    appropriate intervention (so a severe result is never shorter than a
    mild one), sorted A, B, C and by catalog order within a grade.  The
    catch-all ``other`` entry is never recommended.
    """
    level = coerce_id(PainLevel, level, "pain level")
    age_category = coerce_id(AgeCategory, age_category, "age category")
    if level is PainLevel.NONE:
        return []

    catalog = catalog or get_catalog()
    candidates = [
        item
        for item in catalog.iter_interventions(age_category=age_category)
        if item.id is not InterventionId.OTHER
    ]
    # sorted() is stable, so catalog order survives within a grade
    result = sorted(candidates, key=lambda item: item.evidence_level.rank)
    logger.debug(
        "%d interventions for %s pain in %s",
        len(result),
        level.value,
        age_category.value,
    )
    return result


def recommend_interventions(
    level: PainLevel | str,
    age_category: AgeCategory | str,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> list[InterventionId]:
    """Ids of :func:`recommend_intervention_definitions`, in the same order."""
    return [
        item.id
        for item in recommend_intervention_definitions(level, age_category, catalog=catalog)
    ]


def interventions_by_category(
    age_category: AgeCategory | str,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> dict[InterventionCategory, list[InterventionDefinition]]:
    """Group the age-appropriate interventions by category.

    Every category is present as a key, possibly with an empty list; ``other``
    is excluded as in the recommender.
    """
    age_category = coerce_id(AgeCategory, age_category, "age category")
    catalog = catalog or get_catalog()
    grouped: dict[InterventionCategory, list[InterventionDefinition]] = {
        category: [] for category in InterventionCategory
    }
    for item in catalog.iter_interventions(age_category=age_category):
        if item.id is InterventionId.OTHER:
            continue
        grouped[item.category].append(item)
    return grouped


def get_guideline(
    level: PainLevel | str,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> ClinicalGuideline:
    """Management guideline (WHO ladder step, goals, escalation) for a level."""
    return (catalog or get_catalog()).get_guideline(level)


def age_specific_guideline(
    age_months: float,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> AgeSpecificGuideline:
    """Developmental considerations for a patient's age in months.

    Bands are half-open: 1 month is an infant, 12 months a toddler.

    Raises:
        InvalidInputError: if *age_months* is negative or not finite.
    """
    if not math.isfinite(age_months) or age_months < 0:
        raise InvalidInputError(
            f"Age must be a finite non-negative number of months, got {age_months!r}"
        )
    catalog = catalog or get_catalog()
    for band in catalog.age_guidelines:
        if band.covers(age_months):
            return band
    # Unreachable for a loaded catalog: the last band is open-ended.
    return catalog.age_guidelines[-1]


def reassessment_timing(
    context: ReassessmentContext | str,
    level: PainLevel | str,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> str:
    """Reassessment interval for a clinical context.

    Falls back to the level's general guideline timing when the context
    has no specific entry (always the case for no pain).
    """
    catalog = catalog or get_catalog()
    timing = catalog.reassessment_timing(context, level)
    if timing is None:
        return catalog.get_guideline(level).reassessment_timing
    return timing
