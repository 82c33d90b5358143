"""Medication recommendations and per-medication dose tables.

Recommendations follow the WHO analgesic ladder: non-opioids first for mild
and moderate pain, strong (grade A) opioids first for severe pain.  The
dosing table for a medication is computed row by row from its reference
strings; rows without a per-kilogram dose (fixed adult doses, topical
instructions, non-recommended agents) are skipped.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from pain_rulesets.catalog import ScaleCatalog, coerce_id, get_catalog
from pain_rulesets.dose_calculator import calculate_dose, require_valid_weight
from pain_rulesets.dose_parser import parse_dose_range, parse_max_dose_limit
from pain_rulesets.errors import InvalidInputError
from pain_rulesets.models import (
    CalculatedDose,
    EvidenceLevel,
    MedicationCategory,
    MedicationDefinition,
    MedicationRecommendation,
    PainLevel,
)

logger = logging.getLogger(__name__)

# Priority assigned to an indicated medication that no ladder rule ranks.
DEFAULT_PRIORITY = 10

# Marker in age_restriction text for agents that must never be suggested.
_NOT_RECOMMENDED_MARKER = "NOT recommended"


def calculate_medication_doses(
    medication_id: str,
    weight_kg: float,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> list[CalculatedDose]:
    """Dose every weight-based row of a medication's dosing table.

    Returns an empty list when no row has a parseable per-kg dose.

    Raises:
        InvalidInputError: unknown medication id, or a weight that is not a
            finite positive number.
    """
    medication = (catalog or get_catalog()).get_medication(medication_id)
    require_valid_weight(weight_kg)

    doses: list[CalculatedDose] = []
    for entry in medication.dosing:
        dose_range = parse_dose_range(entry.dose)
        if dose_range is None:
            logger.debug("%s %s: dose %r not weight-based", medication.id, entry.route.value, entry.dose)
            continue
        doses.append(
            calculate_dose(
                weight_kg,
                dose_range,
                parse_max_dose_limit(entry.max_dose),
                route=entry.route.value,
                frequency=entry.frequency,
                notes=entry.notes,
            )
        )
    return doses


def weight_based_medications(*, catalog: Optional[ScaleCatalog] = None) -> list[MedicationDefinition]:
    """Medications with at least one "/kg" dose, in catalog order."""
    catalog = catalog or get_catalog()
    return [med for med in catalog.medications.values() if med.has_weight_based_dosing]


def _ladder_rank(med: MedicationDefinition, level: PainLevel) -> tuple[int, str]:
    """Return (priority, rationale) for an indicated medication."""
    strong_opioid = med.category is MedicationCategory.OPIOID and med.evidence_level is EvidenceLevel.A

    if level is PainLevel.MILD:
        if med.category is MedicationCategory.NON_OPIOID:
            return 1, "First-line for mild pain"
        if med.category is MedicationCategory.TOPICAL_LOCAL:
            return 2, "Useful for procedural pain"
    elif level is PainLevel.MODERATE:
        if med.category is MedicationCategory.NON_OPIOID:
            return 1, "Start with non-opioids"
        if strong_opioid:
            return 2, "Add if non-opioids insufficient"
    elif level is PainLevel.SEVERE:
        if strong_opioid:
            return 1, "First-line for severe pain"
        if med.category is MedicationCategory.NON_OPIOID:
            return 2, "Use in combination for multimodal analgesia"
    return DEFAULT_PRIORITY, ""


def _excluded_for_age(med: MedicationDefinition, age_years: float) -> bool:
    if med.age_restriction and _NOT_RECOMMENDED_MARKER in med.age_restriction:
        return True
    if age_years < med.min_age_years:
        return True
    if med.not_recommended_under_years is not None and age_years < med.not_recommended_under_years:
        return True
    return False


def recommend_medications(
    level: PainLevel | str,
    age_years: float,
    *,
    catalog: Optional[ScaleCatalog] = None,
) -> list[MedicationRecommendation]:
    """Suggest analgesics for a pain level and age, best ladder step first.

    Skips medications that are flagged "NOT recommended", that are below
    their minimum age, or that are not indicated for *level*.  No pain
    yields an empty list.  Ties keep catalog order.

    Raises:
        InvalidInputError: unknown level, or a negative or non-finite age.
    """
    level = coerce_id(PainLevel, level, "pain level")
    if not math.isfinite(age_years) or age_years < 0:
        raise InvalidInputError(f"Age must be a finite non-negative number, got {age_years!r}")
    if level is PainLevel.NONE:
        return []

    catalog = catalog or get_catalog()
    recommendations: list[MedicationRecommendation] = []
    for med in catalog.medications.values():
        if _excluded_for_age(med, age_years):
            logger.debug("Skipping %s for age %.1f years", med.id, age_years)
            continue
        if level not in med.pain_level_indication:
            continue
        priority, rationale = _ladder_rank(med, level)
        recommendations.append(
            MedicationRecommendation(medication=med, rationale=rationale, priority=priority)
        )

    recommendations.sort(key=lambda rec: rec.priority)
    return recommendations
