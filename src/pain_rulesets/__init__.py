"""pain_rulesets — Pediatric pain clinical decision support SDK.

Public API:
    ScaleCatalog      — loads YAML reference data into typed models
    get_catalog       — shared, lazily loaded catalog instance
    install_catalog   — atomically replace the shared catalog

Age:
    age_in_days       — age in days, corrected for prematurity
    age_category      — age in days to AgeCategory band
    format_age        — chronological age as "N days/months/years"
    resolve_age       — every age facet bundled in an AgeProfile

Instruments:
    recommend_scales  — instruments appropriate for a patient's age
    classify          — raw score to PainLevel
    score_assessment  — component selections to total and PainLevel

Management:
    recommend_interventions — non-pharmacological measures by level and age
    get_guideline           — WHO ladder guidance for a pain level
    age_specific_guideline  — developmental considerations for an age in months
    recommend_medications   — analgesics by level and age

Dosing:
    parse_dose_range        — "10-15 mg/kg/dose" to ParsedDoseRange
    parse_max_dose_limit    — "75 mg/kg/day (max 4g/day)" to ParsedMaxDose
    calculate_dose          — weight-scaled, rounded, ceiling-checked dose
    practical_round         — unit-aware clinical rounding
    check_weight            — advisory weight plausibility
    calculate_medication_doses — full dose table for one medication
"""

from pain_rulesets.age import (
    age_category,
    age_category_label,
    age_in_days,
    chronological_age_days,
    format_age,
    postmenstrual_age_weeks,
    resolve_age,
)
from pain_rulesets.catalog import (
    ScaleCatalog,
    get_catalog,
    install_catalog,
    reload_catalog,
)
from pain_rulesets.dose_calculator import calculate_dose, check_weight, practical_round
from pain_rulesets.dose_parser import parse_dose_range, parse_max_dose_limit
from pain_rulesets.errors import InvalidInputError, PainRulesError, ScoreOutOfRangeError
from pain_rulesets.interventions import (
    age_specific_guideline,
    get_guideline,
    interventions_by_category,
    reassessment_timing,
    recommend_intervention_definitions,
    recommend_interventions,
)
from pain_rulesets.medications import (
    calculate_medication_doses,
    recommend_medications,
    weight_based_medications,
)
from pain_rulesets.scales import (
    classify,
    recommend_scale_definitions,
    recommend_scales,
    scales_for_age,
    score_assessment,
)

__all__ = [
    # Catalog
    "ScaleCatalog",
    "get_catalog",
    "install_catalog",
    "reload_catalog",
    # Errors
    "PainRulesError",
    "InvalidInputError",
    "ScoreOutOfRangeError",
    # Age
    "age_category",
    "age_category_label",
    "age_in_days",
    "chronological_age_days",
    "format_age",
    "postmenstrual_age_weeks",
    "resolve_age",
    # Instruments
    "classify",
    "recommend_scale_definitions",
    "recommend_scales",
    "scales_for_age",
    "score_assessment",
    # Management
    "age_specific_guideline",
    "get_guideline",
    "interventions_by_category",
    "reassessment_timing",
    "recommend_intervention_definitions",
    "recommend_interventions",
    "recommend_medications",
    # Dosing
    "calculate_dose",
    "calculate_medication_doses",
    "check_weight",
    "parse_dose_range",
    "parse_max_dose_limit",
    "practical_round",
    "weight_based_medications",
]
