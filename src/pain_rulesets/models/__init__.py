"""Public model re-exports for pain_rulesets.

Consumers should import from ``pain_rulesets.models`` rather than reaching
into sub-modules directly.
"""

# --- Enumerations ---
from pain_rulesets.models.enums import (
    AgeCategory,
    EvidenceLevel,
    InterventionCategory,
    InterventionId,
    MedicationCategory,
    PainLevel,
    PainScaleId,
    ReassessmentContext,
    Route,
    ScaleType,
)

# --- Instruments ---
from pain_rulesets.models.scale import (
    ComponentOption,
    PainScaleDefinition,
    ScaleComponent,
    ScoreThreshold,
)

# --- Reference data ---
from pain_rulesets.models.guideline import (
    AgeSpecificGuideline,
    ClinicalGuideline,
    GuidelineSection,
)
from pain_rulesets.models.intervention import InterventionDefinition
from pain_rulesets.models.medication import (
    DosingEntry,
    MedicationDefinition,
    MedicationRecommendation,
)

# --- Derived results ---
from pain_rulesets.models.assessment import AgeProfile, AssessmentScore
from pain_rulesets.models.dose import (
    CalculatedDose,
    ParsedDoseRange,
    ParsedMaxDose,
    WeightCheck,
)

__all__ = [
    # Enumerations
    "AgeCategory",
    "EvidenceLevel",
    "InterventionCategory",
    "InterventionId",
    "MedicationCategory",
    "PainLevel",
    "PainScaleId",
    "ReassessmentContext",
    "Route",
    "ScaleType",
    # Instruments
    "ComponentOption",
    "PainScaleDefinition",
    "ScaleComponent",
    "ScoreThreshold",
    # Reference data
    "AgeSpecificGuideline",
    "ClinicalGuideline",
    "DosingEntry",
    "GuidelineSection",
    "InterventionDefinition",
    "MedicationDefinition",
    "MedicationRecommendation",
    # Derived results
    "AgeProfile",
    "AssessmentScore",
    "CalculatedDose",
    "ParsedDoseRange",
    "ParsedMaxDose",
    "WeightCheck",
]
