"""Medication reference models (``data/medications.yaml``).

Dose and ceiling fields are kept as the human-authored strings found in
formularies ("10-15 mg/kg/dose", "75 mg/kg/day (max 4g/day)").  They are
parsed on demand by :mod:`pain_rulesets.dose_parser`; the structured result
is never stored.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .enums import EvidenceLevel, MedicationCategory, PainLevel, Route


class DosingEntry(BaseModel):
    """One row of a medication's dosing table."""

    model_config = ConfigDict(frozen=True)

    route: Route
    dose: str
    frequency: str
    max_dose: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_weight_based(self) -> bool:
        return "/kg" in self.dose


class MedicationDefinition(BaseModel):
    """An analgesic, adjuvant, or reversal agent."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    generic_name: str
    category: MedicationCategory
    description: str
    # Free-text restriction as printed in references (e.g. "≥6 months").
    age_restriction: Optional[str] = None
    # Minimum age in years; 0 when the restriction is sub-year or absent.
    min_age_years: float = 0
    # Set for agents that must not be used below this age (codeine, tramadol).
    not_recommended_under_years: Optional[float] = None
    dosing: tuple[DosingEntry, ...]
    indications: tuple[str, ...] = ()
    contraindications: tuple[str, ...] = ()
    side_effects: tuple[str, ...] = ()
    precautions: tuple[str, ...] = ()
    monitoring: tuple[str, ...] = ()
    evidence_level: EvidenceLevel
    evidence_source: str = ""
    pain_level_indication: tuple[PainLevel, ...] = ()
    black_box_warning: Optional[str] = None

    @property
    def has_weight_based_dosing(self) -> bool:
        return any(entry.is_weight_based for entry in self.dosing)


class MedicationRecommendation(BaseModel):
    """A medication suggested for a pain level, with its ladder priority."""

    model_config = ConfigDict(frozen=True)

    medication: MedicationDefinition
    rationale: str
    priority: int
