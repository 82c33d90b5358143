"""Clinical guideline models (``data/guidelines.yaml``): per severity and per age band."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .enums import PainLevel


class GuidelineSection(BaseModel):
    """A titled block of bedside guidance (e.g. "Immediate Actions")."""

    model_config = ConfigDict(frozen=True)

    title: str
    content: tuple[str, ...] = ()


class ClinicalGuideline(BaseModel):
    """Management summary for one pain level.

    ``who_ladder_step`` is 0 for no pain and 1-3 for the WHO analgesic ladder.
    """

    model_config = ConfigDict(frozen=True)

    pain_level: PainLevel
    who_ladder_step: int
    who_ladder_description: str
    reassessment_timing: str
    key_decision_points: tuple[str, ...] = ()
    treatment_goals: tuple[str, ...] = ()
    escalation_criteria: tuple[str, ...] = ()
    sections: tuple[GuidelineSection, ...] = ()


class AgeSpecificGuideline(BaseModel):
    """Developmental considerations for one age band.

    ``max_age_months`` is the exclusive upper bound; ``None`` marks the
    open-ended oldest band.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    max_age_months: Optional[float] = None
    considerations: tuple[str, ...] = ()

    def covers(self, age_months: float) -> bool:
        return self.max_age_months is None or age_months < self.max_age_months
