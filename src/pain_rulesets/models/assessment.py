"""Result models returned by the age resolver and assessment scoring."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .enums import AgeCategory, PainLevel, PainScaleId


class AgeProfile(BaseModel):
    """Everything the rules need to know about a patient's age.

    ``corrected_age_days`` equals ``chronological_age_days`` for term
    infants and may be negative for very premature infants recently born.
    """

    model_config = ConfigDict(frozen=True)

    chronological_age_days: int
    corrected_age_days: int
    gestational_age_weeks: Optional[int] = None
    postmenstrual_age_weeks: Optional[float] = None
    category: AgeCategory
    display: str


class AssessmentScore(BaseModel):
    """Total and severity for a completed assessment.

    ``component_scores`` echoes the validated selections so the caller can
    store the score payload verbatim.
    """

    model_config = ConfigDict(frozen=True)

    scale_id: PainScaleId
    component_scores: dict[str, int]
    total_score: int
    level: PainLevel
