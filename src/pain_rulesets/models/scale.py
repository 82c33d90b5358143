"""Pydantic models for pain-assessment instruments (``data/scales.yaml``).

A ``PainScaleDefinition`` carries everything needed to administer and score
one instrument:

  - components: the ordered scoring items, each with selectable options
  - thresholds: the score → severity table used by the classifier

Structural invariants are enforced when the model is built, so a malformed
catalog fails at load time rather than during classification:

  - thresholds cover ``[0, max_score]`` contiguously, without overlap
  - threshold levels strictly increase (none < mild < moderate < severe)
  - every option value lies within ``[0, max_score]``
  - the per-component maximum option values sum to ``max_score``
  - an age window, when given, has ``min_age_days <= max_age_days``
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from .enums import PainLevel, PainScaleId, ScaleType


class ComponentOption(BaseModel):
    """A selectable answer for one scoring component."""

    model_config = ConfigDict(frozen=True)

    value: int
    label: str
    description: str = ""


class ScaleComponent(BaseModel):
    """One scoring item (e.g. FLACC "Face")."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    options: tuple[ComponentOption, ...]

    @property
    def max_value(self) -> int:
        return max(opt.value for opt in self.options)

    @property
    def allowed_values(self) -> frozenset[int]:
        return frozenset(opt.value for opt in self.options)


class ScoreThreshold(BaseModel):
    """Inclusive score band mapped to a severity level."""

    model_config = ConfigDict(frozen=True)

    min_score: int
    max_score: int
    level: PainLevel
    description: str = ""


class PainScaleDefinition(BaseModel):
    """A validated pain-assessment instrument."""

    model_config = ConfigDict(frozen=True)

    id: PainScaleId
    name: str
    full_name: str
    age_range: str
    age_range_description: str = ""
    # Applicable corrected-age window in days, inclusive; None = open-ended.
    # When max_pma_weeks is set the instrument is gated on postmenstrual
    # age alone and the day window is ignored.
    min_age_days: Optional[int] = None
    max_age_days: Optional[int] = None
    max_pma_weeks: Optional[float] = None
    type: ScaleType
    max_score: int
    description: str = ""
    use_case: str = ""
    components: tuple[ScaleComponent, ...]
    thresholds: tuple[ScoreThreshold, ...]

    @model_validator(mode="after")
    def _check_thresholds(self):
        if not self.components:
            raise ValueError(f"{self.id.value}: at least one component is required")
        if not self.thresholds:
            raise ValueError(f"{self.id.value}: at least one threshold is required")

        expected_min = 0
        prev_rank = -1
        for band in self.thresholds:
            if band.min_score != expected_min:
                raise ValueError(
                    f"{self.id.value}: threshold for {band.level.value} starts at "
                    f"{band.min_score}, expected {expected_min}"
                )
            if band.max_score < band.min_score:
                raise ValueError(
                    f"{self.id.value}: threshold for {band.level.value} is empty"
                )
            if band.level.rank <= prev_rank:
                raise ValueError(
                    f"{self.id.value}: threshold levels must increase in severity"
                )
            prev_rank = band.level.rank
            expected_min = band.max_score + 1

        if self.thresholds[-1].max_score != self.max_score:
            raise ValueError(
                f"{self.id.value}: thresholds end at {self.thresholds[-1].max_score}, "
                f"expected max_score {self.max_score}"
            )
        return self

    @model_validator(mode="after")
    def _check_components(self):
        for comp in self.components:
            for opt in comp.options:
                if not 0 <= opt.value <= self.max_score:
                    raise ValueError(
                        f"{self.id.value}.{comp.id}: option value {opt.value} "
                        f"outside [0, {self.max_score}]"
                    )
        total = sum(comp.max_value for comp in self.components)
        if total != self.max_score:
            raise ValueError(
                f"{self.id.value}: component maxima sum to {total}, "
                f"expected max_score {self.max_score}"
            )
        return self

    @model_validator(mode="after")
    def _check_age_window(self):
        if (
            self.min_age_days is not None
            and self.max_age_days is not None
            and self.min_age_days > self.max_age_days
        ):
            raise ValueError(
                f"{self.id.value}: min_age_days {self.min_age_days} exceeds "
                f"max_age_days {self.max_age_days}"
            )
        if self.max_pma_weeks is not None and self.max_pma_weeks <= 0:
            raise ValueError(f"{self.id.value}: max_pma_weeks must be positive")
        return self

    def applies_to(
        self,
        corrected_age_days: int,
        postmenstrual_weeks: Optional[float] = None,
    ) -> bool:
        """True when a patient of this age falls inside the instrument's window.

        Instruments with ``max_pma_weeks`` need a known postmenstrual age.
        """
        if self.max_pma_weeks is not None:
            return postmenstrual_weeks is not None and postmenstrual_weeks <= self.max_pma_weeks
        if self.min_age_days is not None and corrected_age_days < self.min_age_days:
            return False
        if self.max_age_days is not None and corrected_age_days > self.max_age_days:
            return False
        return True

    @property
    def min_possible_score(self) -> int:
        """Lowest total a completed assessment can produce (4 for CHEOPS)."""
        return sum(min(opt.value for opt in comp.options) for comp in self.components)
