"""Dose parsing and calculation models.

These are derived, ephemeral values: recomputed from the source dosing
strings and the current weight on every call, never cached or persisted.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class ParsedDoseRange(BaseModel):
    """Per-kilogram dose range parsed from a string like "0.05-0.1 mg/kg/dose".

    A single value ("5 mg/kg/dose") yields ``min_per_kg == max_per_kg``.
    """

    model_config = ConfigDict(frozen=True)

    min_per_kg: float
    max_per_kg: float
    unit: Literal["mg", "mcg", "g", "mL"]


class ParsedMaxDose(BaseModel):
    """Dose ceilings parsed from a string like "75 mg/kg/day (max 4g/day)".

    Any facet may be absent.  ``absolute_max`` is normalised from grams to
    milligrams; ``absolute_period`` says whether it is a daily or per-dose
    ceiling.
    """

    model_config = ConfigDict(frozen=True)

    per_kg_per_day: Optional[float] = None
    per_kg_per_day_unit: Optional[Literal["mg", "mcg", "g"]] = None
    absolute_max: Optional[float] = None
    absolute_unit: Optional[Literal["mg", "mcg"]] = None
    absolute_period: Optional[Literal["day", "dose"]] = None


class CalculatedDose(BaseModel):
    """Patient-specific dose for one dosing-table row."""

    model_config = ConfigDict(frozen=True)

    route: str
    frequency: str
    min_dose: float
    max_dose: float
    unit: str
    exceeds_max: bool = False
    warning: Optional[str] = None
    # Daily ceiling for this weight (per-kg-per-day limit x weight).  Reported
    # only; never sets exceeds_max because frequency is free text.
    per_kg_per_day_limit: Optional[float] = None
    # Unit of per_kg_per_day_limit: the ceiling's own unit, else ``unit``.
    per_kg_per_day_limit_unit: Optional[str] = None
    notes: Optional[str] = None

    @property
    def display(self) -> str:
        """Human string, e.g. "7.5 mg" for a single value or "5-10 mg" for a range."""
        if self.min_dose == self.max_dose:
            return f"{self.min_dose:g} {self.unit}"
        return f"{self.min_dose:g}-{self.max_dose:g} {self.unit}"


class WeightCheck(BaseModel):
    """Advisory weight plausibility result; never blocks calculation."""

    model_config = ConfigDict(frozen=True)

    plausible: bool
    message: Optional[str] = None
    min_kg: float
    max_kg: float
    typical_range: str
