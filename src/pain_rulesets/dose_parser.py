"""Parsers for human-authored dosing strings.

Formulary text such as ``"0.05-0.1 mg/kg/dose"`` or
``"75 mg/kg/day (max 4g/day)"`` is turned into structured numbers on demand.
Text that does not match (fixed doses like "15-30 mg/dose", topical
instructions, "NOT RECOMMENDED") is not an error: both parsers return
``None`` and the caller treats that as "dosing information unavailable".
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from pain_rulesets.constants import MG_PER_G, NON_RECOMMENDATION_MARKERS
from pain_rulesets.models import ParsedDoseRange, ParsedMaxDose

logger = logging.getLogger(__name__)

# Unit tokens are matched case-insensitively and reported in this spelling.
_CANONICAL_UNITS = {"mg": "mg", "mcg": "mcg", "g": "g", "ml": "mL"}

_NUMBER = r"(\d+\.?\d*)"

_RANGE_PER_KG = re.compile(_NUMBER + r"\s*-\s*" + _NUMBER + r"\s*(mg|mcg|g|mL)/kg", re.IGNORECASE)
_SINGLE_PER_KG = re.compile(_NUMBER + r"\s*(mg|mcg|g|mL)/kg", re.IGNORECASE)

_PER_KG_PER_DAY = re.compile(_NUMBER + r"\s*(mg|mcg|g)/kg/day", re.IGNORECASE)
_ABSOLUTE_PER_DAY = re.compile(r"max\s*" + _NUMBER + r"\s*(mg|mcg|g)/day", re.IGNORECASE)
_ABSOLUTE_PER_DOSE = re.compile(_NUMBER + r"\s*(mg|mcg|g)/dose", re.IGNORECASE)


def _canonical(unit: str) -> str:
    return _CANONICAL_UNITS[unit.lower()]


def _to_mg_or_mcg(value: float, unit: str) -> tuple[float, str]:
    """Normalise grams to milligrams; mg and mcg pass through."""
    unit = _canonical(unit)
    if unit == "g":
        return value * MG_PER_G, "mg"
    return value, unit


def parse_dose_range(text: Optional[str]) -> Optional[ParsedDoseRange]:
    """Parse a per-kilogram dose such as "10-15 mg/kg/dose" or "5 mg/kg".

    A range is tried before a single value; a single value gives
    ``min_per_kg == max_per_kg``.  Returns ``None`` for empty text, text
    carrying a non-recommendation marker ("NOT", "N/A"; case-sensitive), or
    text without a per-kilogram dose.
    """
    if not text:
        return None
    if any(marker in text for marker in NON_RECOMMENDATION_MARKERS):
        return None

    match = _RANGE_PER_KG.search(text)
    if match:
        return ParsedDoseRange(
            min_per_kg=float(match.group(1)),
            max_per_kg=float(match.group(2)),
            unit=_canonical(match.group(3)),
        )

    match = _SINGLE_PER_KG.search(text)
    if match:
        value = float(match.group(1))
        return ParsedDoseRange(
            min_per_kg=value,
            max_per_kg=value,
            unit=_canonical(match.group(2)),
        )

    logger.debug("No per-kg dose in %r", text)
    return None


def parse_max_dose_limit(text: Optional[str]) -> Optional[ParsedMaxDose]:
    """Extract dose ceilings from a max-dose string.

    Facets, each optional:

      - per-kg-per-day ceiling: ``<n> <unit>/kg/day``
      - absolute daily ceiling: ``max <n> <unit>/day``
      - absolute per-dose ceiling: ``<n> <unit>/dose``, used only when no
        daily ceiling was found

    Absolute ceilings in grams are converted to milligrams.  Returns
    ``None`` when the text is empty or no facet is present.
    """
    if not text:
        return None

    facets: dict[str, object] = {}

    match = _PER_KG_PER_DAY.search(text)
    if match:
        facets["per_kg_per_day"] = float(match.group(1))
        facets["per_kg_per_day_unit"] = _canonical(match.group(2))

    match = _ABSOLUTE_PER_DAY.search(text)
    if match:
        value, unit = _to_mg_or_mcg(float(match.group(1)), match.group(2))
        facets.update(absolute_max=value, absolute_unit=unit, absolute_period="day")
    else:
        match = _ABSOLUTE_PER_DOSE.search(text)
        if match:
            value, unit = _to_mg_or_mcg(float(match.group(1)), match.group(2))
            facets.update(absolute_max=value, absolute_unit=unit, absolute_period="dose")

    if not facets:
        logger.debug("No dose ceiling in %r", text)
        return None
    return ParsedMaxDose(**facets)
