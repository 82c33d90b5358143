"""ScaleCatalog: loads the YAML reference data into typed models.

This is the single source of truth for instrument, intervention, medication
and guideline data at runtime.  A catalog is loaded once and is read-only
afterwards; a hot reload builds a new catalog and swaps it in whole.

Usage::

    catalog = ScaleCatalog()        # defaults to the package's data/ dir
    catalog.load()                  # parse all YAML files

    flacc = catalog.get_scale("flacc")
    sucrose = catalog.get_intervention(InterventionId.SUCROSE)

Most callers never build a catalog themselves; the rule modules use
:func:`get_catalog`, which lazily loads the shared instance.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, TypeVar

import yaml

from pain_rulesets.constants import CATALOG_DIR
from pain_rulesets.errors import InvalidInputError
from pain_rulesets.models import (
    AgeCategory,
    AgeSpecificGuideline,
    ClinicalGuideline,
    InterventionCategory,
    InterventionDefinition,
    InterventionId,
    MedicationCategory,
    MedicationDefinition,
    PainLevel,
    PainScaleDefinition,
    PainScaleId,
    ReassessmentContext,
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_DIR = Path(__file__).resolve().parent / "data"

_E = TypeVar("_E", bound=Enum)


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def coerce_id(enum_cls: type[_E], value: _E | str, what: str) -> _E:
    """Convert a caller-supplied id string into its closed enum.

    Raises:
        InvalidInputError: if *value* is not a member of *enum_cls*.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidInputError(f"Unknown {what}: {value!r}") from None


# ---------------------------------------------------------------------------
# ScaleCatalog
# ---------------------------------------------------------------------------

class ScaleCatalog:
    """Loads all YAML from the catalog directory and provides typed lookup.

    Attributes populated after :meth:`load` (read-only mappings, YAML order):

        scales          — {PainScaleId: PainScaleDefinition}
        interventions   — {InterventionId: InterventionDefinition}
        medications     — {medication id: MedicationDefinition}
        guidelines      — {PainLevel: ClinicalGuideline}
        age_guidelines  — tuple of AgeSpecificGuideline, youngest band first
    """

    def __init__(self, catalog_dir: str | Path | None = None) -> None:
        if catalog_dir is None:
            catalog_dir = CATALOG_DIR or DEFAULT_CATALOG_DIR
        self._base = Path(catalog_dir)
        self._loaded = False

        # Populated by load()
        self.scales: Mapping[PainScaleId, PainScaleDefinition] = MappingProxyType({})
        self.interventions: Mapping[InterventionId, InterventionDefinition] = MappingProxyType({})
        self.medications: Mapping[str, MedicationDefinition] = MappingProxyType({})
        self.guidelines: Mapping[PainLevel, ClinicalGuideline] = MappingProxyType({})
        self.age_guidelines: tuple[AgeSpecificGuideline, ...] = ()
        self._reassessment: Mapping[ReassessmentContext, Mapping[PainLevel, str]] = MappingProxyType({})

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def base_dir(self) -> Path:
        return self._base

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> ScaleCatalog:
        """Parse all YAML files under the catalog directory into typed models.

        Returns ``self`` so construction and loading can be chained.  Raises
        ``FileNotFoundError`` if an expected YAML file is missing and
        ``ValueError`` (including pydantic's ``ValidationError``) if the data
        is malformed or an enumerated id has no entry.
        """
        if self._loaded:
            raise RuntimeError("ScaleCatalog is already loaded; build a new one to reload")
        self._load_scales()
        self._load_interventions()
        self._load_medications()
        self._load_guidelines()
        self._loaded = True
        logger.info(
            "ScaleCatalog loaded from %s: %d scales, %d interventions, %d medications, %d guidelines",
            self._base,
            len(self.scales),
            len(self.interventions),
            len(self.medications),
            len(self.guidelines),
        )
        return self

    def _load_scales(self) -> None:
        """Load scales.yaml, keyed by instrument id."""
        parsed: dict[PainScaleId, PainScaleDefinition] = {}
        for raw in load_yaml(self._base / "scales.yaml"):
            scale = PainScaleDefinition(**raw)
            if scale.id in parsed:
                raise ValueError(f"Duplicate scale id '{scale.id.value}' in scales.yaml")
            parsed[scale.id] = scale
        _require_all(PainScaleId, parsed, "scales.yaml")
        self.scales = MappingProxyType(parsed)

    def _load_interventions(self) -> None:
        """Load interventions.yaml, keyed by intervention id, preserving order."""
        parsed: dict[InterventionId, InterventionDefinition] = {}
        for raw in load_yaml(self._base / "interventions.yaml"):
            item = InterventionDefinition(**raw)
            if item.id in parsed:
                raise ValueError(
                    f"Duplicate intervention id '{item.id.value}' in interventions.yaml"
                )
            parsed[item.id] = item
        _require_all(InterventionId, parsed, "interventions.yaml")
        self.interventions = MappingProxyType(parsed)

    def _load_medications(self) -> None:
        """Load medications.yaml, keyed by medication id, preserving order."""
        parsed: dict[str, MedicationDefinition] = {}
        for raw in load_yaml(self._base / "medications.yaml"):
            med = MedicationDefinition(**raw)
            if med.id in parsed:
                raise ValueError(f"Duplicate medication id '{med.id}' in medications.yaml")
            parsed[med.id] = med
        self.medications = MappingProxyType(parsed)

    def _load_guidelines(self) -> None:
        """Load guidelines.yaml: per-level guidelines, reassessment timing and
        age-specific considerations.

        Every pain level needs a guideline; every reassessment context needs
        a timing for each level above ``none``.  Age bands must have strictly
        increasing upper bounds, with only the last band open-ended.
        """
        raw = load_yaml(self._base / "guidelines.yaml")

        parsed: dict[PainLevel, ClinicalGuideline] = {}
        for item in raw["guidelines"]:
            guideline = ClinicalGuideline(**item)
            parsed[guideline.pain_level] = guideline
        _require_all(PainLevel, parsed, "guidelines.yaml")

        timing: dict[ReassessmentContext, Mapping[PainLevel, str]] = {}
        for context_name, by_level in raw["reassessment_timing"].items():
            context = ReassessmentContext(context_name)
            levels = {PainLevel(level): str(text) for level, text in by_level.items()}
            missing = [
                lvl.value for lvl in PainLevel
                if lvl is not PainLevel.NONE and lvl not in levels
            ]
            if missing:
                raise ValueError(
                    f"guidelines.yaml: reassessment_timing.{context.value} "
                    f"missing levels {missing}"
                )
            timing[context] = MappingProxyType(levels)
        _require_all(ReassessmentContext, timing, "guidelines.yaml reassessment_timing")

        age_bands = tuple(AgeSpecificGuideline(**item) for item in raw["age_specific"])
        _check_age_bands(age_bands)

        self.guidelines = MappingProxyType(parsed)
        self._reassessment = MappingProxyType(timing)
        self.age_guidelines = age_bands

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get_scale(self, scale_id: PainScaleId | str) -> PainScaleDefinition:
        """Look up an instrument definition.

        Args:
            scale_id: a ``PainScaleId`` or its string value (e.g. "flacc").

        Raises:
            InvalidInputError: if the id is not a known instrument.
        """
        return self.scales[coerce_id(PainScaleId, scale_id, "pain scale")]

    def get_intervention(self, intervention_id: InterventionId | str) -> InterventionDefinition:
        """Look up an intervention definition.

        Raises:
            InvalidInputError: if the id is not a known intervention.
        """
        return self.interventions[coerce_id(InterventionId, intervention_id, "intervention")]

    def get_medication(self, medication_id: str) -> MedicationDefinition:
        """Look up a medication by id (e.g. "acetaminophen").

        Raises:
            InvalidInputError: if no medication has that id.
        """
        try:
            return self.medications[medication_id]
        except KeyError:
            raise InvalidInputError(f"Unknown medication: {medication_id!r}") from None

    def get_guideline(self, level: PainLevel | str) -> ClinicalGuideline:
        """Return the management guideline for a pain level."""
        return self.guidelines[coerce_id(PainLevel, level, "pain level")]

    def reassessment_timing(
        self,
        context: ReassessmentContext | str,
        level: PainLevel | str,
    ) -> Optional[str]:
        """Return the reassessment interval for a clinical context and level.

        Returns ``None`` for ``PainLevel.NONE``, which has no context-specific
        timing; use the level's guideline instead.
        """
        ctx = coerce_id(ReassessmentContext, context, "reassessment context")
        lvl = coerce_id(PainLevel, level, "pain level")
        return self._reassessment[ctx].get(lvl)

    def iter_interventions(
        self,
        *,
        age_category: Optional[AgeCategory] = None,
        category: Optional[InterventionCategory] = None,
    ) -> Iterator[InterventionDefinition]:
        """Yield interventions in catalog order, optionally filtered."""
        for item in self.interventions.values():
            if age_category is not None and not item.is_appropriate_for(age_category):
                continue
            if category is not None and item.category is not category:
                continue
            yield item

    def medications_by_category(self, category: MedicationCategory | str) -> list[MedicationDefinition]:
        """Return all medications in a category, in catalog order."""
        cat = coerce_id(MedicationCategory, category, "medication category")
        return [med for med in self.medications.values() if med.category is cat]


def _check_age_bands(bands: tuple[AgeSpecificGuideline, ...]) -> None:
    if not bands:
        raise ValueError("guidelines.yaml: age_specific must list at least one band")
    seen: set[str] = set()
    previous = 0.0
    for index, band in enumerate(bands):
        if band.id in seen:
            raise ValueError(f"Duplicate age band id '{band.id}' in guidelines.yaml")
        seen.add(band.id)
        last = index == len(bands) - 1
        if band.max_age_months is None:
            if not last:
                raise ValueError(
                    f"guidelines.yaml: age band {band.id} is open-ended but is not the last band"
                )
            continue
        if last:
            raise ValueError(f"guidelines.yaml: last age band {band.id} must be open-ended")
        if band.max_age_months <= previous:
            raise ValueError(
                f"guidelines.yaml: age band {band.id} ends at {band.max_age_months:g} months, "
                f"expected more than {previous:g}"
            )
        previous = band.max_age_months


def _require_all(enum_cls: type[Enum], parsed: Mapping, source: str) -> None:
    missing = [member.value for member in enum_cls if member not in parsed]
    if missing:
        raise ValueError(f"{source}: missing entries for {missing}")


# ---------------------------------------------------------------------------
# Process-wide catalog
# ---------------------------------------------------------------------------

_catalog: Optional[ScaleCatalog] = None
_catalog_lock = threading.Lock()


def get_catalog() -> ScaleCatalog:
    """Return the shared catalog, loading it on first use."""
    global _catalog
    catalog = _catalog
    if catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = ScaleCatalog().load()
            catalog = _catalog
    return catalog


def install_catalog(catalog: ScaleCatalog) -> None:
    """Replace the shared catalog.

    Readers holding the previous catalog keep a consistent view; new calls
    see the replacement.  The replacement must already be loaded.
    """
    global _catalog
    if not catalog.loaded:
        raise ValueError("install_catalog() requires a loaded ScaleCatalog")
    with _catalog_lock:
        _catalog = catalog
    logger.info("ScaleCatalog installed from %s", catalog.base_dir)


def reload_catalog(catalog_dir: str | Path | None = None) -> ScaleCatalog:
    """Load a fresh catalog from *catalog_dir* and install it."""
    catalog = ScaleCatalog(catalog_dir).load()
    install_catalog(catalog)
    return catalog
