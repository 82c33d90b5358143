"""Clinical constants shared across the SDK.

These values are referenced by the age resolver, scale recommender, and
dose calculator.  They mirror conventions encoded in the YAML catalogs under
``data/``.

Several constants can be overridden via environment variables so that
deployments can adjust clinical thresholds without code changes.
"""

import os

from pain_rulesets.models.enums import AgeCategory, PainScaleId

# Directory holding scales.yaml, interventions.yaml, medications.yaml and
# guidelines.yaml.  None → the ``data/`` directory shipped with the package.
# Overridable via PAIN_CATALOG_DIR env var.
CATALOG_DIR = os.getenv("PAIN_CATALOG_DIR") or None

# Full-term reference used for prematurity correction.
# Overridable via FULL_TERM_GESTATIONAL_WEEKS env var.
FULL_TERM_GESTATIONAL_WEEKS = int(os.getenv("FULL_TERM_GESTATIONAL_WEEKS", "40"))

# Accepted gestational age at birth, in completed weeks (inclusive).
MIN_GESTATIONAL_WEEKS = 22
MAX_GESTATIONAL_WEEKS = 44

DAYS_PER_WEEK = 7

# Inclusive upper bound (in days) of each age band.  Bands are checked in
# order; anything above the last bound is an adolescent.
AGE_CATEGORY_UPPER_BOUNDS: list[tuple[int, AgeCategory]] = [
    (28, AgeCategory.NEONATE),
    (365, AgeCategory.INFANT),
    (1095, AgeCategory.TODDLER),
    (4380, AgeCategory.CHILD),
]

AGE_CATEGORY_LABELS: dict[AgeCategory, str] = {
    AgeCategory.NEONATE: "Neonate (0-28 days)",
    AgeCategory.INFANT: "Infant (1-12 months)",
    AgeCategory.TODDLER: "Toddler (1-3 years)",
    AgeCategory.CHILD: "Child (3-12 years)",
    AgeCategory.ADOLESCENT: "Adolescent (12+ years)",
}

# format_age() granularity: days below the first bound, months below the
# second, years otherwise.
FORMAT_DAYS_BELOW = 60
FORMAT_MONTHS_BELOW = 730
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365

# Order in which recommended instruments are returned: most age-specific
# first.  Adjust here to change presentation order without touching rules.
SCALE_RECOMMENDATION_ORDER: list[PainScaleId] = [
    PainScaleId.PIPP_R,
    PainScaleId.NIPS,
    PainScaleId.FLACC,
    PainScaleId.CHEOPS,
    PainScaleId.WONG_BAKER,
    PainScaleId.VAS,
]

# Advisory weight plausibility bands: (min kg, max kg, typical range label).
WEIGHT_RANGES: dict[AgeCategory, tuple[float, float, str]] = {
    AgeCategory.NEONATE: (0.5, 6.0, "2-4 kg"),
    AgeCategory.INFANT: (3.0, 12.0, "5-10 kg"),
    AgeCategory.TODDLER: (8.0, 20.0, "10-15 kg"),
    AgeCategory.CHILD: (15.0, 50.0, "20-35 kg"),
    AgeCategory.ADOLESCENT: (30.0, 120.0, "40-70 kg"),
}

# Band used when the caller's age category is unknown.
DEFAULT_WEIGHT_CATEGORY = AgeCategory.CHILD

# Substrings (case-sensitive) marking a dosing string as "do not dose".
NON_RECOMMENDATION_MARKERS: tuple[str, ...] = ("NOT", "N/A")

MG_PER_G = 1000
MCG_PER_MG = 1000
