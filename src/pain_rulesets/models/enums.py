"""Closed enumerations used as catalog keys.

Catalog lookups are keyed by these enums rather than free strings so that an
unknown instrument or intervention id fails at the boundary (when the caller
converts its string) instead of deep inside a rule.  All enums subclass
``str`` so values serialise as plain strings and compare equal to them.
"""

from enum import Enum


class AgeCategory(str, Enum):
    """Developmental age band; a partition of age-in-days."""

    NEONATE = "neonate"
    INFANT = "infant"
    TODDLER = "toddler"
    CHILD = "child"
    ADOLESCENT = "adolescent"


class PainLevel(str, Enum):
    """Four-band clinical interpretation of a raw score."""

    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        """0 for none up to 3 for severe."""
        return _PAIN_LEVEL_RANK[self]


_PAIN_LEVEL_RANK = {
    PainLevel.NONE: 0,
    PainLevel.MILD: 1,
    PainLevel.MODERATE: 2,
    PainLevel.SEVERE: 3,
}


class PainScaleId(str, Enum):
    """Validated pain-assessment instruments."""

    PIPP_R = "pipp_r"
    FLACC = "flacc"
    WONG_BAKER = "wong_baker"
    CHEOPS = "cheops"
    NIPS = "nips"
    VAS = "vas"


class ScaleType(str, Enum):
    BEHAVIORAL = "behavioral"
    SELF_REPORT = "self_report"
    HYBRID = "hybrid"


class EvidenceLevel(str, Enum):
    """A/B/C grading of literature support; A is strongest."""

    A = "A"
    B = "B"
    C = "C"

    @property
    def rank(self) -> int:
        return "ABC".index(self.value)


class InterventionCategory(str, Enum):
    PHYSICAL = "physical"
    PSYCHOLOGICAL = "psychological"
    ENVIRONMENTAL = "environmental"
    PHARMACOLOGICAL_ADJUNCT = "pharmacological_adjunct"


class InterventionId(str, Enum):
    """Non-pharmacological comfort measures."""

    SUCROSE = "sucrose"
    SKIN_TO_SKIN = "skin_to_skin"
    BREASTFEEDING = "breastfeeding"
    NON_NUTRITIVE_SUCKING = "non_nutritive_sucking"
    SWADDLING = "swaddling"
    FACILITATED_TUCKING = "facilitated_tucking"
    COMFORT_POSITIONING = "comfort_positioning"
    GENTLE_TOUCH = "gentle_touch"
    MASSAGE = "massage"
    WARM_COMPRESS = "warm_compress"
    COLD_COMPRESS = "cold_compress"
    DISTRACTION_VISUAL = "distraction_visual"
    DISTRACTION_AUDITORY = "distraction_auditory"
    DISTRACTION_TACTILE = "distraction_tactile"
    DISTRACTION_BREATHING = "distraction_breathing"
    GUIDED_IMAGERY = "guided_imagery"
    RELAXATION = "relaxation"
    COGNITIVE_COPING = "cognitive_coping"
    PREPARATION_EDUCATION = "preparation_education"
    PARENTAL_PRESENCE = "parental_presence"
    COMFORT_HOLDING = "comfort_holding"
    REDUCED_STIMULATION = "reduced_stimulation"
    QUIET_ENVIRONMENT = "quiet_environment"
    DIM_LIGHTING = "dim_lighting"
    MUSIC_THERAPY = "music_therapy"
    VIBRATION_DEVICE = "vibration_device"
    TOPICAL_ANESTHETIC = "topical_anesthetic"
    OTHER = "other"


class MedicationCategory(str, Enum):
    NON_OPIOID = "non_opioid"
    OPIOID = "opioid"
    TOPICAL_LOCAL = "topical_local"
    ADJUVANT = "adjuvant"
    INTRANASAL = "intranasal"


class Route(str, Enum):
    """Route of administration."""

    PO = "PO"
    IV = "IV"
    IM = "IM"
    PR = "PR"
    IN = "IN"
    SL = "SL"
    TD = "TD"
    TOPICAL = "Topical"


class ReassessmentContext(str, Enum):
    POST_PROCEDURE = "post_procedure"
    POST_OPERATIVE = "post_operative"
    CHRONIC_PAIN = "chronic_pain"
