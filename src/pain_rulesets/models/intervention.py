"""Non-pharmacological intervention model (``data/interventions.yaml``)."""

from pydantic import BaseModel, ConfigDict

from .enums import AgeCategory, EvidenceLevel, InterventionCategory, InterventionId


class InterventionDefinition(BaseModel):
    """A comfort measure with the age bands it is appropriate for.

    ``evidence_level`` drives recommendation order (A before B before C).
    """

    model_config = ConfigDict(frozen=True)

    id: InterventionId
    name: str
    description: str
    category: InterventionCategory
    age_appropriate: frozenset[AgeCategory]
    evidence_level: EvidenceLevel
    evidence_source: str = ""
    instructions: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()
    contraindications: tuple[str, ...] = ()

    def is_appropriate_for(self, category: AgeCategory) -> bool:
        return category in self.age_appropriate
