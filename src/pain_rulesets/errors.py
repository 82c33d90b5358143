"""Exception taxonomy for the pain rulesets SDK.

Every error derives from ``ValueError`` so callers that already map
``ValueError`` to a "bad request" response keep working unchanged.

  - InvalidInputError: future birth date, non-positive weight, gestational
    age outside the supported window, unknown instrument/intervention id,
    incomplete or illegal assessment selections.
  - ScoreOutOfRangeError: a raw score below 0 or above the instrument's
    ``max_score``.  Scores are rejected, never clamped.

Unparseable dosing text is *not* an error: the parsers return ``None`` and
callers treat that as "dosing information unavailable".
"""


class PainRulesError(ValueError):
    """Base class for all SDK errors."""


class InvalidInputError(PainRulesError):
    """Raised when a caller passes input the rules cannot be evaluated on."""


class ScoreOutOfRangeError(InvalidInputError):
    """Raised when a raw score falls outside ``[0, max_score]``."""

    def __init__(self, scale_id: str, score: float, max_score: int) -> None:
        self.scale_id = scale_id
        self.score = score
        self.max_score = max_score
        super().__init__(
            f"Score {score} out of range for {scale_id} (expected 0-{max_score})"
        )
