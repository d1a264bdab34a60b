"""
Score and verification report models.
"""

from enum import Enum

from pydantic import BaseModel, Field, computed_field

from tasmee.models.diff import LineDiff
from tasmee.models.transcript import Transcript
from tasmee.models.verdict import FeatureVerdicts, RuleCategory


class PipelineState(str, Enum):
    """Stages a verification attempt moves through."""

    IDLE = "idle"
    DECODING = "decoding"
    ANALYZING = "analyzing"
    TRANSCRIBING = "transcribing"
    ALIGNING = "aligning"
    SCORING = "scoring"
    DONE = "done"
    FAILED = "failed"


class ScoreReport(BaseModel):
    """
    Composite accuracy score of one attempt.

    Attributes:
        total_errors: Sum of character-level edit distances over all lines
        total_words: Number of words in the reference text
        raw_accuracy: 100 * (words - errors) / words; may be negative
        penalties: Points deducted per rule category
        final_score: max(0, raw_accuracy - total penalty), two decimals
    """

    total_errors: int = Field(..., ge=0)
    total_words: int = Field(..., ge=0)
    raw_accuracy: float = Field(..., le=100.0)
    penalties: dict[RuleCategory, float] = Field(default_factory=dict)
    final_score: float = Field(..., ge=0.0, le=100.0)

    model_config = {"frozen": True}

    @computed_field
    @property
    def total_penalty(self) -> float:
        return sum(self.penalties.values())

    @computed_field
    @property
    def display(self) -> str:
        """Final score with two decimals, e.g. '87.50'."""
        return f"{self.final_score:.2f}"

    def __str__(self) -> str:
        return f"ScoreReport({self.display}, raw={self.raw_accuracy:.2f}, penalty={self.total_penalty:.1f})"


class VerificationReport(BaseModel):
    """
    Everything the engine hands to the presentation layer for one attempt.

    Attributes:
        state: Final pipeline state (DONE or FAILED)
        history: States visited, in order
        feedback: Rule verdicts
        transcript: Recognized text (empty when transcription failed)
        diffs: One LineDiff per reference line
        score: Composite score
        errors: Messages of stages that degraded
    """

    state: PipelineState
    history: list[PipelineState] = Field(default_factory=list)
    feedback: FeatureVerdicts
    transcript: Transcript = Field(default_factory=Transcript)
    diffs: list[LineDiff] = Field(default_factory=list)
    score: ScoreReport
    errors: list[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.DONE

    @property
    def is_degraded(self) -> bool:
        return bool(self.errors)

    def __str__(self) -> str:
        return f"VerificationReport({self.state.value}, score={self.score.display})"
