"""
Word diff data models.
"""

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class DiffStatus(str, Enum):
    """How a run of text relates the reference line to the recited line."""

    UNCHANGED = "unchanged"
    ADDED = "added"  # only in the transcript
    REMOVED = "removed"  # only in the reference


class DiffSegment(BaseModel):
    """A run of text sharing one DiffStatus."""

    text: str = Field(..., min_length=1)
    status: DiffStatus

    model_config = {"frozen": True}

    def __str__(self) -> str:
        marks = {DiffStatus.UNCHANGED: " ", DiffStatus.ADDED: "+", DiffStatus.REMOVED: "-"}
        return f"{marks[self.status]}{self.text!r}"


class LineDiff(BaseModel):
    """
    Word-level alignment of one reference line with its recited line.

    Attributes:
        index: 0-based line number in the reference text
        reference: The reference line
        transcript: The recognized line ("" when missing)
        segments: Ordered diff runs
    """

    index: int = Field(..., ge=0)
    reference: str
    transcript: str
    segments: tuple[DiffSegment, ...] = ()

    model_config = {"frozen": True}

    @computed_field
    @property
    def has_mistakes(self) -> bool:
        """Whether any run was added or removed."""
        return any(s.status is not DiffStatus.UNCHANGED for s in self.segments)

    @computed_field
    @property
    def similarity(self) -> float:
        """Normalized similarity of the two lines (0.0-1.0)."""
        from tasmee.core.matcher import similarity

        return similarity(self.reference, self.transcript)

    def text_for(self, *statuses: DiffStatus) -> str:
        """Concatenate the segments with the given statuses."""
        return "".join(s.text for s in self.segments if s.status in statuses)

    @property
    def removed_words(self) -> list[str]:
        return self.text_for(DiffStatus.REMOVED).split()

    @property
    def added_words(self) -> list[str]:
        return self.text_for(DiffStatus.ADDED).split()

    def __str__(self) -> str:
        return f"LineDiff({self.index}, mistakes={self.has_mistakes})"
