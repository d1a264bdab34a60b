"""
Pronunciation rule verdicts.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class RuleCategory(str, Enum):
    """The fixed set of Tajweed rules checked on every recitation."""

    MADD = "madd"  # elongation
    GHUNNAH = "ghunnah"  # nasalization
    WAQF = "waqf"  # stop / pause
    QALQALAH = "qalqalah"  # echo / bounce
    SAKINAH = "sakinah"  # silent letter


class Verdict(str, Enum):
    """Binary outcome of one rule check."""

    CORRECT = "correct"
    INCORRECT = "incorrect"


class FeatureVerdicts(BaseModel):
    """
    Verdict for every rule category from one recitation attempt.

    Attributes:
        verdicts: One verdict per RuleCategory
        notes: Optional measurement or failure reason per category
    """

    verdicts: dict[RuleCategory, Verdict] = Field(
        ...,
        description="One verdict per rule category",
    )
    notes: dict[RuleCategory, str] = Field(
        default_factory=dict,
        description="Measurement or failure reason per category",
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def covers_all_categories(self) -> "FeatureVerdicts":
        missing = [c.value for c in RuleCategory if c not in self.verdicts]
        if missing:
            raise ValueError(f"missing verdicts for: {', '.join(missing)}")
        return self

    @classmethod
    def uniform(cls, verdict: Verdict, note: str | None = None) -> "FeatureVerdicts":
        """Same verdict (and note) for every category."""
        notes = {c: note for c in RuleCategory} if note else {}
        return cls(verdicts={c: verdict for c in RuleCategory}, notes=notes)

    def __getitem__(self, category: RuleCategory) -> Verdict:
        return self.verdicts[category]

    def is_correct(self, category: RuleCategory) -> bool:
        return self.verdicts[category] is Verdict.CORRECT

    @property
    def incorrect(self) -> list[RuleCategory]:
        """Categories marked incorrect, in canonical order."""
        return [c for c in RuleCategory if not self.is_correct(c)]

    def messages(self) -> list[str]:
        """Feedback lines such as 'Correct Madd' / 'Incorrect Ghunnah'."""
        return [
            f"{self.verdicts[c].value.capitalize()} {c.value.capitalize()}"
            for c in RuleCategory
        ]

    def __str__(self) -> str:
        return "; ".join(self.messages())
