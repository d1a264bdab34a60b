"""
Transcript data model.
"""

from collections.abc import Sequence

from pydantic import BaseModel, Field


class Transcript(BaseModel):
    """
    Recognized text, one entry per line.

    Lines are index-aligned with the reference text. Asking for a line past the
    end yields an empty string rather than an error.

    Attributes:
        lines: Recognized lines in order
    """

    lines: tuple[str, ...] = Field(
        default=(),
        description="Recognized lines in order",
    )

    model_config = {"frozen": True}

    @classmethod
    def from_text(cls, text: str | None) -> "Transcript":
        """Split recognizer output on newlines."""
        if not text or not text.strip():
            return cls()
        return cls(lines=tuple(line.strip() for line in text.split("\n")))

    @classmethod
    def coerce(cls, value: "Transcript | str | Sequence[str] | None") -> "Transcript":
        """Accept a Transcript, raw recognizer text or a list of lines."""
        if isinstance(value, cls):
            return value
        if value is None or isinstance(value, str):
            return cls.from_text(value)
        return cls(lines=tuple(value))

    @classmethod
    def empty(cls) -> "Transcript":
        return cls()

    def line(self, index: int) -> str:
        """Line `index`, or "" when the transcript is shorter."""
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return ""

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def is_empty(self) -> bool:
        return not any(line.strip() for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)
