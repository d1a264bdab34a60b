"""
Reference text data model.
"""

from collections.abc import Iterator, Sequence

from pydantic import BaseModel, Field, field_validator


class ReferenceText(BaseModel):
    """
    The fixed text a recitation is checked against.

    An ordered sequence of lines (verses). Each line is an ordered sequence of
    space-separated words in Arabic script. The object is immutable and safe to
    share between concurrent verification attempts.

    Attributes:
        lines: Reference lines in recitation order
        title: Optional display name (e.g. the surah name)
    """

    lines: tuple[str, ...] = Field(
        ...,
        description="Reference lines in recitation order",
        min_length=1,
    )
    title: str | None = Field(
        default=None,
        description="Optional display name",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "lines": [
                        "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ",
                        "الْحَمْدُ لِلَّهِ رَبِّ الْعَالَمِينَ",
                    ],
                    "title": "الفاتحة",
                }
            ]
        },
    }

    @field_validator("lines", mode="before")
    @classmethod
    def strip_lines(cls, v):
        """Trim surrounding whitespace from every line."""
        if isinstance(v, str):
            v = v.splitlines()
        return tuple(line.strip() for line in v)

    @classmethod
    def coerce(cls, value: "ReferenceText | str | Sequence[str]") -> "ReferenceText":
        """Accept a ReferenceText, a newline-separated string or a list of lines."""
        if isinstance(value, cls):
            return value
        return cls(lines=value)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.lines)

    def words(self, index: int) -> list[str]:
        """Words of line `index`."""
        return self.lines[index].split()

    def __str__(self) -> str:
        name = self.title or "ReferenceText"
        return f"{name}({len(self.lines)} lines)"
