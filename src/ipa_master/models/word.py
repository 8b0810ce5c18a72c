"""Dictionary word models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class DifficultyLevel(StrEnum):
    """Word difficulty buckets, from easiest to hardest."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        """Position in the complexity order (0 = easiest)."""
        return list(DifficultyLevel).index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def ordered(cls) -> list["DifficultyLevel"]:
        return sorted(cls, key=lambda level: level.rank)


class Word(BaseModel):
    """A dictionary entry with its phonetic transcription."""

    model_config = ConfigDict(frozen=True)

    word: str
    transcription: str
    difficulty: DifficultyLevel


class Hint(BaseModel):
    """A phonetic symbol paired with an example word."""

    symbol: str
    example: str
