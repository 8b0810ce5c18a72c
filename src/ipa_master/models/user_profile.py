"""Player profile models for tracking progress across games."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from ipa_master.engine.rewards import round_half_up
from ipa_master.models.game import GameMode
from ipa_master.models.word import DifficultyLevel


class WordStats(BaseModel):
    """Lifetime results for one difficulty level."""

    played: int = 0
    correct: int = 0
    average_time_seconds: int = 0

    @model_validator(mode="after")
    def _check_counts(self) -> "WordStats":
        if self.correct > self.played:
            raise ValueError("correct cannot exceed played")
        return self

    @property
    def accuracy(self) -> int:
        if self.played == 0:
            return 0
        return round_half_up(self.correct / self.played * 100)


def _default_word_stats() -> dict[DifficultyLevel, WordStats]:
    return {level: WordStats() for level in DifficultyLevel.ordered()}


class PlayerStats(BaseModel):
    """Statistics aggregated over every game played."""

    total_games_played: int = 0
    total_words_guessed: int = 0
    total_words_correct: int = 0
    average_score: int = 0
    best_streak: int = 0
    time_played_seconds: int = 0
    accuracy_percentage: int = 0
    favorite_mode: GameMode = GameMode.CLASSIC
    word_stats: dict[DifficultyLevel, WordStats] = Field(default_factory=_default_word_stats)

    @model_validator(mode="after")
    def _fill_missing_levels(self) -> "PlayerStats":
        for level in DifficultyLevel.ordered():
            self.word_stats.setdefault(level, WordStats())
        return self


class Achievement(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    is_unlocked: bool = False
    unlocked_at: datetime | None = None


# (id, name, description, icon)
ACHIEVEMENT_CATALOGUE: list[tuple[str, str, str, str]] = [
    ("firstGame", "First Steps", "Play your first game", "👶"),
    ("streak5", "On a Roll", "Get a 5-word streak", "🔥"),
    ("streak10", "Unstoppable", "Get a 10-word streak", "🛑"),
    ("score100", "Century", "Score 100 points in a single game", "💯"),
    ("beginnerMaster", "Beginner Master", "Get 50 correct beginner words", "🎓"),
    ("expertMaster", "Expert Master", "Get 25 correct expert words", "👑"),
    ("speedDemon", "Speed Demon", "Complete Time Attack with 50+ points", "🏃"),
    ("pureSkill", "Pure Skill", "Complete a 10+ word game without hints", "🧠"),
    ("marathon", "Marathon Player", "Play for 30 minutes total", "⏰"),
    ("perfectionist", "Perfectionist", "Get 100% accuracy in a 10+ word game", "✨"),
]


def default_achievements() -> list[Achievement]:
    """Fresh, fully locked achievement list."""
    return [
        Achievement(id=id_, name=name, description=description, icon=icon)
        for id_, name, description, icon in ACHIEVEMENT_CATALOGUE
    ]


class UserProfile(BaseModel):
    name: str = "Player"
    level: int = 1
    experience: int = 0
    stats: PlayerStats = Field(default_factory=PlayerStats)
    achievements: list[Achievement] = Field(default_factory=default_achievements)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def unlocked_achievements(self) -> list[Achievement]:
        return [a for a in self.achievements if a.is_unlocked]

    @property
    def locked_achievements(self) -> list[Achievement]:
        return [a for a in self.achievements if not a.is_unlocked]


class ProgressReport(BaseModel):
    """What recording a finished game did to the profile."""

    profile: UserProfile
    new_achievements: list[Achievement] = Field(default_factory=list)
    experience_gained: int = 0
    previous_level: int = 1

    @property
    def leveled_up(self) -> bool:
        return self.profile.level > self.previous_level
