"""Game session data models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from ipa_master.models.word import DifficultyLevel, Word

DEFAULT_TIME_ATTACK_SECONDS = 60


class GameMode(StrEnum):
    """Available game modes.

    Declaration order doubles as the tie-break order when picking the
    player's favorite mode.
    """

    CLASSIC = "classic"
    TIME_ATTACK = "time_attack"
    STREAK_10 = "streak10"
    STREAK_50 = "streak50"
    STREAK_100 = "streak100"

    @property
    def max_attempts(self) -> int:
        """Guesses allowed per word before it is revealed."""
        return 3 if self is GameMode.CLASSIC else 1

    @property
    def target_streak(self) -> int | None:
        """Streak that wins the game, if the mode has one."""
        return {
            GameMode.STREAK_10: 10,
            GameMode.STREAK_50: 50,
            GameMode.STREAK_100: 100,
        }.get(self)

    @property
    def is_timed(self) -> bool:
        return self is GameMode.TIME_ATTACK

    @property
    def label(self) -> str:
        if self.target_streak is not None:
            return f"{self.target_streak} Streak Challenge"
        return {GameMode.CLASSIC: "Classic", GameMode.TIME_ATTACK: "Time Attack"}[self]


class GameSettings(BaseModel):
    """Rules for a single game."""

    model_config = ConfigDict(frozen=True)

    mode: GameMode = GameMode.CLASSIC
    difficulty: DifficultyLevel | None = None
    time_limit: int | None = None
    target_streak: int | None = None

    @property
    def max_attempts(self) -> int:
        return self.mode.max_attempts

    @classmethod
    def for_mode(
        cls,
        mode: GameMode,
        difficulty: DifficultyLevel | None = None,
        time_attack_seconds: int = DEFAULT_TIME_ATTACK_SECONDS,
    ) -> "GameSettings":
        """Build the standard settings for a game mode."""
        return cls(
            mode=mode,
            difficulty=difficulty,
            time_limit=time_attack_seconds if mode.is_timed else None,
            target_streak=mode.target_streak,
        )


class WordOutcome(BaseModel):
    """How a single word was resolved."""

    model_config = ConfigDict(frozen=True)

    word: str
    difficulty: DifficultyLevel
    correct: bool
    time_spent_seconds: int = 0


class GameResult(BaseModel):
    """Immutable summary of a finished game."""

    model_config = ConfigDict(frozen=True)

    mode: GameMode
    score: int = 0
    max_streak: int = 0
    total_words: int = 0
    total_correct: int = 0
    hints_used: int = 0
    duration_seconds: int = 0
    is_winner: bool = False
    timestamp: datetime = Field(default_factory=datetime.now)
    word_outcomes: tuple[WordOutcome, ...] = ()


class FeedbackKind(StrEnum):
    """What a guess did to the session."""

    CORRECT = "correct"
    WON = "won"
    RETRY = "retry"
    REVEALED = "revealed"
    GAME_OVER = "game_over"


class GuessResult(BaseModel):
    """Outcome of submitting a guess."""

    is_correct: bool
    should_continue: bool
    feedback_kind: FeedbackKind
    points: int = 0
    streak: int = 0
    attempts_remaining: int | None = None
    answer: str | None = None

    @property
    def message(self) -> str:
        """Human-readable feedback line."""
        if self.feedback_kind is FeedbackKind.WON:
            return f"Correct! +{self.points} points. You won!"
        if self.feedback_kind is FeedbackKind.CORRECT:
            return f"Correct! +{self.points} points (Streak: {self.streak})"
        if self.feedback_kind is FeedbackKind.RETRY:
            return f"Incorrect. {self.attempts_remaining} attempts remaining."
        if self.feedback_kind is FeedbackKind.REVEALED:
            return f"Incorrect. The answer was: {self.answer}"
        return "The game is over."


class SessionSnapshot(BaseModel):
    """Read-only view of a live game session."""

    model_config = ConfigDict(frozen=True)

    settings: GameSettings
    current_word: Word | None
    attempts: int
    max_attempts: int
    score: int
    streak: int
    max_streak: int
    total_words: int
    total_correct: int
    hints_used: int
    hints_enabled: bool
    time_remaining: int | None
    is_finished: bool
    is_winner: bool
