"""Points awarded for a correct guess."""

import math

from ipa_master.models.word import DifficultyLevel

BASE_POINTS = 10

# Multipliers kept in tenths so the floor is exact.
DIFFICULTY_MULTIPLIERS: dict[DifficultyLevel, int] = {
    DifficultyLevel.BEGINNER: 10,
    DifficultyLevel.INTERMEDIATE: 12,
    DifficultyLevel.ADVANCED: 15,
    DifficultyLevel.EXPERT: 20,
}


def time_bonus(elapsed_seconds: float) -> int:
    """Bonus for answering quickly."""
    if elapsed_seconds < 5:
        return 5
    elif elapsed_seconds < 10:
        return 3
    elif elapsed_seconds < 15:
        return 1
    return 0


def streak_bonus(streak: int) -> int:
    """One point per ten words of the current streak."""
    return streak // 10


def compute_points(
    elapsed_seconds: float,
    streak: int,
    difficulty: DifficultyLevel,
) -> int:
    """Compute points for a correct guess.

    Args:
        elapsed_seconds: Time since the word was presented.
        streak: Streak before this guess is counted.
        difficulty: Difficulty of the guessed word.

    Returns:
        ``floor((10 + time bonus + streak bonus) * multiplier)``.
    """
    base = BASE_POINTS + time_bonus(elapsed_seconds) + streak_bonus(streak)
    return base * DIFFICULTY_MULTIPLIERS.get(difficulty, 10) // 10


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)
