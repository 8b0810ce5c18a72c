"""Achievement unlocking after a finished game."""

from collections.abc import Callable
from datetime import datetime

import structlog

from ipa_master.models.game import GameMode, GameResult
from ipa_master.models.user_profile import ACHIEVEMENT_CATALOGUE, Achievement, PlayerStats
from ipa_master.models.word import DifficultyLevel

logger = structlog.get_logger()

MARATHON_SECONDS = 1800

# Each predicate sees this game's result and the cumulative stats
# already updated with it.
Predicate = Callable[[GameResult, PlayerStats], bool]

ACHIEVEMENT_RULES: dict[str, Predicate] = {
    "firstGame": lambda result, stats: True,
    "streak5": lambda result, stats: result.max_streak >= 5,
    "streak10": lambda result, stats: result.max_streak >= 10,
    "score100": lambda result, stats: result.score >= 100,
    "beginnerMaster": lambda result, stats: (
        stats.word_stats[DifficultyLevel.BEGINNER].correct >= 50
    ),
    "expertMaster": lambda result, stats: stats.word_stats[DifficultyLevel.EXPERT].correct >= 25,
    "speedDemon": lambda result, stats: (
        result.mode is GameMode.TIME_ATTACK and result.score >= 50
    ),
    "pureSkill": lambda result, stats: result.hints_used == 0 and result.total_words >= 10,
    "marathon": lambda result, stats: stats.time_played_seconds >= MARATHON_SECONDS,
    "perfectionist": lambda result, stats: (
        result.total_words >= 10 and result.total_correct == result.total_words
    ),
}


def ensure_achievements(achievements: list[Achievement]) -> list[Achievement]:
    """Add catalogue entries missing from a stored achievement list."""
    known = {a.id for a in achievements}
    merged = list(achievements)
    for id_, name, description, icon in ACHIEVEMENT_CATALOGUE:
        if id_ not in known:
            merged.append(Achievement(id=id_, name=name, description=description, icon=icon))
    return merged


def evaluate_achievements(
    achievements: list[Achievement],
    result: GameResult,
    stats: PlayerStats,
    now: datetime | None = None,
) -> list[Achievement]:
    """Find achievements this game newly qualifies for.

    Already unlocked achievements are skipped, so evaluating the same
    state twice never unlocks anything twice. The input list is not
    modified.

    Args:
        achievements: The profile's current achievements.
        result: The finished game.
        stats: Cumulative stats including this game.
        now: Unlock timestamp (defaults to the current time).

    Returns:
        Unlocked copies of the achievements that qualified.
    """
    unlocked_at = now or datetime.now()
    newly_unlocked: list[Achievement] = []
    for achievement in achievements:
        if achievement.is_unlocked:
            continue
        rule = ACHIEVEMENT_RULES.get(achievement.id)
        if rule is None or not rule(result, stats):
            continue
        newly_unlocked.append(
            achievement.model_copy(update={"is_unlocked": True, "unlocked_at": unlocked_at})
        )

    if newly_unlocked:
        logger.info("achievements_unlocked", ids=[a.id for a in newly_unlocked])
    return newly_unlocked


def unlock_achievements(
    achievements: list[Achievement],
    unlocked: list[Achievement],
) -> list[Achievement]:
    """Merge newly unlocked achievements into a profile's list."""
    by_id = {a.id: a for a in unlocked}
    merged = []
    for achievement in achievements:
        replacement = by_id.get(achievement.id)
        if replacement is not None and not achievement.is_unlocked:
            merged.append(replacement)
        else:
            merged.append(achievement)
    return merged
