"""Profile progression: lifetime stats, experience and level."""

from collections.abc import Sequence
from datetime import datetime

import structlog

from ipa_master.engine.rewards import round_half_up
from ipa_master.models.game import GameMode, GameResult, WordOutcome
from ipa_master.models.user_profile import PlayerStats, ProgressReport, UserProfile, WordStats
from ipa_master.models.word import DifficultyLevel
from ipa_master.progression.achievements import (
    ensure_achievements,
    evaluate_achievements,
    unlock_achievements,
)
from ipa_master.storage.profile_store import ProfileStore

logger = structlog.get_logger()

HISTORY_LIMIT = 100

EXPERIENCE_FOR_DIFFICULTY: dict[DifficultyLevel, int] = {
    DifficultyLevel.BEGINNER: 2,
    DifficultyLevel.INTERMEDIATE: 3,
    DifficultyLevel.ADVANCED: 5,
    DifficultyLevel.EXPERT: 8,
}


def update_word_stats(
    word_stats: dict[DifficultyLevel, WordStats],
    outcomes: Sequence[WordOutcome],
) -> dict[DifficultyLevel, WordStats]:
    """Fold word outcomes into per-difficulty stats (running average time)."""
    updated = {level: stats.model_copy() for level, stats in word_stats.items()}
    for outcome in outcomes:
        current = updated.get(outcome.difficulty, WordStats())
        updated[outcome.difficulty] = WordStats(
            played=current.played + 1,
            correct=current.correct + (1 if outcome.correct else 0),
            average_time_seconds=round_half_up(
                (current.average_time_seconds * current.played + outcome.time_spent_seconds)
                / (current.played + 1)
            ),
        )
    return updated


def most_played_mode(history: Sequence[GameResult], current_mode: GameMode) -> GameMode:
    """Mode played most often, counting the current game.

    Ties go to the mode declared first in ``GameMode``.
    """
    counts = {mode: 0 for mode in GameMode}
    for game in history:
        counts[game.mode] += 1
    counts[current_mode] += 1

    favorite = GameMode.CLASSIC
    best = 0
    for mode, count in counts.items():
        if count > best:
            best = count
            favorite = mode
    return favorite


def update_player_stats(
    stats: PlayerStats,
    result: GameResult,
    history: Sequence[GameResult] = (),
) -> PlayerStats:
    """Aggregate one finished game into lifetime stats.

    Args:
        stats: Stats before this game.
        result: The finished game.
        history: Previous games, used to pick the favorite mode.

    Returns:
        New stats; the input is not modified.
    """
    games = stats.total_games_played
    words_guessed = stats.total_words_guessed + result.total_words

    if words_guessed > 0:
        accuracy = round_half_up(
            (stats.total_words_guessed * stats.accuracy_percentage / 100 + result.total_correct)
            / words_guessed
            * 100
        )
    else:
        accuracy = stats.accuracy_percentage

    return PlayerStats(
        total_games_played=games + 1,
        total_words_guessed=words_guessed,
        total_words_correct=stats.total_words_correct + result.total_correct,
        average_score=round_half_up((stats.average_score * games + result.score) / (games + 1)),
        best_streak=max(stats.best_streak, result.max_streak),
        time_played_seconds=stats.time_played_seconds + result.duration_seconds,
        accuracy_percentage=accuracy,
        favorite_mode=most_played_mode(history, result.mode),
        word_stats=update_word_stats(stats.word_stats, result.word_outcomes),
    )


def calculate_experience_gain(result: GameResult) -> int:
    """Experience earned by a game."""
    exp = result.score * 2 + result.max_streak * 5 + result.total_correct * 3
    for outcome in result.word_outcomes:
        if outcome.correct:
            exp += EXPERIENCE_FOR_DIFFICULTY[outcome.difficulty]
    return int(exp)


def experience_for_level(level: int) -> int:
    """Cumulative experience needed to reach a level.

    Level ``L`` needs ``100 + 200 + ... + (L-1)*100`` experience, so level 2
    needs 100, level 3 needs 300, level 4 needs 600.
    """
    return 50 * level * (level - 1)


def calculate_level(experience: int) -> int:
    """Highest level whose threshold the experience has reached."""
    level = 1
    while experience >= experience_for_level(level + 1):
        level += 1
    return level


def append_history(
    history: Sequence[GameResult],
    result: GameResult,
    limit: int = HISTORY_LIMIT,
) -> list[GameResult]:
    """Append a game, dropping the oldest entries beyond ``limit``."""
    updated = [*history, result]
    if len(updated) > limit:
        updated = updated[len(updated) - limit:]
    return updated


def apply_game_result(
    profile: UserProfile,
    result: GameResult,
    history: Sequence[GameResult] = (),
    now: datetime | None = None,
) -> ProgressReport:
    """Apply a finished game to a profile.

    Args:
        profile: Profile before the game.
        result: The finished game.
        history: Games recorded before this one.
        now: Timestamp for newly unlocked achievements.

    Returns:
        Report holding the updated profile and what changed.
    """
    stats = update_player_stats(profile.stats, result, history)

    achievements = ensure_achievements(profile.achievements)
    new_achievements = evaluate_achievements(achievements, result, stats, now=now)
    achievements = unlock_achievements(achievements, new_achievements)

    gained = calculate_experience_gain(result)
    experience = profile.experience + max(0, gained)

    updated = profile.model_copy(
        update={
            "stats": stats,
            "achievements": achievements,
            "experience": experience,
            "level": calculate_level(experience),
        }
    )

    logger.info(
        "profile_progressed",
        experience_gained=gained,
        experience=experience,
        level=updated.level,
        new_achievements=len(new_achievements),
    )
    return ProgressReport(
        profile=updated,
        new_achievements=new_achievements,
        experience_gained=gained,
        previous_level=profile.level,
    )


def record_game_result(
    store: ProfileStore,
    result: GameResult,
    history_limit: int = HISTORY_LIMIT,
) -> ProgressReport:
    """Read-modify-write the stored profile and history for a finished game.

    Raises:
        PersistenceFailure: If the store cannot be read or written.
    """
    profile = store.read()
    history = store.read_history()

    report = apply_game_result(profile, result, history)

    store.write(report.profile)
    store.write_history(append_history(history, result, limit=history_limit))
    return report
