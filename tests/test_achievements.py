"""Tests for achievement evaluation."""

from datetime import datetime

import pytest

from ipa_master.models.game import GameMode, GameResult
from ipa_master.models.user_profile import (
    Achievement,
    PlayerStats,
    WordStats,
    default_achievements,
)
from ipa_master.models.word import DifficultyLevel
from ipa_master.progression.achievements import (
    ensure_achievements,
    evaluate_achievements,
    unlock_achievements,
)

NOW = datetime(2026, 10, 16, 12, 0, 0)


def ids(achievements: list[Achievement]) -> set[str]:
    return {a.id for a in achievements}


def result(**kwargs) -> GameResult:
    kwargs.setdefault("mode", GameMode.CLASSIC)
    kwargs.setdefault("hints_used", 1)
    return GameResult(**kwargs)


def test_first_game_always_unlocks():
    unlocked = evaluate_achievements(default_achievements(), result(), PlayerStats(), now=NOW)
    assert ids(unlocked) == {"firstGame"}
    assert unlocked[0].is_unlocked
    assert unlocked[0].unlocked_at == NOW


@pytest.mark.parametrize(
    "game, expected",
    [
        (result(max_streak=5), {"streak5"}),
        (result(max_streak=10), {"streak5", "streak10"}),
        (result(score=100), {"score100"}),
        (result(mode=GameMode.TIME_ATTACK, score=50), {"speedDemon"}),
        (result(mode=GameMode.CLASSIC, score=60), set()),
        (result(hints_used=0, total_words=10, total_correct=3), {"pureSkill"}),
        (result(hints_used=0, total_words=9), set()),
        (result(total_words=10, total_correct=10), {"perfectionist"}),
        (result(total_words=9, total_correct=9), set()),
    ],
)
def test_single_game_predicates(game, expected):
    unlocked = evaluate_achievements(default_achievements(), game, PlayerStats(), now=NOW)
    assert ids(unlocked) - {"firstGame"} == expected


def test_cumulative_predicates():
    stats = PlayerStats(
        time_played_seconds=1800,
        word_stats={
            DifficultyLevel.BEGINNER: WordStats(played=60, correct=50),
            DifficultyLevel.EXPERT: WordStats(played=30, correct=25),
        },
    )
    unlocked = evaluate_achievements(default_achievements(), result(), stats, now=NOW)
    assert {"beginnerMaster", "expertMaster", "marathon"} <= ids(unlocked)


def test_cumulative_thresholds_not_met():
    stats = PlayerStats(
        time_played_seconds=1799,
        word_stats={
            DifficultyLevel.BEGINNER: WordStats(played=60, correct=49),
            DifficultyLevel.EXPERT: WordStats(played=30, correct=24),
        },
    )
    unlocked = evaluate_achievements(default_achievements(), result(), stats, now=NOW)
    assert ids(unlocked) == {"firstGame"}


def test_evaluation_is_idempotent():
    achievements = default_achievements()
    game = result(max_streak=6)
    first = evaluate_achievements(achievements, game, PlayerStats(), now=NOW)
    achievements = unlock_achievements(achievements, first)

    second = evaluate_achievements(achievements, game, PlayerStats(), now=datetime(2030, 1, 1))

    assert second == []
    assert len(achievements) == len(default_achievements())
    streak5 = next(a for a in achievements if a.id == "streak5")
    assert streak5.unlocked_at == NOW


def test_input_list_not_modified():
    achievements = default_achievements()
    evaluate_achievements(achievements, result(), PlayerStats(), now=NOW)
    assert not any(a.is_unlocked for a in achievements)


def test_unlock_never_relocks_or_restamps():
    achievements = default_achievements()
    achievements[0] = achievements[0].model_copy(update={"is_unlocked": True, "unlocked_at": NOW})
    replacement = achievements[0].model_copy(update={"unlocked_at": datetime(2030, 1, 1)})
    merged = unlock_achievements(achievements, [replacement])
    assert merged[0].unlocked_at == NOW


def test_ensure_achievements_adds_missing_entries():
    partial = default_achievements()[:3]
    merged = ensure_achievements(partial)
    assert ids(merged) == ids(default_achievements())
    assert merged[:3] == partial
