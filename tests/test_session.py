"""Tests for the game session state machine."""

import asyncio
import random

from conftest import make_word
from ipa_master.engine.session import GameSession
from ipa_master.models.game import FeedbackKind, GameMode, GameSettings
from ipa_master.models.word import DifficultyLevel
from ipa_master.words.dictionary import WordSource


def classic(difficulty=DifficultyLevel.BEGINNER) -> GameSettings:
    return GameSettings.for_mode(GameMode.CLASSIC, difficulty)


class TestStart:
    def test_start_presents_first_word(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        word = session.start()
        assert word.word == "cat"
        assert session.total_words == 1
        assert session.attempts == 0
        assert not session.is_finished

    def test_start_twice_is_noop(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        session.start()
        assert session.total_words == 1

    def test_scope_restricted_words(self, mixed_source, clock):
        session = GameSession(
            GameSettings.for_mode(GameMode.CLASSIC, DifficultyLevel.INTERMEDIATE),
            mixed_source,
            clock=clock,
        )
        session.start()
        for _ in range(6):
            assert session.current_word.difficulty == DifficultyLevel.INTERMEDIATE
            session.submit_guess(session.current_word.word)


class TestCorrectGuess:
    def test_quick_correct_guess(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        clock.advance(4)

        result = session.submit_guess("cat")

        assert result.is_correct
        assert result.should_continue
        assert result.feedback_kind == FeedbackKind.CORRECT
        assert result.points == 15
        assert session.score == 15
        assert session.streak == 1
        assert session.max_streak == 1
        assert session.total_correct == 1
        assert session.total_words == 2

    def test_case_insensitive(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        assert session.submit_guess("  CaT ").is_correct

    def test_homophone_is_accepted(self, clock):
        source = WordSource.from_words(
            [make_word("sun", "sʌn"), make_word("son", "sʌn")], rng=random.Random(3)
        )
        session = GameSession(classic(), source, clock=clock)
        session.start()
        other = "son" if session.current_word.word == "sun" else "sun"
        assert session.submit_guess(other).is_correct

    def test_unknown_word_is_incorrect(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        assert not session.submit_guess("kat").is_correct
        assert not session.submit_guess("").is_correct

    def test_streak_bonus_uses_streak_before_guess(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        for _ in range(10):
            session.submit_guess("cat")
        clock.advance(20)
        result = session.submit_guess("cat")
        # (10 + 0 + floor(10 * 0.1)) * 1
        assert result.points == 11

    def test_points_follow_word_difficulty(self, clock):
        source = WordSource.from_words([make_word("cat", "kæt", DifficultyLevel.EXPERT)])
        session = GameSession(classic(None), source, clock=clock)
        session.start()
        clock.advance(12)
        assert session.submit_guess("cat").points == 22


class TestIncorrectGuess:
    def test_three_wrong_guesses_reveal_and_advance(self, mixed_source, clock):
        session = GameSession(classic(), mixed_source, clock=clock)
        session.start()
        first = session.current_word
        session.submit_guess(first.word)
        assert session.streak == 1

        word = session.current_word
        r1 = session.submit_guess("zzz")
        assert r1.feedback_kind == FeedbackKind.RETRY
        assert r1.attempts_remaining == 2
        assert session.streak == 0
        assert session.current_word == word

        r2 = session.submit_guess("zzz")
        assert r2.attempts_remaining == 1
        assert session.current_word == word

        r3 = session.submit_guess("zzz")
        assert r3.feedback_kind == FeedbackKind.REVEALED
        assert r3.answer == word.word
        assert r3.should_continue
        assert session.attempts == 0
        assert session.total_words == 3

    def test_single_attempt_modes_reveal_immediately(self, cat_source, clock):
        session = GameSession(
            GameSettings.for_mode(GameMode.TIME_ATTACK), cat_source, clock=clock
        )
        session.start()
        result = session.submit_guess("dog")
        assert result.feedback_kind == FeedbackKind.REVEALED
        assert result.answer == "cat"

    def test_outcomes_recorded_only_when_word_resolves(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        clock.advance(2.5)
        session.submit_guess("zzz")
        session.submit_guess("zzz")
        assert session.word_outcomes == []

        session.submit_guess("zzz")
        assert len(session.word_outcomes) == 1
        outcome = session.word_outcomes[0]
        assert outcome.word == "cat"
        assert not outcome.correct
        assert outcome.time_spent_seconds == 3


class TestWinCondition:
    def test_streak_ten_wins_without_drawing_again(self, cat_source, clock):
        session = GameSession(
            GameSettings.for_mode(GameMode.STREAK_10), cat_source, clock=clock
        )
        session.start()
        for _ in range(9):
            assert session.submit_guess("cat").should_continue

        result = session.submit_guess("cat")

        assert result.feedback_kind == FeedbackKind.WON
        assert not result.should_continue
        assert session.is_finished
        assert session.is_winner
        assert session.total_words == 10

    def test_classic_never_wins_by_streak(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        for _ in range(120):
            session.submit_guess("cat")
        assert not session.is_finished

    def test_guess_after_finish_is_game_over(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        session.end_game()
        result = session.submit_guess("cat")
        assert result.feedback_kind == FeedbackKind.GAME_OVER
        assert not result.should_continue
        assert session.score == 0


class TestHints:
    def test_hint_once_per_word(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        assert session.request_hint() is True
        assert session.request_hint() is False
        assert session.hints_used == 1
        assert session.hints_enabled

    def test_hint_resets_on_next_word(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        session.request_hint()
        session.submit_guess("cat")
        assert not session.hints_enabled
        assert session.request_hint() is True
        assert session.hints_used == 2


class TestCountdown:
    def test_tick_to_zero_finishes_game(self, cat_source, clock):
        settings = GameSettings(mode=GameMode.TIME_ATTACK, time_limit=1)
        session = GameSession(settings, cat_source, clock=clock)
        session.start()

        session.tick()

        assert session.time_remaining == 0
        assert session.is_finished
        assert not session.is_winner

    def test_tick_after_finish_is_noop(self, cat_source, clock):
        settings = GameSettings(mode=GameMode.TIME_ATTACK, time_limit=5)
        session = GameSession(settings, cat_source, clock=clock)
        session.start()
        session.end_game()
        session.tick()
        assert session.time_remaining == 5

    def test_tick_inert_without_time_limit(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        session.tick()
        assert session.time_remaining is None
        assert not session.is_finished

    async def test_countdown_task_ends_game(self, cat_source):
        settings = GameSettings(mode=GameMode.TIME_ATTACK, time_limit=3)
        session = GameSession(settings, cat_source, tick_interval=0.01)
        finished = []
        session.on_finished(finished.append)
        session.start()
        session.start_countdown()

        await asyncio.wait_for(session.wait_finished(), timeout=2)

        assert session.time_remaining == 0
        assert not session.is_winner
        assert finished == [session]

    async def test_countdown_cancelled_when_game_ends(self, cat_source):
        settings = GameSettings(mode=GameMode.TIME_ATTACK, time_limit=50)
        session = GameSession(settings, cat_source, tick_interval=0.01)
        session.start()
        session.start_countdown()
        await asyncio.sleep(0.05)

        session.end_game()
        remaining = session.time_remaining
        await asyncio.sleep(0.05)

        assert session.time_remaining == remaining
        assert remaining > 0


class TestResult:
    def test_result_snapshot(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        clock.advance(3)
        session.submit_guess("cat")
        session.request_hint()
        clock.advance(10.7)

        result = session.end_game()

        assert result.mode == GameMode.CLASSIC
        assert result.score == 15
        assert result.max_streak == 1
        assert result.total_words == 2
        assert result.total_correct == 1
        assert result.hints_used == 1
        assert result.duration_seconds == 13
        assert not result.is_winner
        assert len(result.word_outcomes) == 1

    def test_end_game_keeps_win(self, cat_source, clock):
        session = GameSession(
            GameSettings.for_mode(GameMode.STREAK_10), cat_source, clock=clock
        )
        session.start()
        for _ in range(10):
            session.submit_guess("cat")
        assert session.end_game().is_winner

    def test_snapshot_reflects_state(self, cat_source, clock):
        session = GameSession(classic(), cat_source, clock=clock)
        session.start()
        session.submit_guess("zzz")
        snap = session.snapshot()
        assert snap.attempts == 1
        assert snap.max_attempts == 3
        assert snap.current_word.word == "cat"
        assert not snap.is_finished
