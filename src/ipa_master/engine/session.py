"""Live game session: guesses in, state transitions and rewards out."""

import asyncio
import math
import time
from collections.abc import Callable

import structlog

from ipa_master.engine.rewards import compute_points, round_half_up
from ipa_master.models.game import (
    FeedbackKind,
    GameResult,
    GameSettings,
    GuessResult,
    SessionSnapshot,
    WordOutcome,
)
from ipa_master.models.word import Word
from ipa_master.words.dictionary import WordSource

logger = structlog.get_logger()

FinishedCallback = Callable[["GameSession"], None]


class GameSession:
    """State machine for a single game.

    The session is either awaiting a guess for ``current_word`` or finished.
    All mutation goes through ``submit_guess``, ``request_hint``, ``tick`` and
    ``end_game``. None of them await, so on a single event loop a countdown
    tick and a guess can never interleave mid-update.

    Args:
        settings: Rules for this game.
        word_source: Loaded word source to draw from.
        clock: Monotonic clock in seconds.
        tick_interval: Seconds between countdown ticks.
    """

    def __init__(
        self,
        settings: GameSettings,
        word_source: WordSource,
        clock: Callable[[], float] = time.monotonic,
        tick_interval: float = 1.0,
    ):
        self.settings = settings
        self._source = word_source
        self._clock = clock
        self._tick_interval = tick_interval

        self.current_word: Word | None = None
        self.attempts = 0
        self.score = 0
        self.streak = 0
        self.max_streak = 0
        self.total_words = 0
        self.total_correct = 0
        self.hints_used = 0
        self.hints_enabled = False
        self.time_remaining: int | None = settings.time_limit
        self.is_winner = False
        self.is_finished = False
        self.word_outcomes: list[WordOutcome] = []

        self._started_at: float | None = None
        self._ended_at: float | None = None
        self._word_started_at: float | None = None
        self._countdown_task: asyncio.Task | None = None
        self._finished_event = asyncio.Event()
        self._finished_callbacks: list[FinishedCallback] = []

    @property
    def max_attempts(self) -> int:
        return self.settings.max_attempts

    def start(self) -> Word:
        """Present the first word. Calling it again is a no-op."""
        if self.current_word is None and not self.is_finished:
            self._started_at = self._clock()
            self._advance_word()
            logger.info(
                "game_started",
                mode=self.settings.mode.value,
                difficulty=self.settings.difficulty.value if self.settings.difficulty else None,
                time_limit=self.settings.time_limit,
            )
        return self.current_word

    def _advance_word(self) -> None:
        self.current_word = self._source.draw_random(self.settings.difficulty)
        self.total_words += 1
        self.attempts = 0
        self.hints_enabled = False
        self._word_started_at = self._clock()

    def _word_elapsed(self) -> float:
        if self._word_started_at is None:
            return 0.0
        return max(0.0, self._clock() - self._word_started_at)

    def _record_outcome(self, word: Word, correct: bool, elapsed: float) -> None:
        self.word_outcomes.append(
            WordOutcome(
                word=word.word,
                difficulty=word.difficulty,
                correct=correct,
                time_spent_seconds=round_half_up(elapsed),
            )
        )

    def submit_guess(self, raw_guess: str) -> GuessResult:
        """Check a guess against the current word.

        A guess is correct when its own transcription matches the current
        word's, so homophones are accepted.

        Args:
            raw_guess: Player input, compared case-insensitively.

        Returns:
            The guess outcome. After the game has finished every guess
            returns a ``game_over`` result.
        """
        if self.is_finished or self.current_word is None:
            return GuessResult(
                is_correct=False,
                should_continue=False,
                feedback_kind=FeedbackKind.GAME_OVER,
            )

        word = self.current_word
        guess = raw_guess.strip().lower()
        elapsed = self._word_elapsed()
        is_correct = bool(guess) and self._source.lookup_transcription(guess) == word.transcription
        self.attempts += 1

        logger.debug(
            "guess_submitted",
            word=word.word,
            guess=guess,
            correct=is_correct,
            attempt=self.attempts,
        )

        if is_correct:
            return self._handle_correct(word, elapsed)
        return self._handle_incorrect(word, elapsed)

    def _handle_correct(self, word: Word, elapsed: float) -> GuessResult:
        points = compute_points(elapsed, self.streak, word.difficulty)
        self.score += points
        self.total_correct += 1
        self.streak += 1
        self.max_streak = max(self.max_streak, self.streak)
        self._record_outcome(word, True, elapsed)

        target = self.settings.target_streak
        if target is not None and self.streak >= target:
            self._finish(won=True)
            return GuessResult(
                is_correct=True,
                should_continue=False,
                feedback_kind=FeedbackKind.WON,
                points=points,
                streak=self.streak,
            )

        self._advance_word()
        return GuessResult(
            is_correct=True,
            should_continue=True,
            feedback_kind=FeedbackKind.CORRECT,
            points=points,
            streak=self.streak,
        )

    def _handle_incorrect(self, word: Word, elapsed: float) -> GuessResult:
        self.streak = 0

        if self.attempts >= self.max_attempts:
            self._record_outcome(word, False, elapsed)
            self._advance_word()
            return GuessResult(
                is_correct=False,
                should_continue=True,
                feedback_kind=FeedbackKind.REVEALED,
                attempts_remaining=0,
                answer=word.word,
            )

        return GuessResult(
            is_correct=False,
            should_continue=True,
            feedback_kind=FeedbackKind.RETRY,
            attempts_remaining=self.max_attempts - self.attempts,
        )

    def request_hint(self) -> bool:
        """Reveal hints for the current word.

        Returns:
            True if hints were enabled by this call, False if they already
            were (or the game is over).
        """
        if self.is_finished or self.current_word is None or self.hints_enabled:
            return False
        self.hints_enabled = True
        self.hints_used += 1
        logger.debug("hint_requested", word=self.current_word.word, hints_used=self.hints_used)
        return True

    def tick(self) -> None:
        """Advance the countdown by one second; inert for untimed games."""
        if self.time_remaining is None or self.is_finished:
            return
        if self.time_remaining > 0:
            self.time_remaining -= 1
        if self.time_remaining == 0:
            logger.info("time_expired", score=self.score)
            self._finish(won=False)

    def start_countdown(self) -> None:
        """Schedule the once-per-second countdown on the running loop."""
        if self.time_remaining is None or self.is_finished or self._countdown_task is not None:
            return
        self._countdown_task = asyncio.create_task(self._countdown())

    async def _countdown(self) -> None:
        while not self.is_finished:
            await asyncio.sleep(self._tick_interval)
            self.tick()

    def stop_countdown(self) -> None:
        task = self._countdown_task
        self._countdown_task = None
        if task is None or task.done():
            return
        if task is not asyncio.current_task():
            task.cancel()

    def on_finished(self, callback: FinishedCallback) -> None:
        """Register a callback fired once when the game finishes."""
        self._finished_callbacks.append(callback)

    async def wait_finished(self) -> None:
        await self._finished_event.wait()

    def _finish(self, won: bool) -> None:
        if self.is_finished:
            return
        self.is_finished = True
        self.is_winner = won
        self._ended_at = self._clock()
        self.stop_countdown()
        self._finished_event.set()
        logger.info(
            "game_finished",
            mode=self.settings.mode.value,
            won=won,
            score=self.score,
            max_streak=self.max_streak,
            total_words=self.total_words,
            total_correct=self.total_correct,
        )
        for callback in self._finished_callbacks:
            callback(self)

    def end_game(self) -> GameResult:
        """Finish the game (if still running) and return its summary."""
        self._finish(won=False)
        return self.result()

    @property
    def duration_seconds(self) -> int:
        """Whole seconds since start (up to the end, once finished)."""
        if self._started_at is None:
            return 0
        end = self._ended_at if self._ended_at is not None else self._clock()
        return math.floor(max(0.0, end - self._started_at))

    def result(self) -> GameResult:
        return GameResult(
            mode=self.settings.mode,
            score=self.score,
            max_streak=self.max_streak,
            total_words=self.total_words,
            total_correct=self.total_correct,
            hints_used=self.hints_used,
            duration_seconds=self.duration_seconds,
            is_winner=self.is_winner,
            word_outcomes=tuple(self.word_outcomes),
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            settings=self.settings,
            current_word=self.current_word,
            attempts=self.attempts,
            max_attempts=self.max_attempts,
            score=self.score,
            streak=self.streak,
            max_streak=self.max_streak,
            total_words=self.total_words,
            total_correct=self.total_correct,
            hints_used=self.hints_used,
            hints_enabled=self.hints_enabled,
            time_remaining=self.time_remaining,
            is_finished=self.is_finished,
            is_winner=self.is_winner,
        )
