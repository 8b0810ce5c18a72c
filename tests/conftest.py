"""Shared fixtures."""

import random

import pytest

from ipa_master.models.word import DifficultyLevel, Word
from ipa_master.words.dictionary import WordSource


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_word(
    word: str,
    transcription: str,
    difficulty: DifficultyLevel = DifficultyLevel.BEGINNER,
) -> Word:
    return Word(word=word, transcription=transcription, difficulty=difficulty)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cat_source() -> WordSource:
    """A source holding only {cat: kæt}."""
    return WordSource.from_words([make_word("cat", "kæt")], rng=random.Random(0))


@pytest.fixture
def mixed_source() -> WordSource:
    words = [
        make_word("cat", "kæt"),
        make_word("dog", "dɔg"),
        make_word("sun", "sʌn"),
        make_word("son", "sʌn"),
        make_word("teacher", "titʃɚ", DifficultyLevel.INTERMEDIATE),
        make_word("kitchen", "kɪtʃən", DifficultyLevel.INTERMEDIATE),
        make_word("adventure", "ədvɛntʃɚ", DifficultyLevel.ADVANCED),
        make_word("imagination", "ɪmædʒənejʃən", DifficultyLevel.EXPERT),
    ]
    return WordSource.from_words(words, rng=random.Random(42))
