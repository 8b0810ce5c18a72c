"""Difficulty classification from spelling length and phonetic complexity."""

import re

from ipa_master.models.word import DifficultyLevel

COMPLEX_SOUNDS = ["θ", "ð", "ʃ", "ʒ", "ŋ", "tʃ", "dʒ", "æ", "ɔj", "aj", "aw", "ɚ", "ɝ"]

_VOWEL_PATTERN = re.compile(r"[aeiouæɑɔəɚɛɜɝɪʊʌ]")


def _length_score(spelling: str) -> int:
    if len(spelling) <= 4:
        return 0
    elif len(spelling) <= 7:
        return 1
    elif len(spelling) <= 10:
        return 2
    return 3


def count_vowel_sounds(transcription: str) -> int:
    """Rough syllable count: number of vowel symbols in the transcription."""
    return len(_VOWEL_PATTERN.findall(transcription))


def complexity_score(spelling: str, transcription: str) -> int:
    """Score a word on length, complex sounds and syllables.

    Args:
        spelling: Written form of the word.
        transcription: IPA transcription.

    Returns:
        Integer score, 0 (trivial) upward.
    """
    score = _length_score(spelling)

    # Overlapping sounds (e.g. "ʃ" inside "tʃ") count for each symbol.
    complex_count = sum(transcription.count(sound) for sound in COMPLEX_SOUNDS)
    score += min(complex_count, 3)

    syllables = count_vowel_sounds(transcription)
    if syllables >= 3:
        score += 1
    if syllables >= 5:
        score += 1
    return score


def calculate_difficulty(spelling: str, transcription: str) -> DifficultyLevel:
    """Map a word to its difficulty bucket."""
    score = complexity_score(spelling, transcription)
    if score <= 2:
        return DifficultyLevel.BEGINNER
    elif score <= 4:
        return DifficultyLevel.INTERMEDIATE
    elif score <= 6:
        return DifficultyLevel.ADVANCED
    return DifficultyLevel.EXPERT
