"""Word source backed by a ``spelling,transcription`` dictionary file."""

import random
from pathlib import Path

import structlog

from ipa_master.errors import EmptyWordPool, MalformedWordRecord
from ipa_master.models.word import DifficultyLevel, Word
from ipa_master.words.difficulty import calculate_difficulty
from ipa_master.words.shuffle_bag import ShuffleBag

logger = structlog.get_logger()


def parse_word_line(line: str) -> Word:
    """Parse one dictionary record.

    Args:
        line: A ``spelling,transcription`` line.

    Returns:
        The parsed word with its difficulty classified.

    Raises:
        MalformedWordRecord: If either field is missing.
    """
    spelling, _, transcription = line.strip().partition(",")
    spelling = spelling.strip()
    # Only the first two fields are meaningful.
    transcription = transcription.split(",")[0].strip()
    if not spelling or not transcription:
        raise MalformedWordRecord(line)
    return Word(
        word=spelling,
        transcription=transcription,
        difficulty=calculate_difficulty(spelling, transcription),
    )


class WordSource:
    """Loads the dictionary and hands out words without early repeats.

    Args:
        path: Dictionary file, one ``spelling,transcription`` record per line.
        rng: Random generator shared by all draw scopes.
    """

    def __init__(self, path: Path, rng: random.Random | None = None):
        self.path = Path(path)
        self._rng = rng or random.Random()
        self._words: list[Word] = []
        self._by_difficulty: dict[DifficultyLevel, list[Word]] = {}
        self._by_spelling: dict[str, str] = {}
        self._bags: dict[DifficultyLevel | None, ShuffleBag[Word]] = {}

    @classmethod
    def from_words(cls, words: list[Word], rng: random.Random | None = None) -> "WordSource":
        """Build a source from already-parsed words (no file)."""
        source = cls(Path(), rng=rng)
        source._index(words)
        return source

    def __len__(self) -> int:
        return len(self._words)

    def load_words(self) -> None:
        """(Re)load the dictionary file, dropping malformed lines.

        Raises:
            FileNotFoundError: If the dictionary file is missing.
            EmptyWordPool: If no valid record was found.
        """
        words: list[Word] = []
        dropped = 0
        with open(self.path, encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    words.append(parse_word_line(line))
                except MalformedWordRecord:
                    dropped += 1
                    logger.debug("word_record_dropped", line=line.rstrip("\n"))

        if not words:
            raise EmptyWordPool()

        self._index(words)
        logger.info(
            "words_loaded",
            path=str(self.path),
            count=len(words),
            dropped=dropped,
            by_difficulty={level.value: len(ws) for level, ws in self._by_difficulty.items()},
        )

    def _index(self, words: list[Word]) -> None:
        self._words = list(words)
        self._by_difficulty = {level: [] for level in DifficultyLevel.ordered()}
        self._by_spelling = {}
        for word in self._words:
            self._by_difficulty[word.difficulty].append(word)
            self._by_spelling.setdefault(word.word.lower(), word.transcription)
        self._bags = {}

    def words(self, difficulty: DifficultyLevel | None = None) -> list[Word]:
        """All words in a scope (``None`` means every difficulty)."""
        if difficulty is None:
            return list(self._words)
        return list(self._by_difficulty.get(difficulty, []))

    def available_difficulties(self) -> list[DifficultyLevel]:
        return [level for level, ws in self._by_difficulty.items() if ws]

    def draw_random(self, difficulty: DifficultyLevel | None = None) -> Word:
        """Draw the next word for a scope.

        Raises:
            EmptyWordPool: If the scope holds no words.
        """
        bag = self._bags.get(difficulty)
        if bag is None:
            scope = difficulty.value if difficulty else None
            bag = ShuffleBag(self.words(difficulty), rng=self._rng, scope=scope)
            self._bags[difficulty] = bag
        return bag.draw()

    def lookup_transcription(self, spelling: str) -> str | None:
        """Transcription of an exact (case-insensitive) spelling, if known."""
        return self._by_spelling.get(spelling.strip().lower())
