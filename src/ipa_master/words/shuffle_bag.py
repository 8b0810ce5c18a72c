"""Shuffle-bag draw policy."""

import random
from collections.abc import Iterator, Sequence
from typing import Generic, TypeVar

from ipa_master.errors import EmptyWordPool

T = TypeVar("T")


class ShuffleBag(Generic[T]):
    """Draws every item exactly once per cycle, in a fresh random order each cycle.

    When the bag runs dry it is refilled with all items and shuffled
    (Fisher-Yates via ``random.Random.shuffle``); draws pop from the end.
    The first draw of a new cycle never repeats the last draw of the
    previous one unless the bag holds a single item.

    Args:
        items: Items in scope.
        rng: Random generator (seed it for reproducible order).
        scope: Label used in errors and logs.
    """

    def __init__(
        self,
        items: Sequence[T],
        rng: random.Random | None = None,
        scope: str | None = None,
    ):
        self._items: list[T] = list(items)
        self._rng = rng or random.Random()
        self._scope = scope
        self._pool: list[T] = []
        self._last: T | None = None
        self.cycles = 0

    def __len__(self) -> int:
        return len(self._items)

    @property
    def remaining(self) -> int:
        """Draws left before the next refill."""
        return len(self._pool)

    def _refill(self) -> None:
        self._pool = list(self._items)
        self._rng.shuffle(self._pool)
        if len(self._pool) > 1 and self._pool[-1] == self._last:
            self._pool[0], self._pool[-1] = self._pool[-1], self._pool[0]
        self.cycles += 1

    def draw(self) -> T:
        """Draw the next item.

        Raises:
            EmptyWordPool: If the bag has no items in scope.
        """
        if not self._items:
            raise EmptyWordPool(self._scope)
        if not self._pool:
            self._refill()
        item = self._pool.pop()
        self._last = item
        return item

    def __iter__(self) -> Iterator[T]:
        while True:
            yield self.draw()
