"""Injectable RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import List, Sequence, TypeVar

T_co = TypeVar("T_co")


class RNG:
    """Wrapper around random.Random so every roll in the engine goes through one source."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def uniform(self, a: float, b: float) -> float:
        """Return a random floating point number N such that a <= N <= b."""
        return a + (b - a) * self.random()

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[int(self.random() * len(seq))]

    def sample(self, seq: Sequence[T_co], k: int) -> List[T_co]:
        """Return k distinct elements drawn without replacement."""
        if k > len(seq):
            raise ValueError("Sample larger than population.")
        pool = list(seq)
        picked: List[T_co] = []
        for _ in range(k):
            picked.append(pool.pop(int(self.random() * len(pool))))
        return picked
