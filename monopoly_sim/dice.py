"""
Seeded random stream used for dice, shuffles and strategy decisions.
"""

import random
from typing import List, MutableSequence, Optional, Tuple, TypeVar

T = TypeVar("T")


class RandomStream:
    """
    Deterministic source of randomness for one game worker.

    Every random decision in a game goes through one stream, so a seed fully
    determines a game.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def double_dice_roll(self) -> Tuple[int, bool]:
        """Roll two dice. Returns (total, is_double)."""
        d1 = self._rng.randint(1, 6)
        d2 = self._rng.randint(1, 6)
        return d1 + d2, d1 == d2

    def single_dice_roll(self) -> int:
        return self._rng.randint(1, 6)

    def unit_float(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def uniform_bool(self) -> bool:
        return self._rng.random() < 0.5

    def biased_bool(self, probability: float) -> bool:
        """True with the given probability."""
        return self._rng.random() < probability

    def shuffle(self, items: MutableSequence[T]) -> None:
        self._rng.shuffle(items)

    def permutation(self, count: int) -> List[int]:
        order = list(range(count))
        self._rng.shuffle(order)
        return order

    def spawn_seed(self) -> int:
        """Draw a seed for an independent child stream."""
        return self._rng.getrandbits(63)
