"""
Deterministic random source for dungeon generation.

A linear congruential generator with fixed constants so that a seed
reproduces the exact same dungeon on every run:

    state' = (state * 1103515245 + 12345) mod 2^31

Provides both a pure functional form (state in, state out) and a small
stateful wrapper used by the generation phases.
"""
from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")

MULTIPLIER = 1103515245
INCREMENT = 12345
MASK = 0x7FFFFFFF  # mod 2^31
MODULUS = MASK + 1


def lcg_next(state: int) -> Tuple[int, int]:
    """
    Advance the generator one step.

    Returns:
        (value, new_state) - the value is the new state itself
    """
    new_state = (state * MULTIPLIER + INCREMENT) & MASK
    return new_state, new_state


def random_int(state: int, bound: int) -> Tuple[int, int]:
    """
    Draw an integer in [0, bound) by modulo reduction.

    Returns:
        (value, new_state)
    """
    if bound <= 0:
        raise ValueError(f"Invalid bound: {bound}")
    value, new_state = lcg_next(state)
    return value % bound, new_state


class LCGRandom:
    """Stateful wrapper around the LCG recurrence."""

    def __init__(self, seed: int = 0):
        self.state = seed & MASK

    def next(self) -> int:
        """Advance and return the raw 31-bit value."""
        value, self.state = lcg_next(self.state)
        return value

    def randint_below(self, bound: int) -> int:
        """Integer in [0, bound)."""
        value, self.state = random_int(self.state, bound)
        return value

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high], both ends inclusive."""
        if high < low:
            raise ValueError(f"Empty range: [{low}, {high}]")
        return low + self.randint_below(high - low + 1)

    def random(self) -> float:
        """Float in [0, 1)."""
        return self.next() / MODULUS

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self.random() < probability

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence."""
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.randint_below(len(items))]

    def shuffle(self, items: List[T]) -> None:
        """Fisher-Yates shuffle in place, walking down from the last index."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randint_below(i + 1)
            items[i], items[j] = items[j], items[i]
