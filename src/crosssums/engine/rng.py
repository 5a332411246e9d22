"""Seeded linear congruential stream used for every random draw in the engine."""

from __future__ import annotations

from typing import Sequence, TypeVar

__all__ = ["MULTIPLIER", "INCREMENT", "SeededStream"]

MULTIPLIER = 1103515245
INCREMENT = 12345
_MASK64 = (1 << 64) - 1
_HIGH_SPAN = 1 << 32

T = TypeVar("T")


class SeededStream:
    """Deterministic 64-bit LCG: ``state = state * A + C (mod 2**64)``.

    Bounded draws reduce the high 32 bits of each output; the low-order bits of
    a power-of-two modulus LCG have very short periods (bit 0 alternates).
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = int(seed) & _MASK64

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> int:
        """Advance the generator and return the new 64-bit state."""

        self._state = (self._state * MULTIPLIER + INCREMENT) & _MASK64
        return self._state

    def below(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``."""

        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        if bound > _HIGH_SPAN:
            raise ValueError(f"bound must not exceed 2**32, got {bound}")
        limit = _HIGH_SPAN - (_HIGH_SPAN % bound)
        while True:
            value = self.next() >> 32
            if value < limit:
                return value % bound

    def randrange(self, start: int, stop: int) -> int:
        if stop <= start:
            raise ValueError(f"empty range [{start}, {stop})")
        return start + self.below(stop - start)

    def randint(self, lo: int, hi: int) -> int:
        return self.randrange(lo, hi + 1)

    def random(self) -> float:
        """Float in ``[0, 1)`` built from the top 53 bits of the next output."""

        return (self.next() >> 11) / float(1 << 53)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.below(len(items))]
