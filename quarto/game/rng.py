"""Seeded RomuDuoJr generator.

Every agent owns one of these; its decisions depend only on its seed and the
positions it is shown.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

from .errors import EmptyChoice

T = TypeVar("T")

MASK64 = (1 << 64) - 1
MAX_U64 = MASK64

_MULTIPLIER = 15241094284759029579
_X_SEED_XOR = 0x12345
_Y_SEED_XOR = 0x6789A


def _rotl64(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (64 - shift))) & MASK64


class RandomSource:
    def __init__(self, seed: int) -> None:
        seed &= MASK64
        self._x = seed ^ _X_SEED_XOR
        self._y = seed ^ _Y_SEED_XOR

    @classmethod
    def with_seed(cls, seed: int) -> RandomSource:
        return cls(seed)

    def next(self) -> int:
        """Advance the state and return the next 64-bit value."""
        xp = self._x
        self._x = (_MULTIPLIER * self._y) & MASK64
        self._y = _rotl64((self._y - xp) & MASK64, 27)
        return xp

    def below(self, upper_bound_excl: int) -> int:
        """Uniform value in [0, upper_bound_excl) without modulo bias."""
        if upper_bound_excl <= 1:
            return 0
        limit = MAX_U64 - (MAX_U64 % upper_bound_excl)
        while True:
            rnd = self.next()
            if rnd < limit:
                return rnd % upper_bound_excl

    def choose(self, seq: Sequence[T]) -> T:
        if not seq:
            raise EmptyChoice("choosing from an empty sequence")
        return seq[self.below(len(seq))]
