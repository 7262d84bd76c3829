from __future__ import annotations

import enum
from typing import NamedTuple


class Player(enum.Enum):
    PLAYER_ONE = 1
    PLAYER_TWO = 2

    @property
    def other(self) -> Player:
        return Player.PLAYER_TWO if self is Player.PLAYER_ONE else Player.PLAYER_ONE

    def __str__(self) -> str:
        return f"Player {self.value}"


class Point(NamedTuple):
    row: int  # 0-indexed, 0 = top
    col: int  # 0-indexed, 0 = left


class ArrayBase(enum.Enum):
    """Offset used when showing positions and piece numbers to people."""

    ZERO = 0
    ONE = 1

    def based(self, zero_based: int) -> int:
        return zero_based + self.value

    def unbased(self, based: int) -> int:
        return based - self.value
