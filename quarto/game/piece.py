"""Quarto pieces as 4-bit attribute vectors."""

from __future__ import annotations

import enum
from dataclasses import dataclass

NUM_PIECES = 16


class Property(enum.IntFlag):
    TALL = 1 << 0
    ROUND = 1 << 1
    FULL = 1 << 2
    LIGHT = 1 << 3


# (letter when set, letter when clear) per property, in bit order
_LABELS = (
    (Property.TALL, "T", "s"),
    (Property.ROUND, "R", "q"),
    (Property.FULL, "F", "h"),
    (Property.LIGHT, "L", "d"),
)


@dataclass(frozen=True)
class Piece:
    properties: int = 0

    def __post_init__(self) -> None:
        assert 0 <= self.properties < NUM_PIECES, "top bits should be clear"

    @classmethod
    def with_props(cls, props: int) -> Piece:
        return cls(props)

    def get(self, prop: Property) -> bool:
        return (self.properties & prop) != 0

    def with_property(self, prop: Property, value: bool) -> Piece:
        """Return a copy of this piece with `prop` set or cleared."""
        if value:
            return Piece(self.properties | int(prop))
        return Piece(self.properties & ~int(prop) & (NUM_PIECES - 1))

    @property
    def label(self) -> str:
        """Four-letter code, uppercase for set attributes: e.g. 'TRFL', 'sqhd'."""
        return "".join(on if self.get(prop) else off for prop, on, off in _LABELS)

    def __str__(self) -> str:
        return self.label


def canonical_pieces() -> list[Piece]:
    """All 16 distinct pieces, lowest vector first."""
    return [Piece.with_props(i) for i in range(NUM_PIECES)]
