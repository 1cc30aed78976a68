"""Candidate meld (pair/chow/pong/kong) as a set of hand indices."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence, Tuple

from .tile import Tile


class MeldType(IntEnum):
    PAIR = 0
    CHOW = 1
    PONG = 2
    KONG = 3


class Visibility(IntEnum):
    HIDDEN = 0
    OPEN = 1
    MIXED = 2


@dataclass(frozen=True)
class Meld:
    """A candidate meld.

    Attributes:
        meld_type: Derived type of the grouping
        indices: Sorted positions in the hand the meld was computed from
    """
    meld_type: MeldType
    indices: Tuple[int, ...]

    def tiles(self, hand_tiles: Sequence[Tile]) -> Tuple[Tile, ...]:
        return tuple(hand_tiles[i] for i in self.indices)

    def __len__(self):
        return len(self.indices)


def visibility_of(tiles: Iterable[Tile]) -> Visibility:
    """Classify a group of tiles as all hidden, all open, or mixed."""
    states = {t.hidden for t in tiles}
    if states == {True}:
        return Visibility.HIDDEN
    if states == {False}:
        return Visibility.OPEN
    return Visibility.MIXED
