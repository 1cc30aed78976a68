"""Tile definition: suit, rank and a hand-owned visibility flag."""

from enum import IntEnum
from typing import Dict, List, Tuple


class Suit(IntEnum):
    CIRCLES = 0
    BAMBOOS = 1
    CHARACTERS = 2
    WINDS = 3
    DRAGONS = 4


NUMERIC_SUITS = (Suit.CIRCLES, Suit.BAMBOOS, Suit.CHARACTERS)
HONOR_SUITS = (Suit.WINDS, Suit.DRAGONS)

WIND_NAMES = ["East", "South", "West", "North"]
DRAGON_NAMES = ["Red", "Green", "White"]

# Valid rank range per suit (inclusive)
RANK_RANGE: Dict[Suit, Tuple[int, int]] = {
    Suit.CIRCLES: (1, 9),
    Suit.BAMBOOS: (1, 9),
    Suit.CHARACTERS: (1, 9),
    Suit.WINDS: (0, 3),
    Suit.DRAGONS: (0, 2),
}

TERMINAL_RANKS = (1, 9)

# Shorthand suit letters used by make_tiles_from_string / Tile.short_name
SUIT_CHARS = {
    Suit.CIRCLES: 'c',
    Suit.BAMBOOS: 'b',
    Suit.CHARACTERS: 'k',
    Suit.WINDS: 'w',
    Suit.DRAGONS: 'd',
}
CHAR_SUITS = {ch: suit for suit, ch in SUIT_CHARS.items()}


class Tile:
    """A single tile.

    Identity is the (suit, rank) pair: two copies of Bamboos 3 compare equal.
    The ``hidden`` flag is state of the hand holding the tile and takes no part
    in equality, hashing or ordering.
    """
    __slots__ = ('_suit', '_rank', 'hidden')

    def __init__(self, suit: int, rank: int, hidden: bool = True):
        try:
            suit = Suit(suit)
        except ValueError:
            raise ValueError(f"suit must be 0..4, got {suit}") from None
        low, high = RANK_RANGE[suit]
        if not (low <= rank <= high):
            raise ValueError(
                f"rank for {suit.name.title()} must be {low}..{high}, got {rank}")
        self._suit = suit
        self._rank = rank
        self.hidden = hidden

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def key(self) -> Tuple[int, int]:
        return (int(self._suit), self._rank)

    @property
    def is_honor(self) -> bool:
        return self._suit in HONOR_SUITS

    @property
    def is_numeric(self) -> bool:
        return self._suit in NUMERIC_SUITS

    @property
    def is_terminal(self) -> bool:
        return self.is_numeric and self._rank in TERMINAL_RANKS

    @property
    def name(self) -> str:
        """Readable name such as 'Bamboos 3' or 'Winds East'."""
        if self._suit == Suit.WINDS:
            rank_name = WIND_NAMES[self._rank]
        elif self._suit == Suit.DRAGONS:
            rank_name = DRAGON_NAMES[self._rank]
        else:
            rank_name = str(self._rank)
        return f"{self._suit.name.title()} {rank_name}"

    @property
    def short_name(self) -> str:
        """Shorthand accepted by make_tiles_from_string, e.g. '3b' or '1w'."""
        number = self._rank if self.is_numeric else self._rank + 1
        return f"{number}{SUIT_CHARS[self._suit]}"

    def reveal(self):
        self.hidden = False

    def copy(self) -> 'Tile':
        return Tile(self._suit, self._rank, self.hidden)

    def __repr__(self):
        flag = "" if self.hidden else ", open"
        return f"Tile({self.short_name}{flag})"

    def __eq__(self, other):
        if isinstance(other, Tile):
            return self._suit == other._suit and self._rank == other._rank
        return NotImplemented

    def __hash__(self):
        return hash((int(self._suit), self._rank))

    def __lt__(self, other):
        if isinstance(other, Tile):
            return self.key < other.key
        return NotImplemented


def all_tile_kinds() -> List[Tile]:
    """One tile of each of the 34 kinds, in sort order."""
    kinds = []
    for suit in Suit:
        low, high = RANK_RANGE[suit]
        for rank in range(low, high + 1):
            kinds.append(Tile(suit, rank))
    return kinds


def make_tiles_from_string(s: str) -> List[Tile]:
    """Parse a shorthand string like '11c234b555k1111d11w' into hidden tiles.

    Digits are collected until a suit letter closes the group:
    c=Circles, b=Bamboos, k=Characters (ranks 1-9),
    w=Winds (1=East .. 4=North), d=Dragons (1=Red, 2=Green, 3=White).
    Whitespace is ignored.
    """
    tiles = []
    numbers: List[int] = []
    for ch in s:
        if ch.isdigit():
            numbers.append(int(ch))
        elif ch in CHAR_SUITS:
            suit = CHAR_SUITS[ch]
            for n in numbers:
                rank = n if suit in NUMERIC_SUITS else n - 1
                tiles.append(Tile(suit, rank))
            numbers = []
        elif ch.isspace():
            continue
        else:
            raise ValueError(f"unexpected character {ch!r} in tile string {s!r}")
    if numbers:
        raise ValueError(f"tile string {s!r} ends without a suit letter")
    return tiles


def tiles_to_string(tiles: List[Tile]) -> str:
    """Inverse of make_tiles_from_string (one group per tile)."""
    return "".join(t.short_name for t in tiles)
