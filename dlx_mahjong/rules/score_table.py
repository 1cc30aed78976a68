"""Fixed meld score table.

Maps (meld type, suit, visibility, wind relevance) to
(base points, multiplier exponent). Built once at import and exposed as a
read-only mapping.

Wind relevance counts how many of (round wind, seat wind) a Wind-suit pong or
kong matches, 0..2; each match doubles once more. It is 0 for everything else.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from dlx_mahjong.core.meld import MeldType, Visibility
from dlx_mahjong.core.tile import Suit, NUMERIC_SUITS

ScoreKey = Tuple[MeldType, Suit, Visibility, int]
ScoreEntry = Tuple[int, int]

MAX_WIND_RELEVANCE = 2


def _build_score_table() -> Dict[ScoreKey, ScoreEntry]:
    table: Dict[ScoreKey, ScoreEntry] = {}

    # Pairs are always concealed
    for suit in Suit:
        base = 0 if suit in NUMERIC_SUITS else 2
        table[(MeldType.PAIR, suit, Visibility.HIDDEN, 0)] = (base, 0)

    # Chows only exist in numeric suits and are worth nothing
    for suit in NUMERIC_SUITS:
        for vis in (Visibility.HIDDEN, Visibility.OPEN):
            table[(MeldType.CHOW, suit, vis, 0)] = (0, 0)

    # Pongs: open scores double the hidden base
    for suit in NUMERIC_SUITS:
        table[(MeldType.PONG, suit, Visibility.HIDDEN, 0)] = (4, 0)
        table[(MeldType.PONG, suit, Visibility.OPEN, 0)] = (8, 0)
    table[(MeldType.PONG, Suit.DRAGONS, Visibility.HIDDEN, 0)] = (8, 1)
    table[(MeldType.PONG, Suit.DRAGONS, Visibility.OPEN, 0)] = (16, 1)
    for wind in range(MAX_WIND_RELEVANCE + 1):
        table[(MeldType.PONG, Suit.WINDS, Visibility.HIDDEN, wind)] = (8, wind)
        table[(MeldType.PONG, Suit.WINDS, Visibility.OPEN, wind)] = (16, wind)

    # Kongs may be partially revealed; mixed scores like open
    for vis in Visibility:
        hidden = vis == Visibility.HIDDEN
        for suit in NUMERIC_SUITS:
            table[(MeldType.KONG, suit, vis, 0)] = (8, 1) if hidden else (16, 1)
        table[(MeldType.KONG, Suit.DRAGONS, vis, 0)] = (16, 2) if hidden else (32, 2)
        for wind in range(MAX_WIND_RELEVANCE + 1):
            table[(MeldType.KONG, Suit.WINDS, vis, wind)] = \
                (16, 1 + wind) if hidden else (32, 1 + wind)

    return table


SCORE_TABLE: Mapping[ScoreKey, ScoreEntry] = MappingProxyType(_build_score_table())


def lookup(meld_type: MeldType, suit: Suit, visibility: Visibility,
           wind_relevance: int = 0) -> ScoreEntry:
    """Score entry for a meld. Raises KeyError for combinations that cannot occur."""
    return SCORE_TABLE[(meld_type, suit, visibility, wind_relevance)]
