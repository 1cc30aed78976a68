"""Win (Mahjong) detection - exact cover of 14 tiles by 5 melds.

A hand wins when its 14 tile positions can be partitioned into exactly five
candidate melds, at least one of which is a (hidden) pair.
"""

from typing import List, Sequence

from dlx_mahjong.core.tile import Tile
from dlx_mahjong.core.meld import Meld, MeldType
from dlx_mahjong.rules.exact_cover import find_exact_covers
from dlx_mahjong.rules.melds import find_melds

WINNING_HAND_SIZE = 14
WINNING_MELD_COUNT = 5


def is_winning_hand(tiles: Sequence[Tile]) -> bool:
    """Check if the tiles form a winning hand."""
    return len(winning_covers(tiles, first_only=True)) > 0


def winning_covers(tiles: Sequence[Tile], first_only: bool = False) -> List[List[Meld]]:
    """All exact covers of the hand with 5 melds including a pair.

    Cheap necessary conditions are checked before the exact-cover search:
    14 tiles, at least one pair, at least 5 candidates, and every position
    covered by some candidate.
    """
    if len(tiles) != WINNING_HAND_SIZE:
        return []

    melds = find_melds(tiles)
    if not any(m.meld_type == MeldType.PAIR for m in melds):
        return []
    if len(melds) < WINNING_MELD_COUNT:
        return []

    used = set()
    for m in melds:
        used.update(m.indices)
    if len(used) != WINNING_HAND_SIZE:
        return []

    covers = find_exact_covers([m.indices for m in melds], WINNING_HAND_SIZE)

    winning = []
    for cover in covers:
        if len(cover) != WINNING_MELD_COUNT:
            continue
        chosen = [melds[i] for i in sorted(cover)]
        if any(m.meld_type == MeldType.PAIR for m in chosen):
            winning.append(chosen)
            if first_only:
                break
    return winning
