"""Score calculation - best non-overlapping meld selection plus round-end bonuses."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from dlx_mahjong.core.tile import Tile, Suit, NUMERIC_SUITS, TERMINAL_RANKS
from dlx_mahjong.core.meld import Meld, MeldType, visibility_of
from dlx_mahjong.core.hand import Hand
from dlx_mahjong.core.player_state import Wind
from dlx_mahjong.rules.melds import find_melds
from dlx_mahjong.rules.score_table import lookup

MAHJONG_BONUS = 20
CONCEALED_BONUS = 20
SINGLE_SUIT_EXP = 3
SINGLE_HONOR_SUIT_EXP = 4
ONE_NUMERIC_SUIT_EXP = 2
TERMINALS_ONLY_EXP = 4

# Ceiling applied per round when adding to a player's running score
SCORE_CAP = 3000


@dataclass(frozen=True)
class ScoreResult:
    """A score as base points doubled ``multiplier_exp`` times."""
    base: int = 0
    multiplier_exp: int = 0

    @property
    def total(self) -> int:
        return self.base * 2 ** self.multiplier_exp

    def add(self, base: int = 0, multiplier_exp: int = 0) -> 'ScoreResult':
        return ScoreResult(self.base + base, self.multiplier_exp + multiplier_exp)

    def capped(self, cap: int = SCORE_CAP) -> int:
        return min(self.total, cap)

    def __str__(self):
        return f"{self.total} ({self.base} doubled {self.multiplier_exp} times)"


def wind_relevance(tile: Tile, meld_type: MeldType, round_wind: Wind, seat_wind: Wind) -> int:
    """How many of the round/seat winds a Wind pong or kong matches."""
    if tile.suit != Suit.WINDS or meld_type not in (MeldType.PONG, MeldType.KONG):
        return 0
    return int(tile.rank == round_wind) + int(tile.rank == seat_wind)


def meld_score(tiles: Sequence[Tile], meld: Meld, round_wind: Wind,
               seat_wind: Wind) -> Tuple[int, int]:
    """Table entry (base, multiplier exponent) for one meld of ``tiles``."""
    group = meld.tiles(tiles)
    first = group[0]
    wind = wind_relevance(first, meld.meld_type, round_wind, seat_wind)
    return lookup(meld.meld_type, first.suit, visibility_of(group), wind)


def max_score(tiles: Sequence[Tile], round_wind: Wind, seat_wind: Wind,
              melds: Optional[List[Meld]] = None) -> ScoreResult:
    """Highest-base selection of pairwise disjoint candidate melds.

    Candidates are tried in enumeration order (pairs, chows, pongs, kongs).
    The multiplier exponent is the one accumulated along the best-base path;
    on equal base the first path found is kept.
    """
    if melds is None:
        melds = find_melds(tiles)
    entries = [meld_score(tiles, m, round_wind, seat_wind) for m in melds]
    masks = [_mask(m.indices) for m in melds]
    memo: Dict[Tuple[int, int], Tuple[int, int]] = {}

    def best_from(start: int, used: int) -> Tuple[int, int]:
        key = (start, used)
        if key in memo:
            return memo[key]
        best_base, best_exp = 0, 0
        for i in range(start, len(melds)):
            if used & masks[i]:
                continue
            base, exp = entries[i]
            next_base, next_exp = best_from(i + 1, used | masks[i])
            if next_base + base > best_base:
                best_base = next_base + base
                best_exp = next_exp + exp
        memo[key] = (best_base, best_exp)
        return best_base, best_exp

    base, exp = best_from(0, 0)
    return ScoreResult(base, exp)


def visible_score(hand: Hand, round_wind: Wind, seat_wind: Wind) -> ScoreResult:
    """Score of the open tiles only - what the other players can see."""
    return max_score(hand.visible_tiles, round_wind, seat_wind)


def final_score(hand: Hand, round_wind: Wind, seat_wind: Wind,
                mahjong: bool = False, full_hand: bool = True) -> ScoreResult:
    """Round-end score for a hand.

    Args:
        hand: The player's hand
        round_wind: Current round wind
        seat_wind: The player's seat wind
        mahjong: Whether this player declared Mahjong (adds the bonuses)
        full_hand: Score all tiles; False scores only the open tiles
    """
    if full_hand:
        score = max_score(hand.tiles, round_wind, seat_wind)
    else:
        score = visible_score(hand, round_wind, seat_wind)

    if mahjong:
        score = score.add(*mahjong_bonus(hand))
    return score


def mahjong_bonus(hand: Hand) -> Tuple[int, int]:
    """(base, exponent) bonuses for a winning hand."""
    base = MAHJONG_BONUS
    exp = 0

    if hand.is_concealed:
        base += CONCEALED_BONUS

    suits = hand.suits()
    if len(suits) == 1:
        if next(iter(suits)) in NUMERIC_SUITS:
            exp += SINGLE_SUIT_EXP
        else:
            exp += SINGLE_HONOR_SUIT_EXP

    numeric = [s for s in suits if s in NUMERIC_SUITS]
    if len(numeric) == 1:
        exp += ONE_NUMERIC_SUIT_EXP

    # Every numeric tile shares one rank, and it is a 1 or a 9
    ranks = hand.numeric_ranks()
    if len(ranks) == 1 and ranks <= set(TERMINAL_RANKS):
        exp += TERMINALS_ONLY_EXP

    return base, exp


def _mask(indices: Sequence[int]) -> int:
    mask = 0
    for i in indices:
        mask |= 1 << i
    return mask
