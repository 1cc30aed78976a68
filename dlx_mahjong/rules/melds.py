"""Candidate meld enumeration and pickup legality.

Melds are returned as index sets into the tile list they were computed from.
The scans are plain nested loops; hands hold at most 14 tiles.
"""

from itertools import combinations
from typing import List, Sequence, Set, Tuple

from dlx_mahjong.core.tile import Tile
from dlx_mahjong.core.meld import Meld, MeldType
from dlx_mahjong.core.hand import Hand
from dlx_mahjong.engine.action import PickupAction

IndexSet = Tuple[int, ...]


def find_pairs(tiles: Sequence[Tile]) -> List[IndexSet]:
    """Two identical tiles, both hidden."""
    pairs = []
    n = len(tiles)
    for i in range(n):
        if not tiles[i].hidden:
            continue
        for j in range(i + 1, n):
            if tiles[j].hidden and tiles[i] == tiles[j]:
                pairs.append((i, j))
    return pairs


def find_chows(tiles: Sequence[Tile]) -> List[IndexSet]:
    """Three numeric tiles of one suit with consecutive ranks and equal visibility."""
    chows = []
    for i, j, k in combinations(range(len(tiles)), 3):
        a, b, c = tiles[i], tiles[j], tiles[k]
        if not a.is_numeric or not (a.suit == b.suit == c.suit):
            continue
        if not (a.hidden == b.hidden == c.hidden):
            continue
        ranks = sorted((a.rank, b.rank, c.rank))
        if ranks[1] - ranks[0] == 1 and ranks[2] - ranks[1] == 1:
            chows.append((i, j, k))
    return chows


def find_pongs(tiles: Sequence[Tile]) -> List[IndexSet]:
    """Three identical tiles with equal visibility."""
    pongs = []
    for i, j, k in combinations(range(len(tiles)), 3):
        a, b, c = tiles[i], tiles[j], tiles[k]
        if a == b == c and a.hidden == b.hidden == c.hidden:
            pongs.append((i, j, k))
    return pongs


def find_kongs(tiles: Sequence[Tile]) -> List[IndexSet]:
    """Four identical tiles, visibility unconstrained."""
    kongs = []
    for i, j, k, m in combinations(range(len(tiles)), 4):
        if tiles[i] == tiles[j] == tiles[k] == tiles[m]:
            kongs.append((i, j, k, m))
    return kongs


def find_combinations(tiles: Sequence[Tile]) -> List[IndexSet]:
    """All candidate melds: pairs, then chows, pongs, kongs."""
    return find_pairs(tiles) + find_chows(tiles) + find_pongs(tiles) + find_kongs(tiles)


def find_melds(tiles: Sequence[Tile]) -> List[Meld]:
    """Same as find_combinations, wrapped as typed Meld objects."""
    typed = []
    for meld_type, finder in ((MeldType.PAIR, find_pairs), (MeldType.CHOW, find_chows),
                              (MeldType.PONG, find_pongs), (MeldType.KONG, find_kongs)):
        typed.extend(Meld(meld_type, idx) for idx in finder(tiles))
    return typed


# --- Pickup legality against a discarded tile ---

def can_kong(hand: Hand, tile: Tile) -> bool:
    return hand.count_hidden(tile) == 3


def can_pong(hand: Hand, tile: Tile) -> bool:
    return hand.count_hidden(tile) >= 2


def chow_options(hand: Hand, tile: Tile) -> List[int]:
    """Starting ranks of every run that the discarded tile would complete.

    E.g. holding hidden 4b 5b 7b, a discarded 6b gives [4, 5]
    (4-5-6 and 5-6-7).
    """
    if not tile.is_numeric:
        return []
    held: Set[int] = {
        t.rank for t in hand.tiles if t.hidden and t.suit == tile.suit
    }
    starts = []
    for start in range(tile.rank - 2, tile.rank + 1):
        if start < 1 or start + 2 > 9:
            continue
        needed = {start, start + 1, start + 2} - {tile.rank}
        if needed <= held:
            starts.append(start)
    return starts


def can_chow(hand: Hand, tile: Tile) -> bool:
    return bool(chow_options(hand, tile))


def is_next_seat(player: int, discarder: int, num_players: int = 4) -> bool:
    return player == (discarder + 1) % num_players


def available_pickups(hand: Hand, tile: Tile, player: int, discarder: int,
                      num_players: int = 4) -> List[PickupAction]:
    """Legal pickup actions for ``player`` on ``discarder``'s tile.

    Ordered by priority and always ending with NONE. Chow is only legal for
    the seat right after the discarder. A claim must leave the claimant at
    least one hidden tile to discard.
    """
    if player == discarder:
        return [PickupAction.NONE]
    hidden = len(hand.hidden_tiles)
    actions = []
    if can_kong(hand, tile) and hidden > 3:
        actions.append(PickupAction.KONG)
    if can_pong(hand, tile) and hidden > 2:
        actions.append(PickupAction.PONG)
    if (hidden > 2 and is_next_seat(player, discarder, num_players)
            and can_chow(hand, tile)):
        actions.append(PickupAction.CHOW)
    actions.append(PickupAction.NONE)
    return actions


def pickup_indices(hand: Hand, tile_index: int, action: PickupAction,
                   chow_start: int = None) -> List[int]:
    """Hand positions consumed by a pickup, the picked-up tile included.

    ``tile_index`` is where the picked-up tile sits in the hand. The other
    tiles are taken from the hidden ones, lowest index first.
    """
    tile = hand.tiles[tile_index]
    others = [i for i, t in enumerate(hand.tiles) if i != tile_index and t.hidden]

    if action in (PickupAction.KONG, PickupAction.PONG):
        needed = 3 if action == PickupAction.KONG else 2
        matching = [i for i in others if hand.tiles[i] == tile][:needed]
        if len(matching) < needed:
            raise ValueError(f"{action.name.lower()} on {tile.name} is not possible")
        return sorted(matching + [tile_index])

    if action == PickupAction.CHOW:
        if chow_start is None:
            options = chow_options(_without(hand, tile_index), tile)
            if not options:
                raise ValueError(f"chow on {tile.name} is not possible")
            chow_start = options[0]
        chosen = [tile_index]
        for rank in range(chow_start, chow_start + 3):
            if rank == tile.rank:
                continue
            index = next((i for i in others
                          if hand.tiles[i].suit == tile.suit and hand.tiles[i].rank == rank
                          and i not in chosen), None)
            if index is None:
                raise ValueError(f"chow starting at {chow_start} on {tile.name} is not possible")
            chosen.append(index)
        return sorted(chosen)

    return []


def _without(hand: Hand, index: int) -> Hand:
    return Hand(t for i, t in enumerate(hand.tiles) if i != index)
