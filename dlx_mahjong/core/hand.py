"""Hand management - the ordered tiles one player holds."""

from typing import Iterable, List, Optional, Set

from .tile import Tile, NUMERIC_SUITS

# Tiles held while waiting; one more only between draw/pickup and discard
HAND_SIZE = 13


class Hand:
    """Manages a player's tiles during a round.

    Attributes:
        tiles: Tiles in hand, in display order. Open (revealed) tiles stay in
            the list with ``hidden`` cleared.
        draw_tile: The most recently drawn or picked-up tile
    """

    def __init__(self, tiles: Optional[Iterable[Tile]] = None):
        self.tiles: List[Tile] = list(tiles) if tiles is not None else []
        self.draw_tile: Optional[Tile] = None

    def __len__(self):
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)

    def __getitem__(self, index: int) -> Tile:
        return self.tiles[index]

    @property
    def size(self) -> int:
        return len(self.tiles)

    @property
    def is_full(self) -> bool:
        """Whether the hand holds the transient 14th tile."""
        return len(self.tiles) == HAND_SIZE + 1

    def deal(self, tiles: Iterable[Tile]):
        """Receive the initial 13 tiles."""
        if self.tiles:
            raise ValueError("cannot deal into a hand that already holds tiles")
        self.tiles = list(tiles)
        if len(self.tiles) != HAND_SIZE:
            raise ValueError(f"a dealt hand holds {HAND_SIZE} tiles, got {len(self.tiles)}")

    def draw(self, tile: Tile):
        """Add a tile drawn from the set or picked up from the discard pile."""
        if len(self.tiles) != HAND_SIZE:
            raise ValueError(
                f"can only draw into a {HAND_SIZE}-tile hand, hand holds {len(self.tiles)}")
        tile.hidden = True
        self.tiles.append(tile)
        self.draw_tile = tile

    def discard(self, index: int) -> Tile:
        """Remove and return the hidden tile at ``index``."""
        if len(self.tiles) != HAND_SIZE + 1:
            raise ValueError("not enough tiles in hand, draw tiles first")
        if not (0 <= index < len(self.tiles)):
            raise ValueError(f"discard index must be 0..{len(self.tiles) - 1}, got {index}")
        if not self.tiles[index].hidden:
            raise ValueError(f"{self.tiles[index].name} is open and cannot be discarded")
        tile = self.tiles.pop(index)
        self.draw_tile = None
        return tile

    def valid_discards(self) -> List[int]:
        """Indices of tiles that may be discarded (the hidden ones)."""
        return [i for i, t in enumerate(self.tiles) if t.hidden]

    def sort(self):
        """Sort by suit then rank. Stable, so equal tiles keep their order."""
        self.tiles.sort()

    def reveal(self, indices: Iterable[int]):
        """Mark the tiles at ``indices`` open."""
        for i in indices:
            self.tiles[i].reveal()

    @property
    def hidden_tiles(self) -> List[Tile]:
        return [t for t in self.tiles if t.hidden]

    @property
    def visible_tiles(self) -> List[Tile]:
        return [t for t in self.tiles if not t.hidden]

    @property
    def is_concealed(self) -> bool:
        """Whether no tile has been revealed by a pickup."""
        return all(t.hidden for t in self.tiles)

    def count(self, tile: Tile) -> int:
        return sum(1 for t in self.tiles if t == tile)

    def count_hidden(self, tile: Tile) -> int:
        return sum(1 for t in self.tiles if t.hidden and t == tile)

    def count_suit(self, suit: int) -> int:
        return sum(1 for t in self.tiles if t.suit == suit)

    def suits(self) -> Set[int]:
        return {t.suit for t in self.tiles}

    def numeric_ranks(self) -> Set[int]:
        """Ranks present among numeric tiles; Winds and Dragons are ignored."""
        return {t.rank for t in self.tiles if t.suit in NUMERIC_SUITS}

    def clone(self) -> 'Hand':
        """Deep copy, tile flags included, for snapshots."""
        h = Hand(t.copy() for t in self.tiles)
        draw_index = self._draw_index()
        if draw_index is not None:
            h.draw_tile = h.tiles[draw_index]
        return h

    def _draw_index(self) -> Optional[int]:
        for i, t in enumerate(self.tiles):
            if t is self.draw_tile:
                return i
        return None

    def __repr__(self):
        return f"Hand({' '.join(repr(t) for t in self.tiles)})"
