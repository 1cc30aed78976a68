"""The set of undrawn tiles (the wall)."""

import random
from typing import Iterable, List, Optional

from .tile import Tile, all_tile_kinds

COPIES_PER_KIND = 4
TOTAL_TILES = 136


class TileSet:
    """Undrawn tiles for one round: 4 copies of each of the 34 kinds.

    Tiles are drawn from the back of the list. An empty set yields ``None``
    from pop_tile; running out is the normal end of a round, not an error.
    """

    def __init__(self, shuffle: bool = True, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.tiles: List[Tile] = [
            Tile(kind.suit, kind.rank)
            for _ in range(COPIES_PER_KIND)
            for kind in all_tile_kinds()
        ]
        if shuffle:
            self.shuffle()

    @classmethod
    def from_tiles(cls, tiles: Iterable[Tile], rng: Optional[random.Random] = None) -> 'TileSet':
        """Build a set from a predetermined draw order; the last tile is drawn first."""
        tile_set = cls.__new__(cls)
        tile_set.rng = rng if rng is not None else random.Random()
        tile_set.tiles = list(tiles)
        return tile_set

    def shuffle(self):
        self.rng.shuffle(self.tiles)

    @property
    def size(self) -> int:
        """Number of tiles left to draw."""
        return len(self.tiles)

    @property
    def is_empty(self) -> bool:
        return len(self.tiles) == 0

    def pop_tile(self) -> Optional[Tile]:
        """Draw a tile, or None when the set is exhausted."""
        if self.tiles:
            return self.tiles.pop()
        return None

    def pop_tiles(self, n: int) -> List[Tile]:
        """Draw up to ``n`` tiles."""
        drawn = []
        for _ in range(n):
            tile = self.pop_tile()
            if tile is None:
                break
            drawn.append(tile)
        return drawn
