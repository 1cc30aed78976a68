"""Shared discard pile."""

from typing import List, Optional

from .tile import Tile


class DiscardPile:
    """Tiles discarded during a round, most recent last."""

    def __init__(self):
        self.tiles: List[Tile] = []

    def add(self, tile: Tile):
        tile.hidden = True
        self.tiles.append(tile)

    def pop(self) -> Optional[Tile]:
        """Take the most recent discard (for a pickup), or None if empty."""
        if self.tiles:
            return self.tiles.pop()
        return None

    def peek_last(self) -> Optional[Tile]:
        if self.tiles:
            return self.tiles[-1]
        return None

    @property
    def size(self) -> int:
        return len(self.tiles)

    def count(self, tile: Tile) -> int:
        return sum(1 for t in self.tiles if t == tile)

    def __len__(self):
        return len(self.tiles)
