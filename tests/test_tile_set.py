"""Tests for tile_set.py and discard_pile.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import random
from collections import Counter

from dlx_mahjong.core.tile import Tile, Suit, make_tiles_from_string
from dlx_mahjong.core.tile_set import TileSet, TOTAL_TILES
from dlx_mahjong.core.discard_pile import DiscardPile


class TestTileSet:
    def test_full_set(self):
        tile_set = TileSet()
        assert tile_set.size == TOTAL_TILES == 136
        counts = Counter(t.key for t in tile_set.tiles)
        assert len(counts) == 34
        assert set(counts.values()) == {4}

    def test_draw_until_empty(self):
        tile_set = TileSet(rng=random.Random(1))
        count = 0
        while not tile_set.is_empty:
            assert tile_set.pop_tile() is not None
            count += 1
        assert count == 136
        assert tile_set.pop_tile() is None

    def test_seeded_shuffle_reproducible(self):
        a = TileSet(rng=random.Random(42))
        b = TileSet(rng=random.Random(42))
        assert [t.key for t in a.tiles] == [t.key for t in b.tiles]

    def test_from_tiles_draws_last_first(self):
        tile_set = TileSet.from_tiles(make_tiles_from_string("1c2c3c"))
        assert tile_set.pop_tile() == Tile(Suit.CIRCLES, 3)
        assert tile_set.pop_tiles(5) == [Tile(Suit.CIRCLES, 2), Tile(Suit.CIRCLES, 1)]
        assert tile_set.is_empty


class TestDiscardPile:
    def test_empty(self):
        pile = DiscardPile()
        assert pile.pop() is None
        assert pile.peek_last() is None
        assert pile.size == 0

    def test_add_and_pop(self):
        pile = DiscardPile()
        tile = Tile(Suit.BAMBOOS, 5, hidden=False)
        pile.add(Tile(Suit.WINDS, 1))
        pile.add(tile)
        assert tile.hidden
        assert pile.peek_last() is tile
        assert pile.count(Tile(Suit.BAMBOOS, 5)) == 1
        assert pile.pop() is tile
        assert pile.size == 1
