"""Tests for hand.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import random

import pytest

from dlx_mahjong.core.tile import Tile, Suit, make_tiles_from_string
from dlx_mahjong.core.hand import Hand, HAND_SIZE


def dealt_hand(s="123c456b789k1122w"):
    hand = Hand()
    hand.deal(make_tiles_from_string(s))
    return hand


class TestHand:
    def test_deal(self):
        hand = dealt_hand()
        assert hand.size == HAND_SIZE
        assert not hand.is_full

    def test_deal_wrong_size(self):
        with pytest.raises(ValueError):
            Hand().deal(make_tiles_from_string("123c"))

    def test_draw_and_discard(self):
        hand = dealt_hand()
        tile = Tile(Suit.DRAGONS, 2)
        hand.draw(tile)
        assert hand.is_full
        assert hand.draw_tile is tile

        discarded = hand.discard(hand.size - 1)
        assert discarded == tile
        assert hand.size == HAND_SIZE
        assert hand.draw_tile is None

    def test_draw_into_full_hand(self):
        hand = dealt_hand()
        hand.draw(Tile(Suit.DRAGONS, 0))
        with pytest.raises(ValueError):
            hand.draw(Tile(Suit.DRAGONS, 1))

    def test_discard_from_waiting_hand(self):
        hand = dealt_hand()
        with pytest.raises(ValueError):
            hand.discard(0)

    def test_discard_open_tile(self):
        hand = dealt_hand()
        hand.draw(Tile(Suit.DRAGONS, 0))
        hand.reveal([0, 1, 2])
        with pytest.raises(ValueError):
            hand.discard(0)
        assert hand.valid_discards() == list(range(3, 14))

    def test_discard_bad_index(self):
        hand = dealt_hand()
        hand.draw(Tile(Suit.DRAGONS, 0))
        with pytest.raises(ValueError):
            hand.discard(14)

    def test_sort_idempotent_and_preserves_tiles(self):
        tiles = make_tiles_from_string("123c456b789k1122w")
        random.Random(3).shuffle(tiles)
        hand = Hand()
        hand.deal(tiles)
        before = sorted(t.key for t in hand.tiles)

        hand.sort()
        once = [t.key for t in hand.tiles]
        hand.sort()
        assert [t.key for t in hand.tiles] == once
        assert once == before

    def test_concealed(self):
        hand = dealt_hand()
        assert hand.is_concealed
        hand.reveal([0])
        assert not hand.is_concealed
        assert len(hand.visible_tiles) == 1
        assert len(hand.hidden_tiles) == 12

    def test_counts(self):
        hand = dealt_hand("111c456b789k1122w")
        assert hand.count(Tile(Suit.CIRCLES, 1)) == 3
        hand.reveal([0])
        assert hand.count_hidden(Tile(Suit.CIRCLES, 1)) == 2
        assert hand.count_suit(Suit.WINDS) == 4
        assert hand.numeric_ranks() == {1, 4, 5, 6, 7, 8, 9}

    def test_clone_is_independent(self):
        hand = dealt_hand()
        hand.draw(Tile(Suit.DRAGONS, 0))
        copy = hand.clone()
        assert copy.draw_tile == hand.draw_tile
        copy.reveal([0])
        assert hand.tiles[0].hidden
