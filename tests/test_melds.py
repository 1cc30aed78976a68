"""Tests for melds.py - candidate enumeration and pickup legality"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from dlx_mahjong.core.tile import Tile, Suit, make_tiles_from_string
from dlx_mahjong.core.hand import Hand
from dlx_mahjong.core.meld import MeldType
from dlx_mahjong.engine.action import PickupAction, PickupClaim, resolve_pickup_claims
from dlx_mahjong.rules.melds import (
    find_pairs, find_chows, find_pongs, find_kongs, find_combinations, find_melds,
    can_kong, can_pong, chow_options, available_pickups, pickup_indices,
)


def tiles(s):
    return make_tiles_from_string(s)


class TestFinders:
    def test_pairs_need_hidden_tiles(self):
        t = tiles("11c")
        assert find_pairs(t) == [(0, 1)]
        t[1].reveal()
        assert find_pairs(t) == []

    def test_pairs_of_three_copies(self):
        assert find_pairs(tiles("555k")) == [(0, 1), (0, 2), (1, 2)]

    def test_chows(self):
        assert find_chows(tiles("234b")) == [(0, 1, 2)]
        assert find_chows(tiles("2b3c4b")) == []
        assert find_chows(tiles("89c1b")) == []

    def test_chows_need_equal_visibility(self):
        t = tiles("234b")
        t[0].reveal()
        assert find_chows(t) == []

    def test_no_honor_chows(self):
        assert find_chows(tiles("123w")) == []
        assert find_chows(tiles("123d")) == []

    def test_pongs(self):
        assert find_pongs(tiles("555k")) == [(0, 1, 2)]
        t = tiles("555k")
        t[2].reveal()
        assert find_pongs(t) == []

    def test_kongs_ignore_visibility(self):
        t = tiles("1111d")
        t[0].reveal()
        assert find_kongs(t) == [(0, 1, 2, 3)]

    def test_combination_order(self):
        melds = find_melds(tiles("111c23c"))
        types = [m.meld_type for m in melds]
        assert types == sorted(types)
        assert len(find_combinations(tiles("111c23c"))) == len(melds)
        assert MeldType.CHOW in types and MeldType.PONG in types


class TestPickupLegality:
    def hand(self, s):
        return Hand(tiles(s))

    def test_kong_needs_three_hidden(self):
        hand = self.hand("555k12c")
        five = Tile(Suit.CHARACTERS, 5)
        assert can_kong(hand, five)
        assert can_pong(hand, five)
        hand.tiles[0].reveal()
        assert not can_kong(hand, five)
        assert can_pong(hand, five)

    def test_chow_options(self):
        hand = self.hand("457b")
        assert chow_options(hand, Tile(Suit.BAMBOOS, 6)) == [4, 5]
        assert chow_options(hand, Tile(Suit.BAMBOOS, 3)) == [3]
        assert chow_options(hand, Tile(Suit.BAMBOOS, 9)) == []
        assert chow_options(hand, Tile(Suit.CIRCLES, 6)) == []

    def test_chow_ignores_open_tiles(self):
        hand = self.hand("45b")
        hand.tiles[0].reveal()
        assert chow_options(hand, Tile(Suit.BAMBOOS, 6)) == []

    def test_available_pickups_order(self):
        hand = self.hand("4555k6k")
        five = Tile(Suit.CHARACTERS, 5)
        assert available_pickups(hand, five, player=1, discarder=0) == [
            PickupAction.KONG, PickupAction.PONG, PickupAction.CHOW, PickupAction.NONE]

    def test_chow_only_for_next_seat(self):
        hand = self.hand("469k")
        five = Tile(Suit.CHARACTERS, 5)
        assert available_pickups(hand, five, player=2, discarder=0) == [PickupAction.NONE]
        assert available_pickups(hand, five, player=0, discarder=3) == [
            PickupAction.CHOW, PickupAction.NONE]

    def test_claim_must_leave_a_hidden_tile(self):
        hand = self.hand("55k1111c")
        for i in range(2, 6):
            hand.tiles[i].reveal()
        assert available_pickups(hand, Tile(Suit.CHARACTERS, 5), 1, 0) == [PickupAction.NONE]

    def test_discarder_gets_nothing(self):
        hand = self.hand("555k")
        assert available_pickups(hand, Tile(Suit.CHARACTERS, 5), 0, 0) == [PickupAction.NONE]

    def test_pickup_indices(self):
        hand = self.hand("4555k6k")
        hand.tiles.append(Tile(Suit.CHARACTERS, 5))
        assert pickup_indices(hand, 5, PickupAction.KONG) == [1, 2, 3, 5]
        assert pickup_indices(hand, 5, PickupAction.PONG) == [1, 2, 5]
        assert pickup_indices(hand, 5, PickupAction.CHOW) == [0, 4, 5]

    def test_pickup_indices_chow_start(self):
        hand = self.hand("457b")
        hand.tiles.append(Tile(Suit.BAMBOOS, 6))
        assert pickup_indices(hand, 3, PickupAction.CHOW, chow_start=4) == [0, 1, 3]
        assert pickup_indices(hand, 3, PickupAction.CHOW, chow_start=5) == [1, 2, 3]

    def test_pickup_indices_impossible(self):
        hand = self.hand("45b")
        hand.tiles.append(Tile(Suit.BAMBOOS, 9))
        with pytest.raises(ValueError):
            pickup_indices(hand, 2, PickupAction.PONG)
        with pytest.raises(ValueError):
            pickup_indices(hand, 2, PickupAction.CHOW)


class TestPickupPriority:
    def test_kong_beats_pong_and_chow(self):
        claims = [
            PickupClaim(1, PickupAction.CHOW),
            PickupClaim(2, PickupAction.PONG),
            PickupClaim(3, PickupAction.KONG),
        ]
        assert resolve_pickup_claims(claims).player == 3

    def test_pong_beats_chow(self):
        claims = [PickupClaim(1, PickupAction.CHOW), PickupClaim(3, PickupAction.PONG)]
        assert resolve_pickup_claims(claims).action == PickupAction.PONG

    def test_lowest_seat_on_tie(self):
        claims = [PickupClaim(3, PickupAction.CHOW), PickupClaim(1, PickupAction.CHOW)]
        assert resolve_pickup_claims(claims).player == 1

    def test_no_claims(self):
        claims = [PickupClaim(1, PickupAction.NONE), PickupClaim(2, PickupAction.NONE)]
        assert resolve_pickup_claims(claims) is None
