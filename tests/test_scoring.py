"""Tests for score_table.py and scoring.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from dlx_mahjong.core.hand import Hand
from dlx_mahjong.core.meld import MeldType, Visibility
from dlx_mahjong.core.player_state import Wind
from dlx_mahjong.core.tile import Suit, make_tiles_from_string
from dlx_mahjong.rules.score_table import SCORE_TABLE, lookup
from dlx_mahjong.rules.scoring import (
    ScoreResult, max_score, visible_score, final_score, mahjong_bonus,
)


def hand(s):
    return Hand(make_tiles_from_string(s))


class TestScoreTable:
    def test_open_pong_scores_more_than_hidden(self):
        assert lookup(MeldType.PONG, Suit.BAMBOOS, Visibility.HIDDEN) == (4, 0)
        assert lookup(MeldType.PONG, Suit.BAMBOOS, Visibility.OPEN) == (8, 0)

    def test_open_never_lower_than_hidden(self):
        for (meld_type, suit, vis, wind), (base, exp) in SCORE_TABLE.items():
            if vis == Visibility.HIDDEN:
                continue
            hidden = SCORE_TABLE.get((meld_type, suit, Visibility.HIDDEN, wind))
            if hidden is not None:
                assert base * 2 ** exp >= hidden[0] * 2 ** hidden[1]

    def test_wind_relevance(self):
        assert lookup(MeldType.PONG, Suit.WINDS, Visibility.HIDDEN, 2) == (8, 2)
        assert lookup(MeldType.KONG, Suit.WINDS, Visibility.OPEN, 1) == (32, 2)

    def test_honor_pair(self):
        assert lookup(MeldType.PAIR, Suit.DRAGONS, Visibility.HIDDEN) == (2, 0)
        assert lookup(MeldType.PAIR, Suit.CIRCLES, Visibility.HIDDEN) == (0, 0)

    def test_impossible_key(self):
        with pytest.raises(KeyError):
            lookup(MeldType.CHOW, Suit.WINDS, Visibility.HIDDEN)
        with pytest.raises(KeyError):
            lookup(MeldType.PAIR, Suit.CIRCLES, Visibility.OPEN)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            SCORE_TABLE[(MeldType.PAIR, Suit.CIRCLES, Visibility.HIDDEN, 0)] = (99, 0)


class TestMaxScore:
    def test_hidden_pong(self):
        score = max_score(make_tiles_from_string("555k"), Wind.EAST, Wind.EAST)
        assert score == ScoreResult(4, 0)

    def test_revealing_pong_increases_base(self):
        tiles = make_tiles_from_string("555k")
        hidden = max_score(tiles, Wind.EAST, Wind.SOUTH)
        for t in tiles:
            t.reveal()
        shown = max_score(tiles, Wind.EAST, Wind.SOUTH)
        assert shown.base > hidden.base
        assert shown.base == 8

    def test_kong_preferred_over_two_pairs(self):
        score = max_score(make_tiles_from_string("1111d"), Wind.EAST, Wind.EAST)
        assert score == ScoreResult(16, 2)

    def test_wind_pong_relevance(self):
        tiles = make_tiles_from_string("111w")
        assert max_score(tiles, Wind.EAST, Wind.EAST) == ScoreResult(8, 2)
        assert max_score(tiles, Wind.EAST, Wind.SOUTH) == ScoreResult(8, 1)
        assert max_score(tiles, Wind.SOUTH, Wind.WEST) == ScoreResult(8, 0)

    def test_concrete_hand(self):
        tiles = make_tiles_from_string("11c234b555k1111d11w")
        score = max_score(tiles, Wind.EAST, Wind.EAST)
        # kong 16 + pong 4 + wind pair 2
        assert score.base == 22
        assert score.multiplier_exp == 2
        assert score.total == 88

    def test_empty(self):
        assert max_score([], Wind.EAST, Wind.EAST) == ScoreResult(0, 0)


class TestRoundEndScore:
    def test_visible_score_only_counts_open_tiles(self):
        h = hand("555k999c")
        for i in (0, 1, 2):
            h.tiles[i].reveal()
        assert visible_score(h, Wind.EAST, Wind.EAST) == ScoreResult(8, 0)
        assert final_score(h, Wind.EAST, Wind.EAST, full_hand=False) == ScoreResult(8, 0)

    def test_no_bonus_without_mahjong(self):
        h = hand("555k")
        assert final_score(h, Wind.EAST, Wind.EAST) == ScoreResult(4, 0)

    def test_concealed_mahjong(self):
        h = hand("11c234b555k1111d11w")
        score = final_score(h, Wind.EAST, Wind.EAST, mahjong=True)
        assert score == ScoreResult(22 + 20 + 20, 2)
        assert score.total == 248

    def test_open_hand_loses_concealed_bonus(self):
        h = hand("11c234b555k1111d11w")
        h.reveal([2, 3, 4])
        base, _ = mahjong_bonus(h)
        assert base == 20

    def test_single_numeric_suit(self):
        assert mahjong_bonus(hand("11122233344455b")) == (40, 5)

    def test_single_honor_suit(self):
        assert mahjong_bonus(hand("111222333d")) == (40, 4)

    def test_one_numeric_suit_with_honors(self):
        assert mahjong_bonus(hand("111222333c11d")) == (40, 2)

    def test_single_terminal_rank(self):
        assert mahjong_bonus(hand("111c111b111k111d11w")) == (40, 4)

    def test_mixed_ones_and_nines_get_no_terminal_bonus(self):
        assert mahjong_bonus(hand("111999c111999b11k")) == (40, 0)


class TestScoreResult:
    def test_total(self):
        assert ScoreResult(10, 3).total == 80

    def test_capped(self):
        assert ScoreResult(1000, 2).capped() == 3000
        assert ScoreResult(10, 0).capped() == 10
        assert ScoreResult(1000, 2).capped(5000) == 4000
