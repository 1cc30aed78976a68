"""Tests for game.py - configuration, wind rotation and multi-round play"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from dlx_mahjong.core.player_state import Wind
from dlx_mahjong.engine.event import EventBus, EventType
from dlx_mahjong.engine.game import GameConfig, GameState, make_policy, run_game
from dlx_mahjong.player.random_policy import RandomPolicy
from dlx_mahjong.player.tile_count import TileCountPolicy
from dlx_mahjong.rules.scoring import SCORE_CAP


class TestGameConfig:
    def test_default_config(self):
        config = GameConfig()
        assert config.num_players == 4
        assert config.human_seat is None
        assert config.score_cap == SCORE_CAP
        assert config.policies == ["tile_count"] * 4

    def test_human_seat_gets_human_policy(self):
        config = GameConfig(human_seat=2)
        assert config.policies == ["tile_count", "tile_count", "human", "tile_count"]

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            GameConfig(num_players=5)
        with pytest.raises(ValueError):
            GameConfig(human_seat=4)
        with pytest.raises(ValueError):
            GameConfig(score_cap=-1)
        with pytest.raises(ValueError):
            GameConfig(policies=["random"] * 3)
        with pytest.raises(ValueError):
            GameConfig(policies=["random", "random", "random", "greedy"])

    def test_to_dict(self):
        d = GameConfig(seed=3).to_dict()
        assert d["seed"] == 3
        assert d["num_players"] == 4


class TestMakePolicy:
    def test_by_name(self):
        assert isinstance(make_policy("random"), RandomPolicy)
        assert isinstance(make_policy("tile_count"), TileCountPolicy)

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            make_policy("oracle")


class TestGameState:
    def test_setup_round(self):
        game = GameState(GameConfig(seed=1), ["A", "B", "C", "D"])
        rs = game.setup_round()
        assert rs.current_player == 0
        assert rs.tile_set.size == 136 - 52
        assert all(p.hand.size == 13 for p in game.players)

    def test_too_few_names(self):
        with pytest.raises(ValueError):
            GameState(GameConfig(), ["A", "B"])

    def test_next_round_rotates_winds(self):
        game = GameState(GameConfig(seed=1))
        game.setup_round()
        game.play_round()
        rs = game.next_round()

        assert game.round_wind == Wind.SOUTH
        assert game.players[0].seat_wind == Wind.NORTH
        assert game.players[1].seat_wind == Wind.EAST
        assert game.dealer_seat == 1
        assert rs.current_player == 1
        assert rs.round_wind == Wind.SOUTH

    def test_three_player_winds_keep_an_east_seat(self):
        game = GameState(GameConfig(num_players=3, seed=1, policies=["random"] * 3))
        game.setup_round()
        dealers = []
        for _ in range(4):
            game.next_round()
            winds = sorted(p.seat_wind for p in game.players)
            assert winds == [Wind.EAST, Wind.SOUTH, Wind.WEST]
            dealers.append(game.dealer_seat)
        assert dealers == [1, 2, 0, 1]
        assert game.round.current_player == 1

    def test_previous_within_seat_count(self):
        assert Wind.EAST.previous() == Wind.NORTH
        assert Wind.EAST.previous(3) == Wind.WEST
        assert Wind.EAST.previous(2) == Wind.SOUTH

    def test_round_results_tracked(self):
        game = GameState(GameConfig(seed=4))
        game.play_round()
        assert len(game.round_results) == 1
        assert not game.is_running

    def test_reset(self):
        bus = EventBus()
        resets = []
        bus.subscribe(EventType.GAME_RESET, resets.append)
        game = run_game(GameConfig(seed=2), rounds=2, event_bus=bus)
        game.reset()

        assert resets
        assert game.scores == [0, 0, 0, 0]
        assert game.round_wind == Wind.EAST
        assert game.round_results == []
        assert [p.seat_wind for p in game.players] == list(Wind)

    def test_set_policy(self):
        game = GameState(GameConfig(seed=1))
        game.set_policy(3, "random")
        assert isinstance(game.players[3].policy, RandomPolicy)
        assert game.config.policies[3] == "random"


class TestRunGame:
    def test_plays_all_rounds(self):
        game = run_game(GameConfig(seed=9), rounds=3)
        assert len(game.round_results) == 3
        assert game.round_number == 2
        assert game.round_wind == Wind.WEST

    def test_scores_match_awarded_points(self):
        game = run_game(GameConfig(seed=9), rounds=3)
        for seat in range(4):
            assert game.scores[seat] == sum(r.awarded[seat] for r in game.round_results)

    def test_seeded_games_repeat(self):
        first = run_game(GameConfig(seed=12), rounds=2)
        second = run_game(GameConfig(seed=12), rounds=2)
        assert first.scores == second.scores
        assert ([r.winner for r in first.round_results]
                == [r.winner for r in second.round_results])

    def test_two_players(self):
        game = run_game(GameConfig(num_players=2, seed=5, policies=["random", "tile_count"]),
                        rounds=1)
        assert len(game.players) == 2
        assert len(game.round_results[0].awarded) == 2

    def test_rounds_must_be_positive(self):
        with pytest.raises(ValueError):
            run_game(GameConfig(), rounds=0)
