"""Tests for the rich terminal output"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import io

from rich.console import Console

from dlx_mahjong.core.tile import make_tiles_from_string
from dlx_mahjong.engine.event import EventBus
from dlx_mahjong.engine.game import GameConfig, run_game
from dlx_mahjong.engine.simulation import simulate
from dlx_mahjong.ui.board_layout import render_simulation
from dlx_mahjong.ui.renderer import Renderer
from dlx_mahjong.ui.tile_display import HIDDEN_TILE, hand_to_rich_text, tiles_to_rich_text


def make_console():
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestTileDisplay:
    def test_masks_hidden_tiles(self):
        tiles = make_tiles_from_string("555k12c")
        for t in tiles[:3]:
            t.reveal()
        text = hand_to_rich_text(tiles, show_hidden=False).plain
        assert text.count("[5k]") == 3
        assert text.count(HIDDEN_TILE) == 2

    def test_numbered(self):
        text = hand_to_rich_text(make_tiles_from_string("12c"), numbered=True).plain
        assert text == "0:[1c] 1:[2c]"

    def test_separator(self):
        assert tiles_to_rich_text(make_tiles_from_string("1w1d"), separator="").plain == "[1w][1d]"


class TestRenderer:
    def test_renders_a_game(self):
        console = make_console()
        bus = EventBus()
        Renderer(console, bus, human_seat=0)
        run_game(GameConfig(seed=6), rounds=2, event_bus=bus)

        out = console.file.getvalue()
        assert "East round" in out
        assert "Next round: South wind" in out
        assert "Scores" in out
        assert "Player 0's turn" in out

    def test_shows_hidden(self):
        renderer = Renderer(make_console(), EventBus(), human_seat=1)
        assert renderer.shows_hidden(1)
        assert not renderer.shows_hidden(0)
        broadcast = Renderer(make_console(), EventBus(), broadcast=True)
        assert broadcast.shows_hidden(3)

    def test_simulation_table(self):
        console = make_console()
        summary = simulate(2, seed=4)
        render_simulation(console, ["A", "B", "C", "D"], summary)
        out = console.file.getvalue()
        assert "2 simulated rounds" in out
        assert "Exhausted rounds" in out
