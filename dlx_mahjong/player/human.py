"""Human policy - reads decisions from the terminal."""

from typing import Sequence

from rich.console import Console

from dlx_mahjong.engine.action import ActionKind
from dlx_mahjong.player.base import Policy, GameView
from dlx_mahjong.ui.board_layout import render_board, render_pickup_prompt


class HumanPolicy(Policy):
    """Policy backed by console input; invalid input is re-prompted."""

    is_human = True
    name = "human"

    def __init__(self, console: Console):
        self.console = console

    def select_action(self, kind: ActionKind, options: Sequence, view: GameView) -> int:
        if kind == ActionKind.DISCARD:
            render_board(self.console, view)
            return self.choose_discard(options)
        render_pickup_prompt(self.console, view.last_discard, options)
        return self._ask_index("  > Pickup: ", len(options))

    def choose_discard(self, options: Sequence[int]) -> int:
        """Ask for a hand index; returns its position in ``options``."""
        while True:
            raw = self.console.input("  > Discard tile #: ").strip()
            try:
                hand_index = int(raw)
            except ValueError:
                hand_index = None
            if hand_index in options:
                return list(options).index(hand_index)
            self.console.print("  [red]Invalid input, pick the number of a hidden tile[/red]")

    def choose_chow(self, options: Sequence[int], view: GameView) -> int:
        self.console.print("  Chow runs:")
        for i, start in enumerate(options):
            self.console.print(f"    {i}. {start}-{start + 1}-{start + 2}")
        return self._ask_index("  > Run: ", len(options))

    def _ask_index(self, prompt: str, n: int) -> int:
        while True:
            try:
                choice = int(self.console.input(prompt).strip())
                if 0 <= choice < n:
                    return choice
            except ValueError:
                pass
            self.console.print(f"  [red]Invalid input, enter 0..{n - 1}[/red]")
