#!/usr/bin/env python3
"""Mahjong simulator - Terminal CLI"""

from rich.console import Console
from rich.panel import Panel

from dlx_mahjong.engine.event import EventBus
from dlx_mahjong.engine.game import GameConfig, GameState
from dlx_mahjong.engine.game_logger import GameLogger
from dlx_mahjong.engine.round import TurnPhase
from dlx_mahjong.engine.simulation import simulate
from dlx_mahjong.rules.scoring import visible_score, max_score
from dlx_mahjong.ui.board_layout import (
    render_hand, render_discard_pile, render_score_line, render_scores, render_simulation,
)
from dlx_mahjong.ui.renderer import Renderer

console = Console()

HUMAN_SEAT = 0
DEFAULT_SIM_ROUNDS = 100
LOG_DIR = "logs"

COMMANDS = {
    "draw": "draw a tile (your turn)",
    "discard N": "discard the tile at hand index N",
    "sort": "sort your hand",
    "hand": "show your hand and its score",
    "pile": "show the discard pile",
    "set": "show how many tiles are left to draw",
    "turn": "play the current seat's turn",
    "game": "play rounds until you stop",
    "sim [N]": "simulate N headless rounds",
    "quit": "exit",
}


def show_menu():
    console.print()
    console.print(Panel(
        "[bold cyan]Mahjong[/bold cyan]\n"
        "[dim]exact-cover win detection[/dim]",
        border_style="cyan",
        padding=(1, 4),
    ))
    for cmd, desc in COMMANDS.items():
        console.print(f"    [bold]{cmd:<10}[/bold] {desc}")
    console.print()


class Session:
    """One interactive game plus the commands that act on it."""

    def __init__(self):
        self.event_bus = EventBus()
        self.config = GameConfig(human_seat=HUMAN_SEAT, log_dir=LOG_DIR)
        self.game = GameState(self.config, ["You", "East AI", "South AI", "West AI"],
                              self.event_bus, console)
        self.renderer = Renderer(console, self.event_bus, human_seat=HUMAN_SEAT,
                                 broadcast=self.config.broadcast)
        self.logger = GameLogger(self.game.player_names, self.config.to_dict(),
                                 self.config.log_dir)
        self.logger.subscribe_events(self.event_bus)
        self.game.setup_round()

    @property
    def round(self):
        return self.game.round

    @property
    def me(self):
        return self.game.players[HUMAN_SEAT]

    def _ensure_round(self):
        if self.round.is_finished:
            console.print("  [dim]Round over, starting a new game.[/dim]")
            self.game.reset()

    def cmd_draw(self):
        self._ensure_round()
        if self.round.phase != TurnPhase.AWAIT_DRAW or self.round.current_player != HUMAN_SEAT:
            console.print("  [red]It is not your turn to draw.[/red]")
            return
        self.round.process_draw(HUMAN_SEAT)

    def cmd_discard(self, arg: str):
        self._ensure_round()
        try:
            index = int(arg)
        except ValueError:
            console.print("  [red]Usage: discard N[/red]")
            return
        try:
            self.round.process_discard(HUMAN_SEAT, index)
        except ValueError as e:
            console.print(f"  [red]{e}[/red]")
            return
        self.round.process_pickup_decisions()

    def cmd_hand(self):
        hand = self.me.hand
        render_hand(console, hand.tiles, numbered=True, highlight=hand.draw_tile, title="Your hand")
        render_score_line(console, "Your", visible_score(hand, self.round.round_wind,
                                                         self.me.seat_wind), "open score")
        render_score_line(console, "Your", max_score(hand.tiles, self.round.round_wind,
                                                     self.me.seat_wind), "hand score")

    def cmd_turn(self):
        self._ensure_round()
        if self.round.phase == TurnPhase.AWAIT_PICKUP_DECISIONS:
            self.round.process_pickup_decisions()
            if self.round.is_finished:
                return
        self.round.play_turn()

    def cmd_game(self):
        self._ensure_round()
        while True:
            while self.round.is_running:
                self.round.step()
            reply = console.input("  Start next round (Y/n)? ").strip()
            if reply not in ("", "y", "Y"):
                break
            self.game.next_round()

    def cmd_sim(self, arg: str):
        try:
            rounds = int(arg) if arg else DEFAULT_SIM_ROUNDS
        except ValueError:
            console.print("  [red]Usage: sim [N][/red]")
            return
        if rounds < 1:
            console.print("  [red]N must be at least 1[/red]")
            return
        with console.status(f"Simulating {rounds} rounds..."):
            summary = simulate(rounds)
        render_simulation(console, [f"Seat {i}" for i in range(len(summary.wins))], summary)

    def save_log(self):
        if self.game.round_results:
            path = self.logger.save({p.name: p.score for p in self.game.players})
            console.print(f"  [dim]Game log saved to {path}[/dim]")

    def dispatch(self, line: str) -> bool:
        """Run one command; returns False on quit."""
        cmd, _, arg = line.strip().partition(" ")
        arg = arg.strip()
        if cmd == "quit":
            return False
        if cmd == "draw":
            self.cmd_draw()
        elif cmd == "discard":
            self.cmd_discard(arg)
        elif cmd == "sort":
            self.me.hand.sort()
            self.cmd_hand()
        elif cmd == "hand":
            self.cmd_hand()
        elif cmd == "pile":
            render_discard_pile(console, self.round.discard_pile.tiles)
        elif cmd == "set":
            console.print(f"  Tiles left to draw: {self.round.tile_set.size}")
        elif cmd == "turn":
            self.cmd_turn()
        elif cmd == "game":
            self.cmd_game()
            render_scores(console, self.game.players)
        elif cmd == "sim":
            self.cmd_sim(arg)
        elif cmd:
            console.print(f"  [red]Unknown input {cmd}[/red]")
        return True


def main():
    """Main entry point."""
    session = None
    try:
        show_menu()
        session = Session()
        while session.dispatch(console.input("> ")):
            pass
        console.print("\n  Goodbye!\n")
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n  [dim]Exited.[/dim]\n")
    finally:
        if session is not None:
            session.save_log()


if __name__ == "__main__":
    main()
