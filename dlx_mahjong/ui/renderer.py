"""Rich rendering engine - ties together all UI components."""

from typing import Optional

from rich.console import Console
from rich.text import Text

from dlx_mahjong.engine.event import EventBus, EventType, GameEvent
from dlx_mahjong.rules.scoring import visible_score
from dlx_mahjong.ui.board_layout import (
    render_hand, render_covers, render_mahjong_screen,
    render_exhausted_screen, render_scores, render_round_end_hands, render_score_line,
)
from dlx_mahjong.ui.tile_display import tile_to_rich_text


class Renderer:
    """Prints game events as they happen.

    Hidden tiles are only shown for ``human_seat``, unless ``broadcast`` is
    set, in which case every hand is shown in full.
    """

    def __init__(self, console: Console, event_bus: EventBus,
                 human_seat: Optional[int] = None, broadcast: bool = False):
        self.console = console
        self.event_bus = event_bus
        self.human_seat = human_seat
        self.broadcast = broadcast
        self._players = []
        self._round_wind = None
        self._subscribe_events()

    def _subscribe_events(self):
        self.event_bus.subscribe(EventType.ROUND_START, self._on_round_start)
        self.event_bus.subscribe(EventType.DRAW, self._on_draw)
        self.event_bus.subscribe(EventType.DISCARD, self._on_discard)
        self.event_bus.subscribe(EventType.PICKUP, self._on_pickup)
        self.event_bus.subscribe(EventType.MAHJONG, self._on_mahjong)
        self.event_bus.subscribe(EventType.EXHAUSTED, self._on_exhausted)
        self.event_bus.subscribe(EventType.ROUND_END, self._on_round_end)
        self.event_bus.subscribe(EventType.NEXT_ROUND, self._on_next_round)
        self.event_bus.subscribe(EventType.GAME_RESET, self._on_game_reset)

    def shows_hidden(self, seat: int) -> bool:
        return self.broadcast or seat == self.human_seat

    def render_player_hand(self, seat: int):
        p = self._players[seat]
        show = self.shows_hidden(seat)
        render_hand(self.console, p.hand.tiles, show_hidden=show,
                    highlight=p.hand.draw_tile if show else None,
                    title=p.name)
        render_score_line(self.console, p.name,
                          visible_score(p.hand, self._round_wind, p.seat_wind),
                          label="open score")

    def _name(self, seat: int) -> str:
        if 0 <= seat < len(self._players):
            return self._players[seat].name
        return f"Player {seat}"

    def _on_round_start(self, event: GameEvent):
        self._players = event.data["players"]
        self._round_wind = event.data["round_wind"]
        self.console.print(f"\n  [bold cyan]{'=' * 50}[/bold cyan]")
        self.console.print(f"  [bold]{self._round_wind.display_name} round[/bold]")
        for p in self._players:
            if self.shows_hidden(p.seat):
                render_hand(self.console, p.hand.tiles, title=p.name)

    def _on_draw(self, event: GameEvent):
        seat = event.data["player"]
        p = self._players[seat]
        self.console.print(f"  {p.name}'s turn ({p.seat_wind.display_name})")
        if self.shows_hidden(seat):
            render_hand(self.console, p.hand.tiles, numbered=seat == self.human_seat,
                        highlight=event.data["tile"])

    def _on_discard(self, event: GameEvent):
        text = Text(f"  {self._name(event.data['player'])} discards ")
        text.append_text(tile_to_rich_text(event.data["tile"]))
        self.console.print(text)

    def _on_pickup(self, event: GameEvent):
        seat = event.data["player"]
        self.console.print(
            f"  [bold]{self._name(seat)} performs {event.data['action'].label}.[/bold]")
        self.render_player_hand(seat)

    def _on_mahjong(self, event: GameEvent):
        seat = event.data["player"]
        render_mahjong_screen(self.console, self._name(seat), event.data["score"])
        render_covers(self.console, self._players[seat].hand.tiles, event.data["covers"])

    def _on_exhausted(self, event: GameEvent):
        render_exhausted_screen(self.console)

    def _on_round_end(self, event: GameEvent):
        result = event.data["result"]
        players = event.data["players"]
        render_round_end_hands(self.console, players, result.winner)
        render_scores(self.console, players, result.awarded)

    def _on_next_round(self, event: GameEvent):
        self.console.print(
            f"  [dim]Next round: {event.data['round_wind'].display_name} wind[/dim]")

    def _on_game_reset(self, event: GameEvent):
        self.console.print("  [dim]New game started.[/dim]")

    def pause(self, message: str = "Press Enter to continue..."):
        """Pause and wait for user input."""
        self.console.input(f"\n  {message}")
