"""Board layout rendering using Rich."""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dlx_mahjong.core.meld import Meld
from dlx_mahjong.core.tile import Tile
from dlx_mahjong.engine.action import PickupAction
from dlx_mahjong.player.base import GameView
from dlx_mahjong.rules.scoring import ScoreResult
from dlx_mahjong.ui.tile_display import hand_to_rich_text, tiles_to_rich_text, tile_to_rich_text


def render_board(console: Console, view: GameView):
    """Render the table from one player's seat."""
    header = Text()
    header.append(f"  Round wind: {view.round_wind.display_name}")
    header.append(f"  Seat wind: {view.my_wind.display_name}")
    header.append(f"\n  Tiles left: {view.remaining_tiles}")
    console.print(Panel(header, title="[bold]Mahjong[/bold]", border_style="cyan"))

    for opp in view.opponents:
        line = Text(f"  {opp.name} ({opp.seat_wind.display_name}) {opp.score} pts  ")
        line.append(f"hidden: {opp.num_hidden_tiles}  ", style="dim")
        if opp.visible_tiles:
            line.append("open: ")
            line.append_text(tiles_to_rich_text(opp.visible_tiles))
        console.print(line)

    render_discard_pile(console, view.discard_pile)
    console.print("-" * 60, style="dim")
    render_hand(console, view.my_hand.tiles, numbered=True,
                highlight=view.my_hand.draw_tile, title="Your hand")


def render_hand(console: Console, tiles: Sequence[Tile], show_hidden: bool = True,
                numbered: bool = False, highlight: Optional[Tile] = None,
                title: str = ""):
    text = Text(f"  {title}: " if title else "  ")
    text.append_text(hand_to_rich_text(tiles, show_hidden=show_hidden,
                                       numbered=numbered, highlight=highlight))
    console.print(text)


def render_discard_pile(console: Console, tiles: Sequence[Tile]):
    if not tiles:
        console.print("  Discards: ", style="dim")
        return
    text = Text("  Discards: ")
    text.append_text(tiles_to_rich_text(tiles))
    console.print(text)


def render_pickup_prompt(console: Console, tile: Optional[Tile], options: Sequence[PickupAction]):
    """List pickup choices for the last discard."""
    text = Text("  Last discard ")
    if tile is not None:
        text.append_text(tile_to_rich_text(tile))
    text.append(":  ")
    for i, action in enumerate(options):
        text.append(f"{i}. {action.label}  ")
    console.print(text)


def render_score_line(console: Console, name: str, score: ScoreResult, label: str = "score"):
    console.print(f"  {name} {label}: [bold]{score.total}[/bold] "
                  f"[dim](base {score.base}, doubled {score.multiplier_exp}x)[/dim]")


def render_covers(console: Console, tiles: Sequence[Tile], covers: List[List[Meld]]):
    """Print the first winning partition of a hand."""
    if not covers:
        return
    text = Text("  Melds: ")
    for i, meld in enumerate(covers[0]):
        if i > 0:
            text.append(" | ")
        text.append_text(tiles_to_rich_text(meld.tiles(tiles), separator=""))
    console.print(text)


def render_mahjong_screen(console: Console, player_name: str, score: ScoreResult):
    console.print()
    console.print(Panel(
        f"[bold green]{player_name} declares Mahjong![/bold green]\n"
        f"Hand worth {score.total} points",
        border_style="green",
    ))


def render_exhausted_screen(console: Console):
    console.print()
    console.print(Panel("[bold yellow]The tile set ran out. No winner this round.[/bold yellow]",
                        border_style="yellow"))


def render_scores(console: Console, players: list, awarded: Optional[List[int]] = None):
    """Render running scores, with points won this round if given."""
    table = Table(title="Scores", border_style="cyan")
    table.add_column("Player", style="bold")
    table.add_column("Wind")
    if awarded is not None:
        table.add_column("Round", justify="right")
    table.add_column("Total", justify="right")

    for p in players:
        row = [p.name, p.seat_wind.display_name]
        if awarded is not None:
            row.append(f"+{awarded[p.seat]}")
        row.append(str(p.score))
        table.add_row(*row)

    console.print(table)


def render_round_end_hands(console: Console, players: list, winner: Optional[int]):
    """Show every hand face up after the round."""
    for p in players:
        mark = " [bold green]*[/bold green]" if p.seat == winner else ""
        console.print(f"  {p.name} ({p.seat_wind.display_name}){mark}")
        render_hand(console, p.hand.tiles)
    console.print()


def render_simulation(console: Console, names: List[str], summary):
    """Tabulate a batch of simulated rounds."""
    table = Table(title=f"{summary.rounds} simulated rounds", border_style="cyan")
    table.add_column("Player", style="bold")
    table.add_column("Wins", justify="right")
    table.add_column("Win rate", justify="right")
    table.add_column("Avg score", justify="right")

    for seat, name in enumerate(names):
        table.add_row(
            name,
            str(summary.wins[seat]),
            f"{summary.win_rate(seat):.1%}",
            f"{summary.average_score(seat):.1f}",
        )

    console.print(table)
    console.print(f"  Exhausted rounds: {summary.exhausted}")
