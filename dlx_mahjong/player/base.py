"""Policy interface and GameView (read-only information barrier)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from dlx_mahjong.core.tile import Tile
from dlx_mahjong.core.hand import Hand
from dlx_mahjong.core.player_state import Wind
from dlx_mahjong.engine.action import ActionKind


@dataclass
class OpponentView:
    """Read-only view of another player (open tiles only)."""
    seat: int
    name: str
    score: int
    seat_wind: Wind
    visible_tiles: List[Tile]
    num_hidden_tiles: int


@dataclass
class GameView:
    """Snapshot of what one player may see.

    Policies only ever receive copies; mutating a view has no effect on the
    game. Other players' hidden tiles and the tile set are not included.
    """
    # Own hand (full access)
    my_hand: Hand
    my_seat: int
    my_wind: Wind
    my_score: int

    # Other players (limited view)
    opponents: List[OpponentView] = field(default_factory=list)

    # Table state
    round_wind: Wind = Wind.EAST
    discard_pile: List[Tile] = field(default_factory=list)
    remaining_tiles: int = 0

    # Turn info
    last_discard: Optional[Tile] = None
    last_discard_player: Optional[int] = None

    def count_seen(self, tile: Tile) -> int:
        """Copies of ``tile`` this player knows of: own hand, discards and open tiles."""
        seen = self.my_hand.count(tile)
        seen += sum(1 for t in self.discard_pile if t == tile)
        for opp in self.opponents:
            seen += sum(1 for t in opp.visible_tiles if t == tile)
        return seen


class Policy(ABC):
    """Decision maker for one seat.

    Every decision is a choice among options the round has already checked
    for legality; the policy answers with an index into that list.
    """

    is_human = False
    name = "policy"

    @abstractmethod
    def select_action(self, kind: ActionKind, options: Sequence, view: GameView) -> int:
        """Choose one of ``options``.

        For ActionKind.DISCARD the options are hand indices of hidden tiles;
        for ActionKind.PICKUP they are PickupAction values, highest priority
        first and NONE last.
        """
        ...

    def choose_chow(self, options: Sequence[int], view: GameView) -> int:
        """Pick a run (by starting rank) when a chow can be formed several ways."""
        return 0


def _opponent_view(player) -> OpponentView:
    hand = player.hand
    return OpponentView(
        seat=player.seat,
        name=player.name,
        score=player.score,
        seat_wind=player.seat_wind,
        visible_tiles=[t.copy() for t in hand.visible_tiles],
        num_hidden_tiles=len(hand.hidden_tiles),
    )


def build_game_view(
    player_idx: int,
    players: List,  # List[PlayerState]
    round_wind: Wind,
    discard_pile: Sequence[Tile],
    remaining_tiles: int,
    last_discard: Optional[Tile] = None,
    last_discard_player: Optional[int] = None,
) -> GameView:
    """Snapshot the table as seen from ``player_idx``; every tile is a copy."""
    me = players[player_idx]
    return GameView(
        my_hand=me.hand.clone(),
        my_seat=player_idx,
        my_wind=me.seat_wind,
        my_score=me.score,
        opponents=[_opponent_view(p) for p in players if p.seat != player_idx],
        round_wind=round_wind,
        discard_pile=[t.copy() for t in discard_pile],
        remaining_tiles=remaining_tiles,
        last_discard=last_discard.copy() if last_discard is not None else None,
        last_discard_player=last_discard_player,
    )
