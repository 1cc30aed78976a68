"""Single round flow control - the draw / discard / pickup state machine."""

from enum import Enum
from typing import List, Optional, Sequence

from dlx_mahjong.core.tile import Tile
from dlx_mahjong.core.meld import Meld
from dlx_mahjong.core.hand import HAND_SIZE
from dlx_mahjong.core.tile_set import TileSet
from dlx_mahjong.core.discard_pile import DiscardPile
from dlx_mahjong.core.player_state import PlayerState, Wind
from dlx_mahjong.engine.action import (
    ActionKind, PickupAction, PickupClaim, InvalidSelectionError, resolve_pickup_claims,
)
from dlx_mahjong.engine.event import EventBus, EventType, GameEvent
from dlx_mahjong.player.base import GameView, build_game_view
from dlx_mahjong.rules.melds import available_pickups, chow_options, pickup_indices
from dlx_mahjong.rules.scoring import ScoreResult, SCORE_CAP, final_score
from dlx_mahjong.rules.win import winning_covers


class TurnPhase(Enum):
    AWAIT_DRAW = "await_draw"
    AWAIT_DISCARD = "await_discard"
    AWAIT_PICKUP_DECISIONS = "await_pickup_decisions"
    FINISHED = "finished"


class RoundResult:
    """Result of a completed round."""

    def __init__(self, winner: Optional[int], reason: str):
        self.winner = winner  # Seat of the Mahjong declarer, None on exhaustion
        self.reason = reason  # "mahjong" or "exhausted"
        self.scores: List[ScoreResult] = []  # Round-end score per seat
        self.awarded: List[int] = []  # Capped points added to each running score
        self.covers: List[List[Meld]] = []  # Winning partitions of the winner's hand

    @property
    def is_exhausted(self) -> bool:
        return self.winner is None

    def __repr__(self):
        return f"RoundResult({self.reason}, winner={self.winner}, awarded={self.awarded})"


class RoundState:
    """State for a single round of play.

    Owns the tile set and discard pile; players (and their hands) belong to
    the game. Every decision goes through the seat's policy, and selections
    are validated against the options offered.
    """

    def __init__(
        self,
        players: List[PlayerState],
        tile_set: TileSet,
        round_wind: Wind,
        event_bus: Optional[EventBus] = None,
        discard_pile: Optional[DiscardPile] = None,
        current_player: int = 0,
        score_cap: int = SCORE_CAP,
    ):
        self.players = players
        self.tile_set = tile_set
        self.round_wind = round_wind
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.discard_pile = discard_pile if discard_pile is not None else DiscardPile()
        self.score_cap = score_cap

        self.current_player = current_player
        self.phase = TurnPhase.AWAIT_DRAW
        self.last_discard: Optional[Tile] = None
        self.last_discard_player: Optional[int] = None

        self.result: Optional[RoundResult] = None

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_running(self) -> bool:
        return self.phase != TurnPhase.FINISHED

    @property
    def is_finished(self) -> bool:
        return self.phase == TurnPhase.FINISHED

    def next_player(self, current: int) -> int:
        return (current + 1) % self.num_players

    def deal_tiles(self):
        """Deal 13 tiles to each player and sort every hand."""
        for p in self.players:
            p.reset_for_round()
            p.hand.deal(self.tile_set.pop_tiles(HAND_SIZE))
            p.hand.sort()

        self.event_bus.emit(GameEvent(EventType.ROUND_START, {
            "round_wind": self.round_wind,
            "players": self.players,
            "tile_set": self.tile_set,
            "dealer": self.current_player,
        }))

    def view_for(self, player_idx: int) -> GameView:
        return build_game_view(
            player_idx, self.players, self.round_wind,
            self.discard_pile.tiles, self.tile_set.size,
            self.last_discard, self.last_discard_player,
        )

    # --- State machine ---

    def step(self) -> TurnPhase:
        """Advance exactly one phase and return the new phase."""
        if self.phase == TurnPhase.AWAIT_DRAW:
            self.process_draw(self.current_player)
        elif self.phase == TurnPhase.AWAIT_DISCARD:
            self.process_policy_discard(self.current_player)
        elif self.phase == TurnPhase.AWAIT_PICKUP_DECISIONS:
            self.process_pickup_decisions()
        return self.phase

    def play_turn(self) -> TurnPhase:
        """Step until the next seat is waiting to draw or the round is over."""
        self.step()
        while self.phase not in (TurnPhase.AWAIT_DRAW, TurnPhase.FINISHED):
            self.step()
        return self.phase

    def run(self) -> RoundResult:
        """Step until FINISHED."""
        while self.phase != TurnPhase.FINISHED:
            self.step()
        return self.result

    # --- Phase handlers ---

    def process_draw(self, player_idx: int) -> Optional[Tile]:
        """Draw a tile for a player. Finishes the round if the set is empty."""
        self._expect(TurnPhase.AWAIT_DRAW, player_idx)
        tile = self.tile_set.pop_tile()
        if tile is None:
            self.finish(None)
            return None

        hand = self.players[player_idx].hand
        hand.draw(tile)
        hand.sort()

        self.event_bus.emit(GameEvent(EventType.DRAW, {
            "player": player_idx,
            "tile": tile,
        }))

        if not self._check_mahjong(player_idx):
            self.phase = TurnPhase.AWAIT_DISCARD
        return tile

    def process_policy_discard(self, player_idx: int) -> Tile:
        """Ask the player's policy which hidden tile to discard."""
        hand = self.players[player_idx].hand
        options = hand.valid_discards()
        choice = self._select(player_idx, ActionKind.DISCARD, options)
        return self.process_discard(player_idx, options[choice])

    def process_discard(self, player_idx: int, index: int) -> Tile:
        """Move the tile at ``index`` of the player's hand to the discard pile."""
        self._expect(TurnPhase.AWAIT_DISCARD, player_idx)
        tile = self.players[player_idx].hand.discard(index)
        self.discard_pile.add(tile)

        self.last_discard = tile
        self.last_discard_player = player_idx
        self.phase = TurnPhase.AWAIT_PICKUP_DECISIONS

        self.event_bus.emit(GameEvent(EventType.DISCARD, {
            "player": player_idx,
            "tile": tile,
        }))
        return tile

    def process_pickup_decisions(self) -> Optional[PickupClaim]:
        """Poll every other seat in seat order and apply the winning claim."""
        if self.phase != TurnPhase.AWAIT_PICKUP_DECISIONS:
            raise ValueError(f"no discard awaiting pickup decisions (phase {self.phase.value})")
        tile = self.discard_pile.peek_last()
        discarder = self.last_discard_player

        claims = []
        for seat in range(self.num_players):
            if seat == discarder:
                continue
            claims.append(self._poll_pickup(seat, tile, discarder))

        claim = resolve_pickup_claims(claims)
        if claim is None:
            if self.tile_set.is_empty:
                self.finish(None)
            else:
                self.current_player = self.next_player(discarder)
                self.phase = TurnPhase.AWAIT_DRAW
            return None

        self.process_pickup(claim)
        return claim

    def process_pickup(self, claim: PickupClaim):
        """Move the last discard into the claimant's hand and reveal the meld."""
        player_idx = claim.player
        hand = self.players[player_idx].hand
        tile = self.discard_pile.pop()
        hand.draw(tile)

        consumed = pickup_indices(hand, hand.size - 1, claim.action, claim.chow_start)
        meld_tiles = [hand.tiles[i] for i in consumed]
        hand.reveal(consumed)
        hand.sort()

        self.current_player = player_idx
        self.last_discard = None
        self.event_bus.emit(GameEvent(EventType.PICKUP, {
            "player": player_idx,
            "from_player": self.last_discard_player,
            "action": claim.action,
            "tile": tile,
            "tiles": meld_tiles,
        }))

        if not self._check_mahjong(player_idx):
            self.phase = TurnPhase.AWAIT_DISCARD

    def finish(self, winner: Optional[int], covers: Optional[List[List[Meld]]] = None):
        """End the round: score every hand and add the capped totals."""
        result = RoundResult(winner, "mahjong" if winner is not None else "exhausted")
        result.covers = covers or []

        for p in self.players:
            score = final_score(p.hand, self.round_wind, p.seat_wind,
                                mahjong=(p.seat == winner))
            awarded = score.capped(self.score_cap)
            p.score += awarded
            result.scores.append(score)
            result.awarded.append(awarded)

        if winner is not None:
            self.players[winner].wins += 1
            self.event_bus.emit(GameEvent(EventType.MAHJONG, {
                "player": winner,
                "score": result.scores[winner],
                "covers": result.covers,
            }))
        else:
            self.event_bus.emit(GameEvent(EventType.EXHAUSTED, {}))

        self.result = result
        self.phase = TurnPhase.FINISHED

        self.event_bus.emit(GameEvent(EventType.ROUND_END, {
            "result": result,
            "players": self.players,
        }))

    # --- Internals ---

    def _poll_pickup(self, seat: int, tile: Tile, discarder: int) -> PickupClaim:
        hand = self.players[seat].hand
        options = available_pickups(hand, tile, seat, discarder, self.num_players)
        if options == [PickupAction.NONE]:
            return PickupClaim(seat, PickupAction.NONE)

        choice = self._select(seat, ActionKind.PICKUP, options)
        action = options[choice]
        chow_start = None
        if action == PickupAction.CHOW:
            starts = chow_options(hand, tile)
            index = 0
            if len(starts) > 1:
                index = self.players[seat].policy.choose_chow(starts, self.view_for(seat))
                _check_index(index, starts, seat)
            chow_start = starts[index]
        return PickupClaim(seat, action, chow_start)

    def _select(self, player_idx: int, kind: ActionKind, options: Sequence) -> int:
        policy = self.players[player_idx].policy
        if policy is None:
            raise ValueError(f"player {player_idx} has no policy")
        choice = policy.select_action(kind, list(options), self.view_for(player_idx))
        _check_index(choice, options, player_idx)
        return choice

    def _check_mahjong(self, player_idx: int) -> bool:
        covers = winning_covers(self.players[player_idx].hand.tiles)
        if covers:
            self.finish(player_idx, covers)
            return True
        return False

    def _expect(self, phase: TurnPhase, player_idx: int):
        if self.phase != phase:
            raise ValueError(f"cannot do that now: round is in phase {self.phase.value}")
        if player_idx != self.current_player:
            raise ValueError(f"it is player {self.current_player}'s turn, not {player_idx}'s")


def _check_index(choice, options: Sequence, player_idx: int):
    if isinstance(choice, bool) or not isinstance(choice, int) or not 0 <= choice < len(options):
        raise InvalidSelectionError(
            f"player {player_idx} selected {choice!r}, expected an index in 0..{len(options) - 1}")


def run_round(round_state: RoundState) -> RoundResult:
    """Deal and play a complete round."""
    round_state.deal_tiles()
    return round_state.run()
