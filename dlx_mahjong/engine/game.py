"""Game management - players, winds and running scores across rounds."""

import random
from typing import List, Optional

from dlx_mahjong.core.tile_set import TileSet
from dlx_mahjong.core.player_state import PlayerState, Wind
from dlx_mahjong.engine.event import EventBus, EventType, GameEvent
from dlx_mahjong.engine.round import RoundState, RoundResult
from dlx_mahjong.player.base import Policy
from dlx_mahjong.player.random_policy import RandomPolicy
from dlx_mahjong.player.tile_count import TileCountPolicy
from dlx_mahjong.rules.scoring import SCORE_CAP

POLICY_NAMES = ("random", "tile_count", "human")
DEFAULT_POLICY = "tile_count"


class GameConfig:
    """Game configuration.

    Args:
        num_players: Seats at the table (2-4)
        human_seat: Seat driven by console input, or None for a headless game
        broadcast: Show every hand in full instead of only the human's
        score_cap: Most points a player can add to their score in one round
        seed: Seed for shuffling and policy randomness; None for a random game
        log_dir: Directory for JSON game logs; None disables logging
        policies: Policy name per seat; defaults to tile_count (human at human_seat)
    """

    def __init__(
        self,
        num_players: int = 4,
        human_seat: Optional[int] = None,
        broadcast: bool = False,
        score_cap: int = SCORE_CAP,
        seed: Optional[int] = None,
        log_dir: Optional[str] = None,
        policies: Optional[List[str]] = None,
    ):
        if not 2 <= num_players <= 4:
            raise ValueError(f"num_players must be 2..4, got {num_players}")
        if human_seat is not None and not 0 <= human_seat < num_players:
            raise ValueError(f"human_seat must be 0..{num_players - 1}, got {human_seat}")
        if score_cap < 0:
            raise ValueError(f"score_cap must not be negative, got {score_cap}")

        self.num_players = num_players
        self.human_seat = human_seat
        self.broadcast = broadcast
        self.score_cap = score_cap
        self.seed = seed
        self.log_dir = log_dir

        if policies is None:
            policies = [DEFAULT_POLICY] * num_players
            if human_seat is not None:
                policies[human_seat] = "human"
        if len(policies) != num_players:
            raise ValueError(f"expected {num_players} policy names, got {len(policies)}")
        for name in policies:
            _check_policy_name(name)
        self.policies = list(policies)

    def to_dict(self) -> dict:
        return {
            "num_players": self.num_players,
            "human_seat": self.human_seat,
            "broadcast": self.broadcast,
            "score_cap": self.score_cap,
            "seed": self.seed,
            "policies": self.policies,
        }


def _check_policy_name(name: str):
    if name not in POLICY_NAMES:
        raise ValueError(f"unknown policy {name!r}, expected one of {', '.join(POLICY_NAMES)}")


def make_policy(name: str, rng: Optional[random.Random] = None, console=None) -> Policy:
    """Build a policy by name ('random', 'tile_count' or 'human')."""
    _check_policy_name(name)
    if name == "random":
        return RandomPolicy(rng)
    if name == "tile_count":
        return TileCountPolicy(rng)

    from dlx_mahjong.player.human import HumanPolicy
    if console is None:
        from rich.console import Console
        console = Console()
    return HumanPolicy(console)


class GameState:
    """Manages a game: a sequence of rounds over the same four players.

    The round wind starts at East and turns forward each round; seat winds
    turn backward. Scores accumulate until reset.
    """

    def __init__(self, config: GameConfig, player_names: Optional[List[str]] = None,
                 event_bus: Optional[EventBus] = None, console=None):
        self.config = config
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.console = console
        self.rng = random.Random(config.seed)

        if player_names is None:
            player_names = [f"Player {i}" for i in range(config.num_players)]
        if len(player_names) < config.num_players:
            raise ValueError(f"need {config.num_players} player names, got {len(player_names)}")
        self.player_names = list(player_names[:config.num_players])

        self.players: List[PlayerState] = []
        self.round_wind = Wind.EAST
        self.round_number = 0
        self.round: Optional[RoundState] = None
        self.round_results: List[RoundResult] = []
        self._create_players()
        self.event_bus.subscribe(EventType.ROUND_END, self._on_round_end)

    def _create_players(self):
        self.players = []
        for seat, name in enumerate(self.player_names):
            policy = make_policy(self.config.policies[seat], self.rng, self.console)
            self.players.append(PlayerState(seat, name, policy))

    def set_policy(self, seat: int, name: str):
        """Swap the policy driving ``seat``."""
        self.config.policies[seat] = name
        self.players[seat].policy = make_policy(name, self.rng, self.console)

    def _on_round_end(self, event: GameEvent):
        self.round_results.append(event.data["result"])

    @property
    def dealer_seat(self) -> int:
        """Seat holding the East wind; it draws first."""
        return next(p.seat for p in self.players if p.seat_wind == Wind.EAST)

    @property
    def is_running(self) -> bool:
        return self.round is not None and self.round.is_running

    def setup_round(self) -> RoundState:
        """Shuffle a new tile set, deal, and make it the current round."""
        self.round = RoundState(
            players=self.players,
            tile_set=TileSet(rng=self.rng),
            round_wind=self.round_wind,
            event_bus=self.event_bus,
            current_player=self.dealer_seat,
            score_cap=self.config.score_cap,
        )
        self.round.deal_tiles()
        return self.round

    def play_round(self) -> RoundResult:
        """Play the current round to the end (setting one up if needed)."""
        if self.round is None or self.round.is_finished:
            self.setup_round()
        return self.round.run()

    def next_round(self) -> RoundState:
        """Rotate winds and deal a fresh round; scores carry over."""
        self.round_wind = self.round_wind.next()
        for p in self.players:
            p.seat_wind = p.seat_wind.previous(self.config.num_players)
        self.round_number += 1

        self.event_bus.emit(GameEvent(EventType.NEXT_ROUND, {
            "round_wind": self.round_wind,
            "round_number": self.round_number,
        }))
        return self.setup_round()

    def reset(self) -> RoundState:
        """Start over: East round, seat winds by seat, zero scores."""
        self.round_wind = Wind.EAST
        self.round_number = 0
        self.round_results = []
        for p in self.players:
            p.score = 0
            p.wins = 0
            p.seat_wind = Wind(p.seat % 4)

        self.event_bus.emit(GameEvent(EventType.GAME_RESET, {
            "players": [(p.name, p.score) for p in self.players],
        }))
        return self.setup_round()

    @property
    def scores(self) -> List[int]:
        return [p.score for p in self.players]


def run_game(config: GameConfig, rounds: int, player_names: Optional[List[str]] = None,
             event_bus: Optional[EventBus] = None, console=None) -> GameState:
    """Play ``rounds`` consecutive rounds of one game.

    Returns:
        The GameState, with round_results and running scores filled in
    """
    if rounds < 1:
        raise ValueError(f"rounds must be at least 1, got {rounds}")
    game = GameState(config, player_names, event_bus, console)
    game.setup_round()
    game.play_round()
    for _ in range(rounds - 1):
        game.next_round()
        game.play_round()
    return game
