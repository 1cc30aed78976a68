"""Monte-Carlo batch runner - many headless rounds, aggregated per seat."""

from dataclasses import dataclass, field
from typing import List, Optional

from dlx_mahjong.engine.event import EventBus
from dlx_mahjong.engine.game import GameConfig, GameState, DEFAULT_POLICY


@dataclass
class SimulationSummary:
    """Aggregate outcome of a batch of rounds."""
    rounds: int = 0
    exhausted: int = 0
    wins: List[int] = field(default_factory=list)
    total_scores: List[int] = field(default_factory=list)  # Sum of points awarded per seat

    def win_rate(self, seat: int) -> float:
        return self.wins[seat] / self.rounds if self.rounds else 0.0

    def average_score(self, seat: int) -> float:
        return self.total_scores[seat] / self.rounds if self.rounds else 0.0


def simulate(rounds: int, policies: Optional[List[str]] = None, seed: Optional[int] = None,
             num_players: int = 4, event_bus: Optional[EventBus] = None) -> SimulationSummary:
    """Play ``rounds`` rounds of one continuous game with no human seat.

    Winds rotate between rounds as in a normal game; the summary counts
    only the points awarded during the batch.
    """
    if rounds < 1:
        raise ValueError(f"rounds must be at least 1, got {rounds}")
    if policies is None:
        policies = [DEFAULT_POLICY] * num_players
    if "human" in policies:
        raise ValueError("simulations cannot include a human policy")

    config = GameConfig(num_players=num_players, seed=seed, policies=policies)
    game = GameState(config, event_bus=event_bus)
    summary = SimulationSummary(wins=[0] * num_players, total_scores=[0] * num_players)

    game.setup_round()
    for i in range(rounds):
        if i > 0:
            game.next_round()
        result = game.play_round()

        summary.rounds += 1
        if result.winner is None:
            summary.exhausted += 1
        else:
            summary.wins[result.winner] += 1
        for seat, points in enumerate(result.awarded):
            summary.total_scores[seat] += points

    return summary
