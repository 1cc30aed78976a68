"""Tile-count policy - keeps tiles it holds many of and that are still live.

Strategy:
- Discard: throw the tile with the lowest keep score
  ``1000 * copies in hand + 100 * (4 - copies known) + 10 * is_honor + suit count``,
  where copies known include the ones in hand,
  i.e. isolated tiles whose remaining copies are mostly gone go first.
  Equal scores are broken by a coin flip.
- Pickup: take the highest-priority claim offered; chows only at ``chow_rate``.
- With probability ``randomness`` any decision is made uniformly at random.
"""

import random
from typing import Optional, Sequence

from dlx_mahjong.core.tile_set import COPIES_PER_KIND
from dlx_mahjong.engine.action import ActionKind, PickupAction
from dlx_mahjong.player.base import Policy, GameView


class TileCountPolicy(Policy):
    name = "tile_count"

    def __init__(self, rng: Optional[random.Random] = None,
                 randomness: float = 0.05, chow_rate: float = 0.5):
        if not 0.0 <= randomness <= 1.0:
            raise ValueError(f"randomness must be within 0..1, got {randomness}")
        if not 0.0 <= chow_rate <= 1.0:
            raise ValueError(f"chow_rate must be within 0..1, got {chow_rate}")
        self.rng = rng if rng is not None else random.Random()
        self.randomness = randomness
        self.chow_rate = chow_rate

    def select_action(self, kind: ActionKind, options: Sequence, view: GameView) -> int:
        if self.rng.random() < self.randomness:
            return self.rng.randrange(len(options))

        if kind == ActionKind.DISCARD:
            return self.choose_discard(options, view)
        return self.choose_pickup(options)

    def choose_discard(self, options: Sequence[int], view: GameView) -> int:
        """Position in ``options`` of the hand index to throw away."""
        best = 0
        best_score = None
        for i, hand_index in enumerate(options):
            score = self.keep_score(hand_index, view)
            if best_score is None or score < best_score:
                best, best_score = i, score
            elif score == best_score and self.rng.random() < 0.5:
                best = i
        return best

    def keep_score(self, hand_index: int, view: GameView) -> int:
        hand = view.my_hand
        tile = hand[hand_index]
        return (1000 * hand.count(tile)
                + 100 * (COPIES_PER_KIND - view.count_seen(tile))
                + 10 * int(tile.is_honor)
                + hand.count_suit(tile.suit))

    def choose_pickup(self, options: Sequence[PickupAction]) -> int:
        # Options arrive highest priority first
        if options[0] == PickupAction.CHOW and self.rng.random() >= self.chow_rate:
            return options.index(PickupAction.NONE)
        return 0
