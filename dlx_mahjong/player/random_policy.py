"""Random policy - uniform choice among the legal options."""

import random
from typing import Optional, Sequence

from dlx_mahjong.engine.action import ActionKind
from dlx_mahjong.player.base import Policy, GameView


class RandomPolicy(Policy):
    name = "random"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def select_action(self, kind: ActionKind, options: Sequence, view: GameView) -> int:
        return self.rng.randrange(len(options))

    def choose_chow(self, options: Sequence[int], view: GameView) -> int:
        return self.rng.randrange(len(options))
