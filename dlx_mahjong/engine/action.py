"""Action definitions for the turn engine."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple


class ActionKind(Enum):
    DISCARD = "Discard"
    PICKUP = "Pickup"


class PickupAction(IntEnum):
    """Claims on a discarded tile. Larger value = higher priority."""
    NONE = 0
    CHOW = 1
    PONG = 2
    KONG = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class InvalidSelectionError(ValueError):
    """A policy returned an index outside the options it was offered."""


@dataclass
class PickupClaim:
    """A pickup decision made by one player."""
    player: int
    action: PickupAction
    chow_start: Optional[int] = None

    def __repr__(self):
        return f"PickupClaim({self.action.label}, p{self.player})"


def resolve_pickup_claims(claims: List[PickupClaim]) -> Optional[PickupClaim]:
    """Pick the winning claim: kong > pong > chow; lowest seat on equal actions.

    Returns None when every claim is NONE.
    """
    best: Optional[PickupClaim] = None
    for claim in claims:
        if claim.action == PickupAction.NONE:
            continue
        if best is None or _priority(claim) < _priority(best):
            best = claim
    return best


def _priority(claim: PickupClaim) -> Tuple[int, int]:
    return (-int(claim.action), claim.player)
