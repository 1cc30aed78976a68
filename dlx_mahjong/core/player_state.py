"""Player state tracking during a game."""

from enum import IntEnum

from .hand import Hand


class Wind(IntEnum):
    EAST = 0
    SOUTH = 1
    WEST = 2
    NORTH = 3

    @property
    def display_name(self) -> str:
        return self.name.title()

    def next(self) -> 'Wind':
        """Forward rotation (round wind: East -> South -> West -> North)."""
        return Wind((self.value + 1) % 4)

    def previous(self, count: int = 4) -> 'Wind':
        """Backward rotation (seat winds between rounds).

        With fewer than four seats only the first ``count`` winds are in play,
        so East always belongs to someone.
        """
        return Wind((self.value + count - 1) % count)


class PlayerState:
    """Complete state for one player across a game.

    Attributes:
        seat: Seat index (0-3, fixed)
        name: Display name
        policy: Decision policy (see dlx_mahjong.player.base.Policy)
        score: Cumulative game score
        hand: Current hand (reset each round)
        seat_wind: Current seat wind (rotates each round)
        wins: Rounds won this game
    """

    def __init__(self, seat: int, name: str, policy=None, score: int = 0):
        self.seat = seat
        self.name = name
        self.policy = policy
        self.score = score
        self.hand = Hand()
        self.seat_wind = Wind(seat % 4)
        self.wins = 0

    def reset_for_round(self):
        """Give the player an empty hand for a new deal."""
        self.hand = Hand()

    @property
    def is_human(self) -> bool:
        return getattr(self.policy, "is_human", False)

    def __repr__(self):
        return f"PlayerState({self.name}, {self.seat_wind.display_name}, {self.score})"
