"""Event system for decoupling engine from UI and logging."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List


class EventType(Enum):
    ROUND_START = "round_start"
    DRAW = "draw"
    DISCARD = "discard"
    PICKUP = "pickup"
    MAHJONG = "mahjong"
    EXHAUSTED = "exhausted"
    ROUND_END = "round_end"
    NEXT_ROUND = "next_round"
    GAME_RESET = "game_reset"


@dataclass
class GameEvent:
    """An event emitted by the game engine."""
    event_type: EventType
    data: Dict[str, Any] = field(default_factory=dict)


class EventBus:
    """Publish/subscribe bus; listeners run synchronously in subscription order."""

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def subscribe(self, event_type: EventType, callback: Callable):
        self._listeners.setdefault(event_type, []).append(callback)

    def subscribe_all(self, callback: Callable):
        """Register one callback for every event type."""
        for event_type in EventType:
            self.subscribe(event_type, callback)

    def emit(self, event: GameEvent):
        for callback in self._listeners.get(event.event_type, []):
            callback(event)
