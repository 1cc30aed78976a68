"""JSON session log - one file per game, one entry per round."""

import json
import os
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from dlx_mahjong.core.tile import Tile
from dlx_mahjong.engine.event import EventBus, EventType, GameEvent
from dlx_mahjong.engine.round import RoundResult
from dlx_mahjong.ui.tile_display import tile_to_simple_str


def _serialize(value):
    """Tiles become their shorthand; lists of tiles become lists of shorthand."""
    if isinstance(value, Tile):
        return tile_to_simple_str(value)
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


class GameLogger:
    """Collects deals, actions and results from the event bus.

    Nothing is written until save(); a session that never finishes a round
    leaves no file behind.
    """

    def __init__(self, player_names: List[str], config_info: dict, log_dir: str):
        self.session_id = uuid.uuid4().hex[:12]
        self.started_at = datetime.now().isoformat()
        self.player_names = list(player_names)
        self.config_info = config_info
        self.log_dir = log_dir

        self.rounds: List[dict] = []
        self._open_round: Optional[dict] = None

    def subscribe_events(self, event_bus: EventBus):
        handlers = {
            EventType.ROUND_START: self._on_round_start,
            EventType.DRAW: self._on_draw,
            EventType.DISCARD: self._on_discard,
            EventType.PICKUP: self._on_pickup,
            EventType.ROUND_END: self._on_round_end,
        }
        for event_type, handler in handlers.items():
            event_bus.subscribe(event_type, handler)

    def save(self, final_scores: Dict[str, int]) -> str:
        """Write the session to ``log_dir/game_<session_id>.json``; returns the path."""
        os.makedirs(self.log_dir, exist_ok=True)
        path = os.path.join(self.log_dir, f"game_{self.session_id}.json")
        document = {
            "session_id": self.session_id,
            "timestamp": self.started_at,
            "config": self.config_info,
            "players": self.player_names,
            "final_scores": final_scores,
            "rounds": self.rounds,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
        return path

    def _seat_name(self, seat: int) -> str:
        if 0 <= seat < len(self.player_names):
            return self.player_names[seat]
        return f"Player {seat}"

    def _on_round_start(self, event: GameEvent):
        data = event.data
        entry = {
            "round_id": uuid.uuid4().hex[:8],
            "round_wind": data["round_wind"].display_name,
            "dealer": data["dealer"],
            # Last tile is drawn first
            "tile_set": _serialize(data["tile_set"].tiles),
            "initial_hands": {
                self._seat_name(p.seat): {
                    "seat": p.seat,
                    "wind": p.seat_wind.display_name,
                    "tiles": _serialize(p.hand.tiles),
                }
                for p in data["players"]
            },
            "actions": [],
            "result": None,
        }
        self.rounds.append(entry)
        self._open_round = entry

    def _record(self, action: str, seat: int, **details):
        if self._open_round is None:
            return
        entry = {"action": action, "player": self._seat_name(seat), "seat": seat}
        entry.update({key: _serialize(val) for key, val in details.items()})
        self._open_round["actions"].append(entry)

    def _on_draw(self, event: GameEvent):
        self._record("draw", event.data["player"], tile=event.data["tile"])

    def _on_discard(self, event: GameEvent):
        self._record("discard", event.data["player"], tile=event.data["tile"])

    def _on_pickup(self, event: GameEvent):
        data = event.data
        self._record(data["action"].label, data["player"], tile=data["tile"],
                     tiles=data["tiles"], from_seat=data["from_player"])

    def _on_round_end(self, event: GameEvent):
        if self._open_round is None:
            return
        self._open_round["result"] = self._result_entry(event.data["result"])
        self._open_round = None

    def _result_entry(self, result: RoundResult) -> dict:
        scores = {}
        for seat, score in enumerate(result.scores):
            scores[self._seat_name(seat)] = {
                "base": score.base,
                "multiplier_exp": score.multiplier_exp,
                "total": score.total,
                "awarded": result.awarded[seat],
            }
        winner = self._seat_name(result.winner) if result.winner is not None else None
        melds = []
        if result.covers:
            melds = [m.meld_type.name.lower() for m in result.covers[0]]
        return {
            "reason": result.reason,
            "winner": winner,
            "scores": scores,
            "winning_melds": melds,
        }
