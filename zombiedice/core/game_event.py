from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional

class GameEventType(Enum):
    # Roster
    PLAYER_ADDED = auto()
    # Turn lifecycle
    TURN_RECORDED = auto()
    TURN_UNDONE = auto()
    # Final round
    FINAL_ROUND_STARTED = auto()
    FINAL_ROUND_ADVANCED = auto()
    GAME_LOCKED = auto()
    # Game-wide commands
    TARGET_CHANGED = auto()
    STATE_REBUILT = auto()
    NEW_GAME = auto()
    DATA_CLEARED = auto()
    # Emitted once after every accepted mutating command (autosave hook)
    STATE_CHANGED = auto()
    PHASE_CHANGED = auto()
    # Rejected command (payload: command, reason)
    REQUEST_DENIED = auto()

@dataclass(slots=True)
class GameEvent:
    type: GameEventType
    source: Any | None = None
    payload: Optional[dict[str, Any]] = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default) if self.payload else default

    def __repr__(self) -> str:  # Helpful for debugging
        return f"GameEvent(type={self.type}, payload={self.payload})"
