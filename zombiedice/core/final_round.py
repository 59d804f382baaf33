"""Final-round tracker.

Once a player's total reaches the target, every other seated player is owed
exactly one more turn. The tracker only goes back to inactive through
``reset`` (new game, hard reset, or a replay rebuild).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class FinalRoundSnapshot:
    active: bool
    starter_id: str | None
    remaining_ids: tuple[str, ...]


class FinalRoundTracker:
    def __init__(self):
        self.active: bool = False
        self.starter_id: str | None = None
        self.remaining_ids: list[str] = []

    def reset(self) -> None:
        self.active = False
        self.starter_id = None
        self.remaining_ids = []

    def start(self, starter_id: str, seating_ids: Iterable[str]) -> None:
        """Activate with ``starter_id``; everyone else in seating order is owed a turn."""
        self.active = True
        self.starter_id = starter_id
        self.remaining_ids = [pid for pid in seating_ids if pid != starter_id]

    def advance(self, player_id: str) -> bool:
        """Mark ``player_id``'s last turn as taken.

        Returns True only if this call emptied ``remaining_ids``.
        """
        if not self.active or player_id not in self.remaining_ids:
            return False
        self.remaining_ids.remove(player_id)
        return not self.remaining_ids

    def is_starter(self, player_id: str | None) -> bool:
        return self.active and player_id is not None and player_id == self.starter_id

    def is_owed(self, player_id: str | None) -> bool:
        return self.active and player_id in self.remaining_ids

    def snapshot(self) -> FinalRoundSnapshot:
        return FinalRoundSnapshot(self.active, self.starter_id, tuple(self.remaining_ids))

    def to_dict(self) -> dict[str, Any]:
        return {
            'active': self.active,
            'starterId': self.starter_id,
            'remainingIds': list(self.remaining_ids),
        }

    @classmethod
    def from_dict(cls, data: Any) -> FinalRoundTracker:
        """Restore from saved data; anything malformed yields an inactive tracker."""
        tracker = cls()
        if not isinstance(data, dict):
            return tracker
        active = data.get('active')
        starter = data.get('starterId')
        remaining = data.get('remainingIds')
        if not isinstance(active, bool) or not isinstance(remaining, list):
            return tracker
        if not all(isinstance(pid, str) for pid in remaining):
            return tracker
        if active != isinstance(starter, str):
            return tracker
        if active:
            tracker.active = True
            tracker.starter_id = starter
            tracker.remaining_ids = [pid for pid in remaining if pid != starter]
        return tracker
