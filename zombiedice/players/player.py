from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass
class Player:
    """A seated player. ``total`` and ``turns`` are derived from the turn log."""
    id: str
    name: str
    total: int = 0
    turns: int = 0
    # Log length when the player was seated; the final round only owes turns to
    # players seated before the triggering entry
    joined_at: int = 0

    def bank(self, brains: int) -> None:
        self.total += brains
        self.turns += 1

    def reset_score(self) -> None:
        self.total = 0
        self.turns = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize player state to dictionary for saving."""
        return {
            'id': self.id,
            'name': self.name,
            'total': self.total,
            'turns': self.turns,
            'joinedAt': self.joined_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player | None:
        """Restore a player from saved data.

        Returns None when the entry lacks a usable id or name. Persisted
        totals are taken as-is; the caller rebuilds them from the log.
        """
        if not isinstance(data, dict):
            return None
        pid = data.get('id')
        name = data.get('name')
        if not isinstance(pid, str) or not pid:
            return None
        if not isinstance(name, str) or not name.strip():
            return None
        total = data.get('total', 0)
        turns = data.get('turns', 0)
        joined_at = data.get('joinedAt', 0)
        return cls(
            id=pid,
            name=name.strip(),
            total=total if isinstance(total, int) and not isinstance(total, bool) and total >= 0 else 0,
            turns=turns if isinstance(turns, int) and not isinstance(turns, bool) and turns >= 0 else 0,
            joined_at=joined_at if isinstance(joined_at, int) and not isinstance(joined_at, bool) and joined_at >= 0 else 0,
        )
