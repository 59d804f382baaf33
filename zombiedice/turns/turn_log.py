"""Append-only history of recorded turns.

The log is the single source of truth: player totals and the final-round
tracker are derived from it by replay.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterator

from zombiedice.core.coercion import to_count, to_number


@dataclass(frozen=True)
class TurnLogEntry:
    ts: int  # epoch milliseconds
    player_id: str
    brains: int = 0
    shotguns: int = 0
    note: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            'ts': self.ts,
            'playerId': self.player_id,
            'brains': self.brains,
            'shotguns': self.shotguns,
            'note': self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TurnLogEntry | None:
        """Build an entry from saved data, or None if it names no player."""
        if not isinstance(data, dict):
            return None
        pid = data.get('playerId')
        if not isinstance(pid, str) or not pid:
            return None
        ts = to_number(data.get('ts', data.get('timestamp')))
        note = data.get('note', '')
        return cls(
            ts=int(ts) if ts is not None else 0,
            player_id=pid,
            brains=to_count(data.get('brains')),
            shotguns=to_count(data.get('shotguns')),
            note=note.strip() if isinstance(note, str) else '',
        )


class TurnLog:
    def __init__(self, entries: list[TurnLogEntry] | None = None):
        self._entries: list[TurnLogEntry] = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TurnLogEntry]:
        return iter(tuple(self._entries))

    def append(self, entry: TurnLogEntry) -> None:
        self._entries.append(entry)

    def remove_last(self) -> TurnLogEntry | None:
        if not self._entries:
            return None
        return self._entries.pop()

    def all(self) -> tuple[TurnLogEntry, ...]:
        return tuple(self._entries)

    def newest_first(self) -> tuple[TurnLogEntry, ...]:
        return tuple(reversed(self._entries))

    def last(self) -> TurnLogEntry | None:
        return self._entries[-1] if self._entries else None

    def entries_for(self, player_id: str) -> list[TurnLogEntry]:
        return [e for e in self._entries if e.player_id == player_id]

    def clear(self) -> None:
        self._entries.clear()

    def to_list(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self._entries]
