"""Ordered collection of players in seating order."""
from __future__ import annotations
import time
from typing import Callable, Iterable, Iterator

from zombiedice.core.random_source import RandomSource
from zombiedice.players.player import Player


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class Roster:
    """Players in the order they were added. There is no removal operation."""

    def __init__(self, rng: RandomSource | None = None, clock: Callable[[], int] | None = None):
        self.rng = rng or RandomSource()
        self.clock = clock or wall_clock_ms
        self._players: list[Player] = []

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)

    def __len__(self) -> int:
        return len(self._players)

    def __bool__(self) -> bool:
        return bool(self._players)

    @property
    def players(self) -> list[Player]:
        return list(self._players)

    def _new_id(self) -> str:
        pid = self.rng.token_id(self.clock())
        while self.find(pid) is not None:
            pid = self.rng.token_id(self.clock())
        return pid

    def add(self, name: str | None, joined_at: int = 0) -> Player | None:
        """Append a player with zero score; returns None if the name trims to empty."""
        n = (name or "").strip()
        if not n:
            return None
        player = Player(id=self._new_id(), name=n, joined_at=joined_at)
        self._players.append(player)
        return player

    def restore(self, players: Iterable[Player]) -> None:
        """Replace membership with already-built players, keeping the first of any duplicate id."""
        self._players = []
        seen: set[str] = set()
        for p in players:
            if p.id in seen:
                continue
            seen.add(p.id)
            self._players.append(p)

    def find(self, player_id: str | None) -> Player | None:
        if player_id is None:
            return None
        for p in self._players:
            if p.id == player_id:
                return p
        return None

    def ids(self) -> list[str]:
        return [p.id for p in self._players]

    def ids_at(self, position: int) -> list[str]:
        """Seating order of the players already seated when log entry ``position`` was written."""
        return [p.id for p in self._players if p.joined_at <= position]

    def cap_joins(self, log_length: int) -> None:
        """Pull join positions back after the log shrank, so everyone seated now stays seated."""
        for p in self._players:
            p.joined_at = min(p.joined_at, log_length)

    def index_of(self, player_id: str | None) -> int:
        for i, p in enumerate(self._players):
            if p.id == player_id:
                return i
        return -1

    def name_of(self, player_id: str | None, default: str | None = None) -> str | None:
        p = self.find(player_id)
        return p.name if p else default

    def reset_scores(self) -> None:
        for p in self._players:
            p.reset_score()

    def reset_joins(self) -> None:
        for p in self._players:
            p.joined_at = 0

    def clear(self) -> None:
        self._players.clear()

    def to_list(self) -> list[dict]:
        return [p.to_dict() for p in self._players]
