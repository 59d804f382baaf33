"""Shared test utilities for the score keeper project."""
from __future__ import annotations
from typing import List
from zombiedice.core.game_event import GameEvent, GameEventType
from zombiedice.game import ScoreKeeper

FIXED_NOW_MS = 1_700_000_000_000

class EventCollector:
    """Simple event sink used in tests to capture published GameEvents.

    Usage:
        collector = EventCollector()
        keeper.event_listener.subscribe(collector.on_event)
        # ... run code ...
        types = [e.type for e in collector.events]
    """
    def __init__(self) -> None:
        self.events: List[GameEvent] = []
    def on_event(self, event: GameEvent):
        self.events.append(event)
    def types(self) -> List[GameEventType]:
        return [e.type for e in self.events]
    def of_type(self, event_type: GameEventType) -> List[GameEvent]:
        return [e for e in self.events if e.type == event_type]
    def clear(self):
        self.events.clear()


def make_keeper(*names: str, target: int = 13) -> ScoreKeeper:
    """Deterministic keeper with ``names`` seated in order."""
    keeper = ScoreKeeper(target=target, rng_seed=7, clock=lambda: FIXED_NOW_MS)
    for name in names:
        keeper.add_player(name)
    return keeper


def ids_by_name(keeper: ScoreKeeper) -> dict[str, str]:
    return {p.name: p.id for p in keeper.roster}

__all__ = ["EventCollector", "make_keeper", "ids_by_name", "FIXED_NOW_MS"]
