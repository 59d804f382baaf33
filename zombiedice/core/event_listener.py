from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable, Optional
from zombiedice.core.game_event import GameEvent, GameEventType

Subscriber = Callable[[GameEvent], None]


@dataclass
class _Subscription:
    callback: Subscriber
    # None means every event type
    types: Optional[frozenset[GameEventType]] = None

    def wants(self, event_type: GameEventType) -> bool:
        return self.types is None or event_type in self.types


class EventListener:
    """Synchronous publish/subscribe hub for ScoreKeeper events.

    Callbacks run in subscription order. Events published from inside a
    callback are queued and delivered once the current event has reached every
    subscriber, so observers always see events in command order. A subscriber
    that raises is reported and skipped; it never aborts the command that
    published the event.
    """

    def __init__(self):
        self._subs: list[_Subscription] = []
        self._queue: deque[GameEvent] = deque()
        self._dispatching: bool = False
        self.failures: int = 0

    def _find(self, callback: Subscriber) -> _Subscription | None:
        for sub in self._subs:
            if sub.callback == callback:
                return sub
        return None

    def subscribe(self, callback: Subscriber, types: Optional[Iterable[GameEventType]] = None) -> None:
        wanted = None if types is None else frozenset(types)
        existing = self._find(callback)
        if existing is None:
            self._subs.append(_Subscription(callback, wanted))
        elif existing.types is not None:
            # Re-subscribing widens the filter
            existing.types = None if wanted is None else existing.types | wanted

    def unsubscribe(self, callback: Subscriber) -> None:
        self._subs = [s for s in self._subs if s.callback != callback]

    def publish(self, event: GameEvent) -> None:
        self._queue.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                self._deliver(self._queue.popleft())
        finally:
            self._dispatching = False

    def _deliver(self, event: GameEvent) -> None:
        for sub in list(self._subs):
            if not sub.wants(event.type):
                continue
            try:
                sub.callback(event)
            except Exception as e:
                self.failures += 1
                print(f"Warning: subscriber failed on {event.type.name}: {e}")
