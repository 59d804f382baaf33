from zombiedice.core.game_state_enum import GamePhase
from typing import Callable, Optional

PhaseChangeCallback = Callable[[GamePhase, GamePhase], None]

class GameStateManager:
    """Tracks the coarse game phase and reports transitions.

    The phase is derived, never authoritative: ScoreKeeper calls ``sync`` after
    each command with the current roster size, tracker and lock flag.
    """

    def __init__(self, on_change: Optional[PhaseChangeCallback] = None):
        self.state = GamePhase.SETUP
        self._on_change = on_change

    def _set(self, new_state: GamePhase):
        if new_state != self.state:
            old = self.state
            self.state = new_state
            if self._on_change:
                try:
                    self._on_change(old, new_state)
                except Exception:
                    pass

    def get_state(self) -> GamePhase:
        return self.state

    @staticmethod
    def derive(player_count: int, final_round_active: bool, locked: bool) -> GamePhase:
        if locked:
            return GamePhase.LOCKED
        if player_count == 0:
            return GamePhase.SETUP
        if final_round_active:
            return GamePhase.FINAL_ROUND
        return GamePhase.PLAYING

    def sync(self, player_count: int, final_round_active: bool, locked: bool) -> GamePhase:
        self._set(self.derive(player_count, final_round_active, locked))
        return self.state
