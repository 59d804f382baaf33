from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from zombiedice.core.coercion import to_count, to_target
from zombiedice.core.constants import DEFAULT_TARGET
from zombiedice.core.event_listener import EventListener
from zombiedice.core.final_round import FinalRoundTracker
from zombiedice.core.game_event import GameEvent, GameEventType
from zombiedice.core.game_state_enum import GamePhase
from zombiedice.core.game_state_manager import GameStateManager
from zombiedice.core.random_source import RandomSource
from zombiedice.core.view import GameView, build_view
from zombiedice.players.player import Player
from zombiedice.players.roster import Roster, wall_clock_ms
from zombiedice.turns.turn_log import TurnLog, TurnLogEntry

# Outcomes of applying one banked turn to the final-round tracker
STARTED = "started"
ADVANCED = "advanced"
COMPLETED = "completed"


@dataclass(frozen=True)
class Standing:
    """Players holding the maximum total. ``best`` is the first of them in seating order."""
    best: Player
    ties: tuple[Player, ...]

    @property
    def is_tie(self) -> bool:
        return len(self.ties) > 1

    @property
    def leader(self) -> Player | None:
        return None if self.is_tie else self.best


class ScoreKeeper:
    def __init__(self, *, target: Any = DEFAULT_TARGET, rng_seed: int | None = None, clock: Callable[[], int] | None = None):
        """Turn and final-round state machine for one table of players.

        The turn log is authoritative. Player totals, the final-round tracker and
        the lock flag are derived from it, and ``rebuild_from_log`` recomputes
        them from scratch whenever history is rewritten (undo, target change,
        load). Every command returns a fresh GameView; rejected commands are
        no-ops that publish REQUEST_DENIED and return the unchanged view.

        Args:
            target: Brains needed to trigger the final round (minimum 1)
            rng_seed: Optional seed for deterministic player ids
            clock: Callable returning epoch milliseconds, used for log timestamps
        """
        self.clock = clock or wall_clock_ms
        self.rng = RandomSource(seed=rng_seed)
        self.event_listener = EventListener()
        self.state_manager = GameStateManager(on_change=self._on_phase_change)
        self.roster = Roster(self.rng, self.clock)
        self.log = TurnLog()
        self.final_round = FinalRoundTracker()
        self.target: int = to_target(target)
        self.locked: bool = False
        # Set only by lock(); a lock reached by finishing the final round stays undoable
        self.locked_manually: bool = False
        # Input-focus suggestion for the presentation layer
        self.suggested_player_id: str | None = None

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _emit(self, event_type: GameEventType, **payload) -> None:
        self.event_listener.publish(GameEvent(event_type, source=self, payload=payload or None))

    def _on_phase_change(self, old: GamePhase, new: GamePhase) -> None:
        self._emit(GameEventType.PHASE_CHANGED, old=old, new=new)

    def _sync_phase(self) -> None:
        self.state_manager.sync(len(self.roster), self.final_round.active, self.locked)

    def _changed(self, command: str) -> GameView:
        self._sync_phase()
        self._emit(GameEventType.STATE_CHANGED, command=command)
        return self.view()

    def _deny(self, command: str, reason: str) -> GameView:
        self._emit(GameEventType.REQUEST_DENIED, command=command, reason=reason)
        return self.view()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def view(self) -> GameView:
        return build_view(self)

    def get_phase(self) -> GamePhase:
        return self.state_manager.get_state()

    def leader(self) -> Standing | None:
        """Players with the maximum total, or None when nobody is seated."""
        players = self.roster.players
        if not players:
            return None
        best = players[0]
        for p in players:
            if p.total > best.total:
                best = p
        ties = tuple(p for p in players if p.total == best.total)
        return Standing(best=best, ties=ties)

    @property
    def leader_player(self) -> Player | None:
        standing = self.leader()
        return standing.leader if standing else None

    def next_eligible_player(self, current_id: str | None) -> str | None:
        """Next player in seating order after ``current_id`` who may still play.

        During a final round the starter and anyone no longer owed a turn are
        skipped. Returns ``current_id`` unchanged when a full wrap finds nobody,
        and None when the roster is empty.
        """
        order = self.roster.ids()
        if not order:
            return None
        i = max(0, self.roster.index_of(current_id))
        for _ in range(len(order)):
            i = (i + 1) % len(order)
            candidate = order[i]
            if self.final_round.active:
                if candidate == self.final_round.starter_id:
                    continue
                if candidate not in self.final_round.remaining_ids:
                    continue
            return candidate
        return current_id

    # ------------------------------------------------------------------
    # Final-round rules (shared by live play and replay)
    # ------------------------------------------------------------------
    def _progress_final_round(self, player: Player, position: int) -> str | None:
        """Apply the banked turn at log index ``position`` to the tracker."""
        tracker = self.final_round
        if not tracker.active and player.total >= self.target:
            # Owed seats are the players already seated when this entry was written
            tracker.start(player.id, self.roster.ids_at(position))
            return STARTED
        if tracker.active:
            was_owed = tracker.is_owed(player.id)
            if tracker.advance(player.id):
                self.locked = True
                return COMPLETED
            if was_owed:
                return ADVANCED
        return None

    def rebuild_from_log(self) -> None:
        """Recompute totals, turns, tracker and lock flag by replaying the log.

        Starts from an all-zero roster and an inactive tracker; entries naming
        an unknown player are skipped. Replay does not publish per-turn events.
        """
        self.locked = False
        self.final_round.reset()
        self.roster.reset_scores()
        for position, entry in enumerate(self.log):
            player = self.roster.find(entry.player_id)
            if player is None:
                continue
            player.bank(entry.brains)
            self._progress_final_round(player, position)
        if self.locked_manually:
            self.locked = True
        self._sync_phase()
        self._emit(GameEventType.STATE_REBUILT, entries=len(self.log), locked=self.locked)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def add_player(self, name: str | None) -> GameView:
        if self.locked:
            return self._deny("add_player", "locked")
        player = self.roster.add(name, joined_at=len(self.log))
        if player is None:
            return self._deny("add_player", "empty_name")
        if self.suggested_player_id is None:
            self.suggested_player_id = player.id
        self._emit(GameEventType.PLAYER_ADDED, player_id=player.id, name=player.name)
        return self._changed("add_player")

    def record_turn(self, player_id: str | None, brains: Any = 0, shotguns: Any = 0, note: Any = "") -> GameView:
        if self.locked:
            return self._deny("record_turn", "locked")
        player = self.roster.find(player_id)
        if player is None:
            return self._deny("record_turn", "unknown_player")

        b = to_count(brains)
        s = to_count(shotguns)
        player.bank(b)
        entry = TurnLogEntry(
            ts=self.clock(),
            player_id=player.id,
            brains=b,
            shotguns=s,
            note=str(note).strip() if note is not None else "",
        )
        self.log.append(entry)
        self._emit(GameEventType.TURN_RECORDED, player_id=player.id, brains=b, shotguns=s, total=player.total, turns=player.turns)

        outcome = self._progress_final_round(player, len(self.log) - 1)
        if outcome == STARTED:
            self._emit(
                GameEventType.FINAL_ROUND_STARTED,
                starter_id=player.id,
                remaining_ids=list(self.final_round.remaining_ids),
            )
        elif outcome in (ADVANCED, COMPLETED):
            self._emit(
                GameEventType.FINAL_ROUND_ADVANCED,
                player_id=player.id,
                remaining_ids=list(self.final_round.remaining_ids),
            )
            if outcome == COMPLETED:
                self._emit(GameEventType.GAME_LOCKED, reason="final_round_complete")

        # Evaluated against the post-trigger tracker state
        self.suggested_player_id = None if self.locked else self.next_eligible_player(player.id)
        return self._changed("record_turn")

    def undo(self) -> GameView:
        """Drop the newest turn and replay the log.

        Allowed after the final round locked the game, since the replay
        re-derives that lock; rejected after a manual lock.
        """
        if self.locked_manually:
            return self._deny("undo", "locked")
        last = self.log.remove_last()
        if last is None:
            return self._deny("undo", "empty_log")
        self.roster.cap_joins(len(self.log))
        self.rebuild_from_log()
        if self.roster.find(last.player_id) is not None:
            self.suggested_player_id = last.player_id
        self._emit(GameEventType.TURN_UNDONE, player_id=last.player_id, brains=last.brains)
        return self._changed("undo")

    def set_target(self, value: Any) -> GameView:
        if self.locked:
            return self._deny("set_target", "locked")
        old = self.target
        self.target = to_target(value)
        # A new target can move or remove the trigger point in the existing log
        self.rebuild_from_log()
        self._emit(GameEventType.TARGET_CHANGED, old=old, new=self.target)
        return self._changed("set_target")

    def new_game(self) -> GameView:
        """Zero every score and clear history; roster and target survive."""
        self.roster.reset_scores()
        self.roster.reset_joins()
        self.log.clear()
        self.final_round.reset()
        self.locked = False
        self.locked_manually = False
        ids = self.roster.ids()
        self.suggested_player_id = ids[0] if ids else None
        self._emit(GameEventType.NEW_GAME, players=len(ids), target=self.target)
        return self._changed("new_game")

    def hard_reset(self) -> GameView:
        """Discard everything, including the roster, and restore the default target."""
        self.roster.clear()
        self.log.clear()
        self.final_round.reset()
        self.target = DEFAULT_TARGET
        self.locked = False
        self.locked_manually = False
        self.suggested_player_id = None
        self._emit(GameEventType.DATA_CLEARED)
        return self._changed("hard_reset")

    def lock(self) -> GameView:
        """Manually end the game. Only new_game or hard_reset undo this.

        Also pins a lock the final round already reached, so undo can no
        longer reopen the game.
        """
        if self.locked_manually:
            return self._deny("lock", "locked")
        was_locked = self.locked
        self.locked = True
        self.locked_manually = True
        self.suggested_player_id = None
        if not was_locked:
            self._emit(GameEventType.GAME_LOCKED, reason="manual")
        return self._changed("lock")

    # ------------------------------------------------------------------
    # Persistence boundary
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return {
            'players': self.roster.to_list(),
            'log': self.log.to_list(),
            'target': self.target,
            'locked': self.locked,
            'finalRound': self.final_round.to_dict(),
        }

    def load_state(
        self,
        *,
        players: Iterable[Player],
        log: Iterable[TurnLogEntry],
        target: int,
        locked: bool,
        final_round: FinalRoundTracker | None = None,
    ) -> GameView:
        """Install already-validated saved state, then rebuild derived fields.

        Persisted totals and tracker values are not trusted; the replay
        overwrites them. A persisted lock the replay does not reproduce is kept
        as a manual lock, since it cannot be recovered from the log.
        """
        self.roster.restore(players)
        self.log = TurnLog(list(log))
        self.roster.cap_joins(len(self.log))
        self.target = to_target(target)
        self.final_round = final_round or FinalRoundTracker()
        self.locked_manually = False
        self.rebuild_from_log()
        if locked and not self.locked:
            self.locked_manually = True
            self.locked = True
            self._sync_phase()

        if self.locked:
            self.suggested_player_id = None
        else:
            last = self.log.last()
            if last is not None and self.roster.find(last.player_id) is not None:
                self.suggested_player_id = self.next_eligible_player(last.player_id)
            else:
                ids = self.roster.ids()
                self.suggested_player_id = ids[0] if ids else None
        return self.view()
