"""Read-only view of the score keeper, returned by every command.

The presentation layer renders exclusively from a GameView; it never reaches
into the mutable roster, log or tracker.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from zombiedice.core.constants import UNKNOWN_PLAYER_NAME
from zombiedice.core.game_state_enum import GamePhase

if TYPE_CHECKING:
    from zombiedice.game import ScoreKeeper


@dataclass(frozen=True)
class PlayerView:
    id: str
    name: str
    total: int
    turns: int
    is_leader: bool = False


@dataclass(frozen=True)
class LeaderInfo:
    best_id: str
    best_name: str
    best_total: int
    tie_names: tuple[str, ...]

    @property
    def is_tie(self) -> bool:
        return len(self.tie_names) > 1


@dataclass(frozen=True)
class LogEntryView:
    ts: int
    player_id: str
    player_name: str
    brains: int
    shotguns: int
    note: str


@dataclass(frozen=True)
class FinalRoundStatus:
    active: bool
    starter_id: str | None
    starter_name: str | None
    remaining_ids: tuple[str, ...]
    remaining_names: tuple[str, ...]
    locked: bool


@dataclass(frozen=True)
class StatusLine:
    badge: str
    kind: str  # "", "good", "warn" or "danger"
    text: str


@dataclass(frozen=True)
class GameView:
    target: int
    locked: bool
    phase: GamePhase
    players: tuple[PlayerView, ...]
    standings: tuple[PlayerView, ...]
    leader: LeaderInfo | None
    log: tuple[LogEntryView, ...]
    final_round: FinalRoundStatus
    status: StatusLine
    next_player_id: str | None
    can_play: bool
    can_add_player: bool
    can_undo: bool
    can_lock: bool

    def player(self, player_id: str | None) -> PlayerView | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None


def status_line(keeper: ScoreKeeper, final_round: FinalRoundStatus) -> StatusLine:
    if len(keeper.roster) == 0:
        return StatusLine("Add players", "", "Add at least 1 player to start.")
    if keeper.locked:
        return StatusLine("Game locked", "danger", "This game is locked. Start a New Game to play again.")
    if final_round.active:
        if not final_round.remaining_names:
            return StatusLine("Final turn complete", "good", "Final round is complete. The game is now locked.")
        starter = final_round.starter_name or "Someone"
        return StatusLine(
            "Final round!",
            "warn",
            f"{starter} hit {keeper.target}+ brains. "
            f"Remaining last turns: {', '.join(final_round.remaining_names)}.",
        )
    return StatusLine(
        "Game active",
        "good",
        f"Playing to {keeper.target} brains. When someone reaches it, everyone else gets one last turn.",
    )


def build_view(keeper: ScoreKeeper) -> GameView:
    roster = keeper.roster
    standing = keeper.leader()
    sole_leader_id = standing.leader.id if standing and standing.leader else None

    players = tuple(
        PlayerView(p.id, p.name, p.total, p.turns, is_leader=p.id == sole_leader_id)
        for p in roster
    )
    # sorted() is stable, so equal totals keep seating order
    standings = tuple(sorted(players, key=lambda pv: pv.total, reverse=True))

    leader = None
    if standing:
        leader = LeaderInfo(
            best_id=standing.best.id,
            best_name=standing.best.name,
            best_total=standing.best.total,
            tie_names=tuple(p.name for p in standing.ties),
        )

    log = tuple(
        LogEntryView(
            ts=e.ts,
            player_id=e.player_id,
            player_name=roster.name_of(e.player_id, UNKNOWN_PLAYER_NAME),
            brains=e.brains,
            shotguns=e.shotguns,
            note=e.note,
        )
        for e in keeper.log.newest_first()
    )

    tracker = keeper.final_round
    remaining_known = [pid for pid in tracker.remaining_ids if roster.find(pid) is not None]
    final_round = FinalRoundStatus(
        active=tracker.active,
        starter_id=tracker.starter_id,
        starter_name=roster.name_of(tracker.starter_id),
        remaining_ids=tuple(tracker.remaining_ids),
        remaining_names=tuple(roster.name_of(pid) for pid in remaining_known),
        locked=keeper.locked,
    )

    has_players = len(roster) > 0
    return GameView(
        target=keeper.target,
        locked=keeper.locked,
        phase=keeper.state_manager.get_state(),
        players=players,
        standings=standings,
        leader=leader,
        log=log,
        final_round=final_round,
        status=status_line(keeper, final_round),
        next_player_id=keeper.suggested_player_id,
        can_play=has_players and not keeper.locked,
        can_add_player=not keeper.locked,
        can_undo=not keeper.locked_manually and len(keeper.log) > 0,
        can_lock=not keeper.locked,
    )
