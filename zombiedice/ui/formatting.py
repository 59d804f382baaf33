"""Display strings derived from a GameView."""
from __future__ import annotations
from datetime import datetime

from zombiedice.core.view import GameView, LogEntryView


def format_timestamp(ts_ms: int) -> str:
    """Short local time, e.g. ``Oct 19, 14:05``."""
    return datetime.fromtimestamp(ts_ms / 1000).strftime("%b %d, %H:%M")


def leader_badge(view: GameView) -> str:
    if not view.players or view.leader is None:
        return "No players yet"
    if view.leader.is_tie:
        return f"Tie: {', '.join(view.leader.tie_names)} ({view.leader.best_total})"
    return f"Leader: {view.leader.best_name} ({view.leader.best_total})"


def log_headline(entry: LogEntryView) -> str:
    return f"{entry.player_name} +{entry.brains} brains"


def log_detail(entry: LogEntryView) -> str:
    extras = []
    if entry.shotguns > 0:
        extras.append(f"shotguns: {entry.shotguns}")
    if entry.note:
        extras.append(entry.note)
    parts = [format_timestamp(entry.ts)] + extras
    return " · ".join(parts)
