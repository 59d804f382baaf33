"""Autosave system for score keeper state persistence."""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, TYPE_CHECKING

from zombiedice.core.coercion import to_number, to_target
from zombiedice.core.constants import DEFAULT_TARGET, SAVE_DIR_NAME, SAVE_FILE_NAME, STORAGE_KEY
from zombiedice.core.final_round import FinalRoundTracker
from zombiedice.core.game_event import GameEvent, GameEventType
from zombiedice.players.player import Player
from zombiedice.turns.turn_log import TurnLogEntry

if TYPE_CHECKING:
    from zombiedice.game import ScoreKeeper


class SaveManager:
    """Reads and writes the single persisted state blob.

    The save file is a JSON object keyed by storage key; the blob lives under
    ``storage_key`` and any other keys in the file are left untouched.
    """

    def __init__(self, save_path: str | None = None, storage_key: str = STORAGE_KEY):
        """Initialize the save manager.

        Args:
            save_path: Path to save file. If None, uses default in user's home directory.
            storage_key: Key the blob is stored under inside the save file.
        """
        if save_path is None:
            home = Path.home()
            save_dir = home / SAVE_DIR_NAME
            save_dir.mkdir(exist_ok=True)
            self.save_path = save_dir / SAVE_FILE_NAME
        else:
            self.save_path = Path(save_path)

        self.storage_key = storage_key
        self.keeper: ScoreKeeper | None = None

    def attach(self, keeper: ScoreKeeper) -> None:
        """Attach to a score keeper and save after every accepted command.

        Args:
            keeper: ScoreKeeper instance to monitor for autosave
        """
        self.keeper = keeper
        keeper.event_listener.subscribe(self.on_event, types={GameEventType.STATE_CHANGED})

    def detach(self) -> None:
        if self.keeper:
            self.keeper.event_listener.unsubscribe(self.on_event)
        self.keeper = None

    def on_event(self, event: GameEvent) -> None:
        """Write-after-mutate: persist once per accepted command."""
        if not self.keeper:
            return
        if event.type != GameEventType.STATE_CHANGED:
            return
        if event.get("command") == "hard_reset":
            self.delete_save()
        else:
            self.save()

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------
    def _read_file(self) -> dict[str, Any]:
        if not self.save_path.exists():
            return {}
        with open(self.save_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def _write_file(self, data: dict[str, Any]) -> None:
        self.save_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.save_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

    def save(self) -> bool:
        """Save current state to disk.

        Returns:
            True if save successful, False otherwise
        """
        if not self.keeper:
            return False
        try:
            try:
                data = self._read_file()
            except (json.JSONDecodeError, UnicodeDecodeError):
                # Unreadable file is replaced wholesale
                data = {}
            data[self.storage_key] = self.keeper.to_dict()
            self._write_file(data)
            return True
        except OSError as e:
            print(f"Warning: Could not save game to {self.save_path}: {e}")
            return False

    def load(self) -> dict[str, Any] | None:
        """Load the raw blob from disk.

        Returns:
            Saved blob dict, or None if no save exists or it cannot be read
        """
        try:
            blob = self._read_file().get(self.storage_key)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            print(f"Warning: Could not load save from {self.save_path}: {e}")
            return None
        return blob if isinstance(blob, dict) else None

    def has_save(self) -> bool:
        """Check if a readable blob exists under the storage key."""
        return self.load() is not None

    def delete_save(self) -> bool:
        """Remove the blob from the save file (the file goes once it is empty).

        Returns:
            True if deletion successful, False otherwise
        """
        try:
            try:
                data = self._read_file()
            except (json.JSONDecodeError, UnicodeDecodeError):
                data = {}
            data.pop(self.storage_key, None)
            if data:
                self._write_file(data)
            elif self.save_path.exists():
                self.save_path.unlink()
            return True
        except OSError as e:
            print(f"Warning: Could not delete save at {self.save_path}: {e}")
            return False

    # ------------------------------------------------------------------
    # Restoration
    # ------------------------------------------------------------------
    def restore_game_state(self, keeper: ScoreKeeper, save_data: dict[str, Any] | None) -> bool:
        """Validate ``save_data`` field by field and install it into ``keeper``.

        Each field falls back to its default independently when malformed, so
        a partially damaged blob still restores whatever is usable. Derived
        values are rebuilt from the log by the keeper.

        Returns:
            True if a blob was applied, False if there was nothing to restore
        """
        if not isinstance(save_data, dict):
            return False
        keeper.load_state(
            players=parse_players(save_data.get('players')),
            log=parse_log(save_data.get('log')),
            target=parse_target(save_data.get('target')),
            locked=save_data.get('locked') is True,
            final_round=FinalRoundTracker.from_dict(save_data.get('finalRound')),
        )
        return True

    def load_into(self, keeper: ScoreKeeper) -> bool:
        """Convenience: load from disk and restore into ``keeper``."""
        return self.restore_game_state(keeper, self.load())


def parse_players(raw: Any) -> list[Player]:
    if not isinstance(raw, list):
        return []
    players = []
    for item in raw:
        player = Player.from_dict(item)
        if player is not None:
            players.append(player)
    return players


def parse_log(raw: Any) -> list[TurnLogEntry]:
    if not isinstance(raw, list):
        return []
    entries = []
    for item in raw:
        entry = TurnLogEntry.from_dict(item)
        if entry is not None:
            entries.append(entry)
    return entries


def parse_target(raw: Any) -> int:
    # Booleans and numeric strings are not valid persisted targets
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return DEFAULT_TARGET
    value = to_number(raw)
    if value is None or value < 1:
        return DEFAULT_TARGET
    return to_target(value)
