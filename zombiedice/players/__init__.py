from .player import Player
from .roster import Roster

__all__ = ["Player", "Roster"]
