from enum import Enum, auto

class GamePhase(Enum):
    SETUP = auto()        # No players yet
    PLAYING = auto()      # Normal turns, nobody has reached the target
    FINAL_ROUND = auto()  # Target reached, others owed one last turn
    LOCKED = auto()       # Terminal until new game / reset
