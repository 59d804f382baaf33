from .turn_log import TurnLog, TurnLogEntry

__all__ = ["TurnLog", "TurnLogEntry"]
