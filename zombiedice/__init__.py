"""Zombie Dice score keeper public API.

Exports the canonical ScoreKeeper state machine.
"""
from __future__ import annotations

from .game import ScoreKeeper

__all__ = ["ScoreKeeper"]
