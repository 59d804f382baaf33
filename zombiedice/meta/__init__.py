"""Persistence of the single score keeper state blob."""

from .save_manager import SaveManager

__all__ = [
    'SaveManager',
]
