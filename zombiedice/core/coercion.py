"""Defensive numeric coercion for command input and persisted values.

Scoring always permits a zero contribution (a busted turn), so bad input is
coerced rather than rejected:

    to_count("4")    -> 4
    to_count(2.9)    -> 2
    to_count(-3)     -> 0
    to_count("abc")  -> 0
"""
from __future__ import annotations
import math
from typing import Any

from .constants import DEFAULT_TARGET, MIN_TARGET


def to_number(value: Any) -> float | None:
    """Parse ``value`` as a finite number, or return None."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def to_count(value: Any) -> int:
    """Coerce to a non-negative integer (non-numeric -> 0, fractional truncated)."""
    number = to_number(value)
    if number is None or number <= 0:
        return 0
    return int(number)


def to_target(value: Any, default: int = DEFAULT_TARGET) -> int:
    """Coerce a target score; non-numeric falls back to ``default``, minimum is 1."""
    number = to_number(value)
    if number is None:
        return max(MIN_TARGET, default)
    return max(MIN_TARGET, int(number))
