"""Seedable randomness source used to mint player ids.

Usage:
    rng = RandomSource(seed=123)  # deterministic
    pid = rng.token_id(now_ms=1700000000000)

Tests pass a seed (and a fixed clock) so generated ids are reproducible.
"""

from __future__ import annotations
import random

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value <= 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


class RandomSource:
    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed) if seed is not None else random.Random()

    def token(self, length: int = 8) -> str:
        return "".join(self._rng.choice(_BASE36) for _ in range(length))

    def token_id(self, now_ms: int) -> str:
        """Random base-36 token followed by the base-36 millisecond clock."""
        return self.token() + to_base36(now_ms)
