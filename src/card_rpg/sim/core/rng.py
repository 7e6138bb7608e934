"""Seeded random number generator for deterministic combat resolution.

Wraps Python's random.Random so every chance check (stun/freeze triggers,
stat-boost card draws) goes through one injectable object.  Tests replace
it with any object exposing the same methods.
"""

from __future__ import annotations

import random


class GameRNG:
    """Deterministic RNG when seeded, OS-seeded otherwise.

    Parameters
    ----------
    seed:
        Integer seed for the underlying Mersenne Twister, or ``None``.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    # -- public properties ---------------------------------------------------

    @property
    def seed(self) -> int | None:
        """Return the seed this RNG was initialised with."""
        return self._seed

    # -- core random methods -------------------------------------------------

    def random_int(self, low: int, high: int) -> int:
        """Return a random integer *N* such that ``low <= N <= high``."""
        return self._rng.randint(low, high)

    def random_float(self) -> float:
        """Return a random float in the half-open interval ``[0.0, 1.0)``."""
        return self._rng.random()

    # -- dunder helpers ------------------------------------------------------

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed})"
