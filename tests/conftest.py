"""Shared fixtures for the card RPG tests."""

from __future__ import annotations

import pytest

from card_rpg.sim.content.registry import ContentRegistry


class SequenceRNG:
    """Deterministic stand-in for GameRNG that replays fixed draws.

    Float and int draws come from separate queues; once a queue runs dry the
    last value is repeated.
    """

    def __init__(self, floats: list[float] | None = None, ints: list[int] | None = None) -> None:
        self._floats = list(floats or [0.99])
        self._ints = list(ints or [1])
        self.float_calls = 0
        self.int_calls = 0

    def random_float(self) -> float:
        self.float_calls += 1
        if len(self._floats) > 1:
            return self._floats.pop(0)
        return self._floats[0]

    def random_int(self, low: int, high: int) -> int:
        self.int_calls += 1
        if len(self._ints) > 1:
            return self._ints.pop(0)
        return self._ints[0]


@pytest.fixture(scope="module")
def registry() -> ContentRegistry:
    """Module-scoped registry with the packaged content loaded once."""
    reg = ContentRegistry()
    reg.load_defaults()
    return reg


@pytest.fixture
def make_rng():
    """Factory for :class:`SequenceRNG` instances."""
    return SequenceRNG
