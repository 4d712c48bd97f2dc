"""Shared fixtures for the test suite."""

import pytest

from sphereglow.sampling import RandomSource


class ScriptedRandom(RandomSource):
    """Random source that replays a fixed list of uniform numbers."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def uniform(self) -> float:
        if self.calls >= len(self.values):
            raise AssertionError(f"Random sequence exhausted after {self.calls} draws")
        value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom
