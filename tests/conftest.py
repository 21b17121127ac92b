"""
Shared fixtures for branching tests.
"""

from collections import deque
from typing import Iterable, List

import pytest

from branching.core.randomness import RandomnessSource, RngStrategy
from branching.core.tree.models import LEAF, Branch, forced_root


class ScriptedRandomness(RandomnessSource):
    """Returns pre-scripted draws and records every ``m`` it was asked for."""

    strategy = RngStrategy.FAST

    def __init__(self, draws: Iterable[int]):
        self._draws = deque(draws)
        self.requested: List[int] = []

    def randbelow(self, m: int) -> int:
        if not self._draws:
            raise AssertionError("Scripted randomness exhausted")
        value = self._draws.popleft()
        assert 0 <= value < m, f"scripted draw {value} outside [0, {m})"
        self.requested.append(m)
        return value

    @property
    def remaining(self) -> int:
        return len(self._draws)


@pytest.fixture
def scripted():
    """Factory for scripted randomness sources."""
    return ScriptedRandomness


@pytest.fixture
def in_tmp_dir(tmp_path, monkeypatch):
    """Run the test from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def minimal_tree() -> Branch:
    """The forced root shape alone: four Leaves at generation 2."""
    return forced_root(LEAF, LEAF, LEAF, LEAF)


@pytest.fixture
def left_heavy_tree() -> Branch:
    """Forced root whose first grandchild grows two more generations on its left.

    Gen 2: 1000, Gen 3: 10, Gen 4: 00
    """
    grown = Branch(Branch(LEAF, LEAF), LEAF)
    return forced_root(grown, LEAF, LEAF, LEAF)
