"""
Randomness sources for the branching process.

Both strategies expose the same capability, a uniform integer in ``[0, m)``:

- FastRandomness: Mersenne Twister (``random.Random``), optionally seeded
- SecureRandomness: ``secrets.SystemRandom``, fresh OS entropy on every draw

The rest of the system only ever asks ``roll(n, m)``, i.e. "did a draw over
``[0, m)`` land below ``n``", so the two are interchangeable.
"""

from __future__ import annotations

import random
import secrets
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union


class RngStrategy(str, Enum):
    """Selectable randomness strategy."""

    FAST = "fast"
    SECURE = "secure"


class RandomnessSource(ABC):
    """Supplies independent uniform draws."""

    strategy: RngStrategy

    @abstractmethod
    def randbelow(self, m: int) -> int:
        """Return a uniform integer in ``[0, m)``."""
        raise NotImplementedError

    def roll(self, n: int, m: int) -> bool:
        """Draw over ``[0, m)`` and report whether the sample is below ``n``."""
        return self.randbelow(m) < n


class FastRandomness(RandomnessSource):
    strategy = RngStrategy.FAST

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def randbelow(self, m: int) -> int:
        return self._rng.randrange(m)


class SecureRandomness(RandomnessSource):
    strategy = RngStrategy.SECURE

    def __init__(self) -> None:
        self._rng = secrets.SystemRandom()

    def randbelow(self, m: int) -> int:
        return self._rng.randrange(m)


RandomnessLike = Union[RandomnessSource, RngStrategy, str, bool]


def make_randomness(strategy: Union[RngStrategy, str, bool], seed: Optional[int] = None) -> RandomnessSource:
    """Build a randomness source.

    ``strategy`` may be an RngStrategy, its string value, or a boolean meaning
    "use fast randomness". ``seed`` only applies to the fast strategy.
    """
    if isinstance(strategy, bool):
        strategy = RngStrategy.FAST if strategy else RngStrategy.SECURE
    strategy = RngStrategy(strategy)
    if strategy is RngStrategy.FAST:
        return FastRandomness(seed)
    return SecureRandomness()


def as_randomness(source: RandomnessLike) -> RandomnessSource:
    """Pass a RandomnessSource through, build one from anything else."""
    if isinstance(source, RandomnessSource):
        return source
    return make_randomness(source)


__all__ = [
    "RngStrategy",
    "RandomnessSource",
    "FastRandomness",
    "SecureRandomness",
    "RandomnessLike",
    "make_randomness",
    "as_randomness",
]
