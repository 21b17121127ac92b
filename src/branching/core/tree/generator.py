"""
Tree generator: the stochastic binary branching process.

Rules for one tree, parameters ``n`` and ``m`` (branch probability ``n/m``):

- Root: always a Branch of two Branches; the four grandchildren are grown
  with the non-root rule starting at generation 2.
- Non-root node: draw over ``[0, m)``; below ``m - n`` the node is a Leaf.
  Otherwise it is a Branch whose left child is always grown again and whose
  right child is grown only if a second draw lands below ``n`` (Leaf otherwise).

The left spine re-attempts termination at every level while the right child
follows a plain Galton-Watson rule; swapping the two changes the distribution.

Growth uses an explicit work-stack, so deep trees never exhaust the interpreter
call stack. Draws happen in the same order as the recursive definition: node
roll, whole left subtree, right roll, right subtree.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from branching.core.errors import GenerationLimitError, InvalidParameterError
from branching.core.randomness import RandomnessLike, RandomnessSource, as_randomness
from branching.core.tree.models import LEAF, Branch, Tree, forced_root

logger = logging.getLogger(__name__)

HIGH_PROBABILITY_THRESHOLD = 0.6
FORCED_GENERATIONS = 2

_NODE = 0
_RIGHT = 1
_JOIN = 2


def check_parameters(n: int, m: int) -> None:
    """Reject parameters that make the branch probability undefined."""
    if m <= 0:
        raise InvalidParameterError("m", m, "must be a positive integer")
    if n < 0:
        raise InvalidParameterError("n", n, "must not be negative")


def branch_probability(n: int, m: int) -> float:
    check_parameters(n, m)
    return n / m


def is_high_probability(n: int, m: int) -> bool:
    """True when ``n/m`` is high enough that generation may never terminate."""
    return branch_probability(n, m) > HIGH_PROBABILITY_THRESHOLD


def generate_tree(
    n: int,
    m: int,
    randomness: RandomnessLike = True,
    *,
    is_root: bool = True,
    max_depth: Optional[int] = None,
    truncate: bool = False,
) -> Tree:
    """
    Generate one tree.

    Args:
        n: Numerator of the branch probability
        m: Denominator of the branch probability (must be positive)
        randomness: RandomnessSource, RngStrategy/str, or ``True`` for fast randomness
        is_root: Apply the forced two-level root structure (non-root calls use only
            the stochastic rule, starting at generation 0)
        max_depth: Optional ceiling on the tree's generation count. Without it,
            ``n/m`` near or above 1 can grow forever.
        truncate: At the ceiling, turn would-be Branches into Leaves instead of
            raising GenerationLimitError

    Returns:
        The generated tree

    Raises:
        InvalidParameterError: ``m <= 0``, ``n < 0`` or ``max_depth < 2``
        GenerationLimitError: the ceiling was hit and ``truncate`` is False
    """
    check_parameters(n, m)
    if max_depth is not None and max_depth < FORCED_GENERATIONS:
        raise InvalidParameterError("max_depth", max_depth, f"must be at least {FORCED_GENERATIONS}")
    if is_high_probability(n, m) and max_depth is None:
        logger.debug("Branch probability %s/%s > %s without a depth ceiling", n, m, HIGH_PROBABILITY_THRESHOLD)

    source = as_randomness(randomness)
    if not is_root:
        return _grow(n, m, source, 0, max_depth, truncate)

    grandchildren = [_grow(n, m, source, FORCED_GENERATIONS, max_depth, truncate) for _ in range(4)]
    return forced_root(*grandchildren)


def _grow(
    n: int,
    m: int,
    source: RandomnessSource,
    generation: int,
    max_depth: Optional[int],
    truncate: bool,
) -> Tree:
    """Grow one subtree with the non-root rule."""
    results: List[Tree] = []
    work: List[Tuple[int, int]] = [(_NODE, generation)]

    while work:
        op, gen = work.pop()

        if op == _JOIN:
            right = results.pop()
            left = results.pop()
            results.append(Branch(left, right))
        elif op == _RIGHT:
            if source.roll(n, m):
                work.append((_NODE, gen))
            else:
                results.append(LEAF)
        elif truncate and max_depth is not None and gen >= max_depth:
            # Truncated nodes at the ceiling consume no draw
            results.append(LEAF)
        elif source.roll(m - n, m):
            results.append(LEAF)
        elif max_depth is not None and gen >= max_depth:
            raise GenerationLimitError(max_depth)
        else:
            # Stack order: left node runs first, then the right roll, then the join
            work.append((_JOIN, gen))
            work.append((_RIGHT, gen + 1))
            work.append((_NODE, gen + 1))

    return results[0]


__all__ = [
    "HIGH_PROBABILITY_THRESHOLD",
    "FORCED_GENERATIONS",
    "check_parameters",
    "branch_probability",
    "is_high_probability",
    "generate_tree",
]
