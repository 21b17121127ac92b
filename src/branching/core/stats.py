"""
Sample statistics over repeatedly generated trees.

``sample_stats`` generates ``sample_size`` independent trees and summarises
their leaf counts:

- min / max over the counts
- median: element at index ``size // 2`` of the sorted counts (upper median
  for even sizes, never an average)
- mean: integer (floor) division of the sum by the size
- stddev: population standard deviation around the *integer* mean above

The stddev deliberately reuses the truncated mean instead of the exact one;
existing exports and comparisons depend on these exact values.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from branching.core.errors import GenerationLimitError, InvalidParameterError
from branching.core.randomness import RandomnessLike, as_randomness
from branching.core.tree.generator import check_parameters, generate_tree, is_high_probability
from branching.core.tree.measurement import count_leaves
from branching.utils.logging import log_calls

logger = logging.getLogger(__name__)

STAT_FIELDS = ("min", "median", "max", "mean", "stddev")


class SampleStats(BaseModel):
    """Summary of the leaf counts of one sample batch."""

    model_config = ConfigDict(frozen=True)

    sample_size: int
    min: int
    median: int
    max: int
    mean: int
    stddev: float


class StatChange(BaseModel):
    """Change of one statistic against a previous run."""

    value: Union[int, float]
    delta: Union[int, float]
    direction: Literal["up", "down", "same"]


def summarize_leaf_counts(counts: Sequence[int]) -> SampleStats:
    """Aggregate leaf counts into the five summary statistics."""
    size = len(counts)
    if size == 0:
        raise InvalidParameterError("sample_size", 0, "at least one sample is required")

    ordered = sorted(counts)
    mean = sum(ordered) // size
    deviations = (float(x - mean) for x in ordered)
    variance = sum(d * d for d in deviations) / size

    return SampleStats(
        sample_size=size,
        min=ordered[0],
        median=ordered[size // 2],
        max=ordered[-1],
        mean=mean,
        stddev=math.sqrt(variance),
    )


@log_calls(expected=(GenerationLimitError,))
def sample_stats(
    n: int,
    m: int,
    randomness: RandomnessLike,
    sample_size: int,
    *,
    max_depth: Optional[int] = None,
    truncate: bool = False,
) -> SampleStats:
    """Generate ``sample_size`` trees and summarise their leaf counts.

    Trees are measured and dropped one at a time; only the counts are kept.
    """
    check_parameters(n, m)
    if sample_size <= 0:
        raise InvalidParameterError("sample_size", sample_size, "must be a positive integer")
    if is_high_probability(n, m) and max_depth is None:
        logger.warning("Branch probability %s/%s is high; sampling may not terminate", n, m)

    source = as_randomness(randomness)
    counts = [
        count_leaves(generate_tree(n, m, source, max_depth=max_depth, truncate=truncate))
        for _ in range(sample_size)
    ]
    return summarize_leaf_counts(counts)


def compare_stats(previous: Optional[SampleStats], current: SampleStats) -> Dict[str, StatChange]:
    """Per-statistic change from ``previous`` to ``current``.

    With no previous run every statistic is compared against zero.
    """
    changes: Dict[str, StatChange] = {}
    for name in STAT_FIELDS:
        new = getattr(current, name)
        old = getattr(previous, name) if previous is not None else 0
        if new > old:
            direction = "up"
        elif new < old:
            direction = "down"
        else:
            direction = "same"
        changes[name] = StatChange(value=new, delta=abs(new - old), direction=direction)
    return changes


__all__ = [
    "STAT_FIELDS",
    "SampleStats",
    "StatChange",
    "summarize_leaf_counts",
    "sample_stats",
    "compare_stats",
]
