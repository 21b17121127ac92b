"""
Run settings for the branching CLI.

Settings come from a YAML file (``branching.yaml`` in the working directory by
default) and may be overridden per command:

    n: 50
    m: 100
    sample_size: 1000
    rng: fast
    colour: true
    max_depth: null
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from branching.core.randomness import RngStrategy
from branching.core.tree.generator import FORCED_GENERATIONS, HIGH_PROBABILITY_THRESHOLD

LARGE_SAMPLE_THRESHOLD = 100_000
DEFAULT_CONFIG_FILENAME = "branching.yaml"


class Settings(BaseModel):
    """Process parameters and presentation options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    n: int = Field(50, description="Numerator of the branch probability")
    m: int = Field(100, description="Denominator of the branch probability")
    sample_size: int = Field(1000, description="Trees per statistics run or batch export")
    rng: RngStrategy = RngStrategy.FAST
    colour: bool = True
    max_depth: Optional[int] = Field(None, description="Optional generation ceiling")

    @field_validator("m", "sample_size")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @field_validator("n")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @model_validator(mode="after")
    def _check_depth(self) -> "Settings":
        if self.max_depth is not None and self.max_depth < FORCED_GENERATIONS:
            raise ValueError(f"max_depth must be at least {FORCED_GENERATIONS}")
        return self

    @property
    def probability(self) -> float:
        return self.n / self.m

    def warnings(self) -> List[str]:
        """Advisories for settings that are legal but risky."""
        messages: List[str] = []
        if self.probability > HIGH_PROBABILITY_THRESHOLD:
            messages.append("Warning: high P may generate an infinite tree and crash.")
        if self.sample_size > LARGE_SAMPLE_THRESHOLD:
            messages.append("Warning: sample size is very large")
        return messages


__all__ = ["Settings", "LARGE_SAMPLE_THRESHOLD", "DEFAULT_CONFIG_FILENAME"]
