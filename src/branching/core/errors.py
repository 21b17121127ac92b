from __future__ import annotations

"""Error types raised by the core layer."""


class BranchingError(Exception):
    """Base class for all errors raised by the branching core."""


class InvalidParameterError(BranchingError, ValueError):
    """Rejected process parameter (``m <= 0``, ``n < 0``, empty sample, ...)."""

    def __init__(self, name: str, value: object, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {name}={value!r}: {reason}")


class GenerationLimitError(BranchingError):
    """A generated tree tried to grow past the configured depth ceiling."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(
            f"Tree generation exceeded the depth ceiling of {max_depth} generations; "
            "lower n/m or raise max_depth"
        )


class EncodingError(BranchingError, ValueError):
    """A structural encoding string could not be decoded into a tree."""


__all__ = [
    "BranchingError",
    "InvalidParameterError",
    "GenerationLimitError",
    "EncodingError",
]
