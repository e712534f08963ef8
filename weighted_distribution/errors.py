"""
Error types for weighted distributions.

Both errors are raised synchronously and are never retried: InvalidWeight
means the caller passed a bad weight to add(), EmptyDistribution means a
sampling call was made before anything was added.
"""

from typing import Any, Optional


class DistributionError(Exception):
    """Base class for weighted distribution errors."""


class InvalidWeight(DistributionError, ValueError):
    """
    Raised when a value is added with a weight that is not a positive, finite
    number, or that would push the total weight past the float range.
    """

    def __init__(self, value: Any, weight: Any, reason: Optional[str] = None):
        self.value = value
        self.weight = weight
        if reason is None:
            reason = "must be a positive finite number"
        super().__init__(f"Weight {weight!r} for {value!r} {reason}")


class EmptyDistribution(DistributionError, LookupError):
    """Raised when sampling from a distribution that has no entries."""

    def __init__(self, message: str = "Cannot sample from an empty distribution"):
        super().__init__(message)
