"""
Weighted random selection with exclusion-based rebuilding.
"""

from weighted_distribution.config import DistributionConfig, configure_logging
from weighted_distribution.cumulative_index import CumulativeIndex, closest_key_below
from weighted_distribution.distribution import DistributionSnapshot, WeightedDistribution
from weighted_distribution.errors import DistributionError, EmptyDistribution, InvalidWeight

__all__ = [
    "CumulativeIndex",
    "DistributionConfig",
    "DistributionError",
    "DistributionSnapshot",
    "EmptyDistribution",
    "InvalidWeight",
    "WeightedDistribution",
    "closest_key_below",
    "configure_logging",
]
