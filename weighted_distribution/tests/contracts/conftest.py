"""
Shared pytest fixtures for weighted distribution contract tests.

Random sources are either seeded numpy generators or scripted doubles, so
every test is reproducible. No real .env files or environment variables leak
in from the host.
"""

import os
from unittest.mock import patch

import numpy as np
import pytest

from weighted_distribution.cumulative_index import CumulativeIndex
from weighted_distribution.distribution import WeightedDistribution
from weighted_distribution.tests.contracts.test_doubles import ABCD_WEIGHTS, FLOOR_QUERY_PAIRS


TEST_SEED = 20240611


@pytest.fixture
def seeded_rng():
    """Create a seeded numpy generator."""
    return np.random.default_rng(TEST_SEED)


@pytest.fixture
def abcd_distribution(seeded_rng):
    """Create the a/b/c/d distribution (weights 1.0, 0.5, 3.5, 4.8)."""
    distribution = WeightedDistribution(rng=seeded_rng)
    for value, weight in ABCD_WEIGHTS:
        distribution.add(value, weight)
    return distribution


@pytest.fixture
def floor_query_index():
    """Create an index with thresholds 0.5, 1.0, 3.5, 4.8."""
    return CumulativeIndex(FLOOR_QUERY_PAIRS)


@pytest.fixture
def clean_env(tmp_path):
    """Isolate configuration tests from the host environment and any .env file."""
    missing_env_file = str(tmp_path / "missing.env")
    with patch.dict(os.environ, {"WEIGHTED_DIST_ENV_FILE": missing_env_file}, clear=True):
        yield tmp_path
