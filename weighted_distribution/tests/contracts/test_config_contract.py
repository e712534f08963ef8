"""
Contract tests for DistributionConfig.

Tests cover:
- Defaults when nothing is configured
- Environment variables and .env file loading (environment wins)
- Validation errors for bad seeds and log levels
- Logging setup and generator construction
"""

import logging
import os
from unittest.mock import patch

import pytest

from weighted_distribution import WeightedDistribution
from weighted_distribution.config import (
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    DistributionConfig,
    configure_logging,
)


class TestLoadConfig:
    """Tests for DistributionConfig.load_config()."""

    def test_defaults(self, clean_env):
        config = DistributionConfig.load_config()
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_reads_environment(self, clean_env):
        os.environ["WEIGHTED_DIST_SEED"] = "123"
        os.environ["WEIGHTED_DIST_LOG_LEVEL"] = "debug"

        config = DistributionConfig.load_config()
        assert config.seed == 123
        assert config.log_level == "DEBUG"

    def test_blank_seed_means_unseeded(self, clean_env):
        os.environ["WEIGHTED_DIST_SEED"] = "  "
        assert DistributionConfig.load_config().seed is None

    def test_reads_env_file(self, clean_env):
        env_file = clean_env / "distribution.env"
        env_file.write_text("WEIGHTED_DIST_SEED=42\nWEIGHTED_DIST_LOG_LEVEL=WARNING\n")
        os.environ["WEIGHTED_DIST_ENV_FILE"] = str(env_file)

        config = DistributionConfig.load_config()
        assert config.seed == 42
        assert config.log_level == "WARNING"

    def test_environment_overrides_env_file(self, clean_env):
        env_file = clean_env / "distribution.env"
        env_file.write_text("WEIGHTED_DIST_SEED=42\n")
        os.environ["WEIGHTED_DIST_ENV_FILE"] = str(env_file)
        os.environ["WEIGHTED_DIST_SEED"] = "7"

        assert DistributionConfig.load_config().seed == 7

    @pytest.mark.parametrize("seed", ["abc", "1.5", "-3"])
    def test_invalid_seed_raises(self, clean_env, seed):
        os.environ["WEIGHTED_DIST_SEED"] = seed
        with pytest.raises(ValueError, match="WEIGHTED_DIST_SEED"):
            DistributionConfig.load_config()

    def test_invalid_log_level_raises(self, clean_env):
        os.environ["WEIGHTED_DIST_LOG_LEVEL"] = "LOUD"
        with pytest.raises(ValueError, match="log level"):
            DistributionConfig.load_config()


class TestConfigUse:
    """Tests for configure_logging() and make_rng()."""

    def test_configure_logging_uses_level_and_format(self):
        config = DistributionConfig(log_level="DEBUG")
        with patch("weighted_distribution.config.logging.basicConfig") as basic_config:
            configure_logging(config)

        basic_config.assert_called_once_with(
            level=logging.DEBUG,
            format=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT
        )

    def test_validate_rejects_negative_seed(self):
        with pytest.raises(ValueError):
            DistributionConfig(seed=-1).validate()

    def test_default_generator_uses_configured_seed(self, clean_env):
        os.environ["WEIGHTED_DIST_SEED"] = "5"
        first = WeightedDistribution()
        second = WeightedDistribution()
        for distribution in (first, second):
            distribution.add("x", 1.0)
            distribution.add("y", 1.0)

        assert first.pick_many(50) == second.pick_many(50)

    def test_default_generator_reads_seed_from_env_file(self, clean_env):
        env_file = clean_env / "distribution.env"
        env_file.write_text("WEIGHTED_DIST_SEED=11\n")
        os.environ["WEIGHTED_DIST_ENV_FILE"] = str(env_file)

        first = WeightedDistribution()
        second = WeightedDistribution(rng=DistributionConfig(seed=11).make_rng())
        for distribution in (first, second):
            distribution.add("x", 1.0)
            distribution.add("y", 2.0)

        assert first.pick_many(50) == second.pick_many(50)

    def test_default_generator_rejects_invalid_seed(self, clean_env):
        os.environ["WEIGHTED_DIST_SEED"] = "not-a-seed"
        with pytest.raises(ValueError, match="WEIGHTED_DIST_SEED"):
            WeightedDistribution()

    def test_seeded_generators_repeat(self):
        config = DistributionConfig(seed=99)
        first = WeightedDistribution(rng=config.make_rng())
        second = WeightedDistribution(rng=config.make_rng())
        for distribution in (first, second):
            distribution.add("x", 1.0)
            distribution.add("y", 3.0)

        assert [first.random_pick() for _ in range(30)] == [second.random_pick() for _ in range(30)]
