"""
Configuration management for weighted distributions.

Reads configuration from a .env file and environment variables with sensible
defaults, and sets up logging and the default random generator from it.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
from dotenv import load_dotenv


# Default .env file location
DEFAULT_ENV_FILE = Path(".env")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def _load_env_file():
    """Load environment variables from .env file if it exists."""
    env_file = os.getenv("WEIGHTED_DIST_ENV_FILE", str(DEFAULT_ENV_FILE))
    env_path = Path(env_file)

    if env_path.exists():
        load_dotenv(env_path, override=False)  # Don't override existing env vars


def _parse_seed(seed_str: Optional[str]) -> Optional[int]:
    """
    Parse the generator seed.

    Args:
        seed_str: Seed as a decimal string, or None/empty for no seed

    Returns:
        Seed as a non-negative int, or None to seed from OS entropy

    Raises:
        ValueError: If the seed is not a non-negative integer
    """
    if seed_str is None or seed_str.strip() == "":
        return None

    try:
        seed = int(seed_str.strip())
    except ValueError:
        raise ValueError(f"Invalid WEIGHTED_DIST_SEED: {seed_str} (must be an integer)")
    if seed < 0:
        raise ValueError(f"Invalid WEIGHTED_DIST_SEED: {seed_str} (must be non-negative)")
    return seed


@dataclass
class DistributionConfig:
    """Configuration loaded from .env file and environment variables."""

    # Random source
    seed: Optional[int] = None

    # Logging
    log_level: str = "INFO"

    @classmethod
    def load_config(cls) -> "DistributionConfig":
        """
        Load configuration from environment variables.

        Returns:
            DistributionConfig instance with loaded values

        Raises:
            ValueError: If configuration is invalid
        """
        # Load .env file first (if it exists)
        _load_env_file()

        seed = _parse_seed(os.getenv("WEIGHTED_DIST_SEED"))
        log_level = os.getenv("WEIGHTED_DIST_LOG_LEVEL", "INFO").strip().upper()

        config = cls(seed=seed, log_level=log_level)
        config.validate()

        return config

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"Invalid seed: {self.seed} (must be non-negative)")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level} (must be one of {', '.join(VALID_LOG_LEVELS)})")

    def make_rng(self) -> np.random.Generator:
        """Create the default generator (seeded if a seed is configured)."""
        return np.random.default_rng(self.seed)


def configure_logging(config: DistributionConfig) -> None:
    """Initialize root logging at the configured level."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )
    logger.debug(f"[CONFIG] Logging configured at {config.log_level.upper()} (seed={config.seed})")
