#!/usr/bin/env python3
"""
Configuration System for Road Network Growth

Dataclass configuration with defaults, dictionary/file round-tripping and
validation for values arriving from outside the program. The growth engine
itself treats every value as a precondition and never re-checks it.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

import yaml

from citygrowth.growth.oracles import MAX_NOISE_BASE, PRODUCT_NOISE_FIELDS

logger = logging.getLogger(__name__)


@dataclass
class GrowthParameters:
    """Numeric knobs of the growth simulation."""
    segment_length: float = 5.0
    max_segments: int = 10_000
    max_angle: int = 10  # degrees
    branch_probability: float = 0.05
    street_branch_probability: float = 0.5
    seed: int = 10
    snap_distance: float = 3.0
    noise_scale: float = 100.0
    neighbor_count: int = 10


@dataclass
class FeatureFlags:
    """Switches between the growth behaviours the engine supports."""
    noise_biased_heading: bool = True
    streets_enabled: bool = True
    shared_endpoint_intersection: bool = True
    product_noise: bool = True


@dataclass
class PerformanceConfig:
    """Configuration for performance tracking."""
    enable_performance_tracking: bool = True
    max_history_size: int = 1000


@dataclass
class LoggingConfig:
    """Configuration for logging and progress reporting."""
    log_level: str = "INFO"
    log_step_progress: bool = True
    progress_log_interval: int = 1000


@dataclass
class GrowthConfig:
    """
    Master configuration for a growth run.

    Construction never validates; call ``validate`` (done automatically by
    ``from_dict`` and the file loaders) for values supplied by users.
    """
    growth: GrowthParameters = field(default_factory=GrowthParameters)
    features: FeatureFlags = field(default_factory=FeatureFlags)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self):
        """Raise ValueError for values the engine cannot run with."""
        g = self.growth
        if g.segment_length <= 0:
            raise ValueError("segment_length must be positive")
        if g.max_segments < 0:
            raise ValueError("max_segments must be non-negative")
        if not (0 < g.max_angle < 90):
            raise ValueError("max_angle must be between 1 and 89 degrees")
        if not (0 <= g.branch_probability <= 1):
            raise ValueError("branch_probability must be between 0 and 1")
        if not (0 <= g.street_branch_probability <= 1):
            raise ValueError("street_branch_probability must be between 0 and 1")
        if g.snap_distance < 0:
            raise ValueError("snap_distance must be non-negative")
        if g.noise_scale <= 0:
            raise ValueError("noise_scale must be positive")
        if g.neighbor_count <= 0:
            raise ValueError("neighbor_count must be positive")

        # Every noise field the run builds must get a distinct permutation base
        max_seed = MAX_NOISE_BASE
        if self.features.product_noise:
            max_seed -= PRODUCT_NOISE_FIELDS - 1
        if not (0 <= g.seed <= max_seed):
            raise ValueError(f"seed must be between 0 and {max_seed}")

        if self.performance.max_history_size <= 0:
            raise ValueError("max_history_size must be positive")

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging.log_level.upper() not in valid_log_levels:
            raise ValueError(f"log_level must be one of {valid_log_levels}")
        if self.logging.progress_log_interval <= 0:
            raise ValueError("progress_log_interval must be positive")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'GrowthConfig':
        """
        Create and validate configuration from a nested dictionary.

        Missing sections and keys fall back to their defaults.
        """
        config = cls(
            growth=GrowthParameters(**config_dict.get('growth', {})),
            features=FeatureFlags(**config_dict.get('features', {})),
            performance=PerformanceConfig(**config_dict.get('performance', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        )
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a nested dictionary."""
        return asdict(self)

    def warnings(self) -> List[str]:
        """Return messages for settings that are legal but probably unintended."""
        messages = []

        if self.growth.snap_distance >= self.growth.segment_length:
            messages.append("snap_distance >= segment_length: most roads will snap back onto their own junction")

        if self.features.streets_enabled and self.growth.street_branch_probability == 0:
            messages.append("Streets enabled but street_branch_probability is 0 - no streets will be created")

        if self.growth.max_segments > 50_000:
            messages.append("Very high max_segments may take a long time to grow")

        return messages

    def log_configuration_summary(self):
        """Log a summary of the current configuration."""
        g = self.growth
        f = self.features

        logger.info("=== GROWTH CONFIGURATION SUMMARY ===")
        logger.info(f"Seed: {g.seed}, budget: {g.max_segments} segments of length {g.segment_length}")
        logger.info(f"Turning: max_angle={g.max_angle}°, branch_p={g.branch_probability}, street_branch_p={g.street_branch_probability}")
        logger.info(f"Constraints: snap_distance={g.snap_distance}, neighbors={g.neighbor_count}")
        logger.info(f"Features: noise_biased_heading={f.noise_biased_heading}, streets={f.streets_enabled}, "
                    f"shared_endpoints={f.shared_endpoint_intersection}, product_noise={f.product_noise}")

        warnings = self.warnings()
        if warnings:
            logger.warning("Configuration warnings:")
            for warning in warnings:
                logger.warning(f"  - {warning}")


def configure_logging(config: GrowthConfig, verbose: bool = False) -> int:
    """
    Set the root logger level from the configuration.

    Args:
        config: Validated configuration
        verbose: Force DEBUG regardless of ``logging.log_level``

    Returns:
        The numeric level applied
    """
    level = logging.DEBUG if verbose else getattr(logging, config.logging.log_level.upper())
    logging.getLogger().setLevel(level)
    return level


def get_default_config() -> GrowthConfig:
    """Get a fresh default configuration instance."""
    return GrowthConfig()


def create_config_from_file(config_path: str) -> GrowthConfig:
    """
    Create configuration from YAML or JSON file.

    Args:
        config_path: Path to configuration file

    Returns:
        Validated GrowthConfig instance
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    if config_path.endswith('.yaml') or config_path.endswith('.yml'):
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}
    elif config_path.endswith('.json'):
        with open(config_path, 'r') as f:
            config_dict = json.load(f)
    else:
        raise ValueError("Configuration file must be .yaml, .yml, or .json")

    return GrowthConfig.from_dict(config_dict)


def save_config_to_file(config: GrowthConfig, config_path: str):
    """
    Save configuration to YAML or JSON file.

    Args:
        config: Configuration to save
        config_path: Path to save configuration
    """
    config_dict = config.to_dict()

    if config_path.endswith('.yaml') or config_path.endswith('.yml'):
        with open(config_path, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False)
    elif config_path.endswith('.json'):
        with open(config_path, 'w') as f:
            json.dump(config_dict, f, indent=2)
    else:
        raise ValueError("Configuration file must be .yaml, .yml, or .json")
