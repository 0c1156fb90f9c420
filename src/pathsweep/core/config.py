#!/usr/bin/env python3
"""
Configuration System for Column Sweep Runs

Centralized run configuration with validation and defaults. Values can be
loaded from YAML or JSON and overridden from the command line.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Dict, Any, Optional

import yaml

from ..strategies import STRATEGY_NAMES

logger = logging.getLogger(__name__)


@dataclass
class GridConfig:
    """Grid dimensions and cost field parameters."""
    width: int = 16
    height: int = 16
    noise_scale: float = 6.0
    energy_baseline: float = 1.05
    noise_seed: int = 0


@dataclass
class ExecutionConfig:
    """Which strategy runs and how the sweep is executed."""
    strategy: str = "naive"
    max_workers: Optional[int] = None
    debug: bool = False


@dataclass
class ProfilerConfig:
    """Configuration for memory sampling and the dump target."""
    enable_profiling: bool = True
    out_file: str = os.devnull
    max_step_history: int = 1000


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_level: str = "INFO"
    progress_log_interval: int = 100


@dataclass
class SimulationConfig:
    """
    Master configuration for one sweep run.

    Validated on construction; invalid values raise ValueError.
    """
    grid: GridConfig = field(default_factory=GridConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    profiler: ProfilerConfig = field(default_factory=ProfilerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_config()

    def _validate_config(self):
        """Validate configuration parameters."""
        if self.grid.width <= 0:
            raise ValueError("width must be positive")
        if self.grid.height <= 0:
            raise ValueError("height must be positive")
        if self.grid.noise_scale <= 0:
            raise ValueError("noise_scale must be positive")

        if self.execution.strategy not in STRATEGY_NAMES:
            raise ValueError(f"strategy must be one of {list(STRATEGY_NAMES)}, got '{self.execution.strategy}'")
        if self.execution.max_workers is not None and self.execution.max_workers <= 0:
            raise ValueError("max_workers must be positive")

        if self.profiler.max_step_history <= 0:
            raise ValueError("max_step_history must be positive")

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging.log_level.upper() not in valid_log_levels:
            raise ValueError(f"log_level must be one of {valid_log_levels}")
        if self.logging.progress_log_interval <= 0:
            raise ValueError("progress_log_interval must be positive")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'SimulationConfig':
        """
        Create configuration from a nested dictionary.

        Raises:
            ValueError: on unknown sections or keys, or values failing validation
        """
        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(config_dict).__name__}")

        section_types = {
            'grid': GridConfig,
            'execution': ExecutionConfig,
            'profiler': ProfilerConfig,
            'logging': LoggingConfig,
        }
        unknown = set(config_dict) - set(section_types)
        if unknown:
            raise ValueError(f"Unknown configuration section(s): {sorted(unknown)}")

        sections = {}
        for name, section_type in section_types.items():
            values = config_dict.get(name) or {}
            if not isinstance(values, dict):
                raise ValueError(f"Configuration section '{name}' must be a mapping")
            unknown = set(values) - {f.name for f in fields(section_type)}
            if unknown:
                raise ValueError(f"Unknown key(s) in section '{name}': {sorted(unknown)}")
            sections[name] = section_type(**values)

        return cls(**sections)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'grid': {
                'width': self.grid.width,
                'height': self.grid.height,
                'noise_scale': self.grid.noise_scale,
                'energy_baseline': self.grid.energy_baseline,
                'noise_seed': self.grid.noise_seed
            },
            'execution': {
                'strategy': self.execution.strategy,
                'max_workers': self.execution.max_workers,
                'debug': self.execution.debug
            },
            'profiler': {
                'enable_profiling': self.profiler.enable_profiling,
                'out_file': self.profiler.out_file,
                'max_step_history': self.profiler.max_step_history
            },
            'logging': {
                'log_level': self.logging.log_level,
                'progress_log_interval': self.logging.progress_log_interval
            }
        }

    def with_overrides(self, **overrides) -> 'SimulationConfig':
        """
        Copy of this configuration with flat overrides applied.

        Keys are field names of any section (e.g. width=32, strategy='rc');
        None values are ignored so unset command line flags keep file values.
        """
        config_dict = self.to_dict()
        for key, value in overrides.items():
            if value is None:
                continue
            for section in config_dict.values():
                if key in section:
                    section[key] = value
                    break
            else:
                raise ValueError(f"Unknown configuration key '{key}'")
        return SimulationConfig.from_dict(config_dict)

    def log_configuration_summary(self):
        """Log a summary of the current configuration."""
        logger.info("=== SIMULATION CONFIGURATION SUMMARY ===")
        logger.info(f"Strategy: {self.execution.strategy}, grid {self.grid.width}x{self.grid.height}")
        logger.info(f"Cost field: noise_scale={self.grid.noise_scale}, baseline={self.grid.energy_baseline}, seed={self.grid.noise_seed}")
        logger.info(f"Workers: {self.execution.max_workers or 'default'}, debug={self.execution.debug}")
        logger.info(f"Profiling: {self.profiler.enable_profiling}, dump={self.profiler.out_file}")


# Global default configuration instance
DEFAULT_CONFIG = SimulationConfig()


def get_default_config() -> SimulationConfig:
    """Get default configuration instance."""
    return DEFAULT_CONFIG


def create_config_from_file(config_path: str) -> SimulationConfig:
    """
    Create configuration from YAML or JSON file.

    Args:
        config_path: Path to configuration file

    Returns:
        SimulationConfig instance

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: on an unsupported extension, unparsable content or
            invalid configuration values
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    if config_path.endswith('.yaml') or config_path.endswith('.yml'):
        with open(config_path, 'r') as f:
            try:
                config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Malformed YAML in {config_path}: {e}") from e
    elif config_path.endswith('.json'):
        with open(config_path, 'r') as f:
            config_dict = json.load(f)
    else:
        raise ValueError("Configuration file must be .yaml, .yml, or .json")

    return SimulationConfig.from_dict(config_dict)


def save_config_to_file(config: SimulationConfig, config_path: str):
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
