"""Configuration management for the sliding-tile puzzle solver.

This module provides Hydra-based configuration management with hierarchical
parameter groups and runtime override capabilities.
"""

from .config_manager import (
    ConfigContext, ConfigManager, default_config_dir, get_config, get_parameter,
    load_config, reset_config
)
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigContext',
    'ConfigManager',
    'default_config_dir',
    'get_config',
    'get_parameter',
    'load_config',
    'reset_config',
    'validate_config',
    'ConfigValidationError'
]
