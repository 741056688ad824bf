"""
Runtime Configuration Module

Provides configuration loading and management for the distributor.
"""

from .runtime import (
    ClaimsConfig,
    DistributionConfig,
    RuntimeConfig,
    get_default_config,
    get_default_config_template,
    load_runtime_config,
    set_default_config,
)

__all__ = [
    "ClaimsConfig",
    "DistributionConfig",
    "RuntimeConfig",
    "get_default_config",
    "get_default_config_template",
    "load_runtime_config",
    "set_default_config",
]
