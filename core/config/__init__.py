"""
Runtime Configuration Module

Provides configuration loading and management for whitelist commitments.
"""

from .runtime import (
    LoggingConfig,
    MerkleConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "LoggingConfig",
    "MerkleConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
