"""
Runtime Configuration Module

Provides configuration loading and management for dynamerkle.
"""

from .runtime import (
    HashingConfig,
    LoggingConfig,
    ProofConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "HashingConfig",
    "LoggingConfig",
    "ProofConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
