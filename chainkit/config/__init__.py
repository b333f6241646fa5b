"""
Runtime Configuration Module

Provides configuration loading and logging setup for chainkit.
"""

from .runtime import (
    DEFAULT_GENESIS_MARKER,
    RuntimeConfig,
    configure_logging,
    get_default_config,
    set_default_config,
    setup_logging,
)

__all__ = [
    "DEFAULT_GENESIS_MARKER",
    "RuntimeConfig",
    "configure_logging",
    "get_default_config",
    "set_default_config",
    "setup_logging",
]
