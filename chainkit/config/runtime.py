"""
Runtime Configuration

Central configuration for logging and chain defaults.
"""

from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Optional

from dotenv import load_dotenv

from chainkit.crypto.hashing import is_digest

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "CHAINKIT_"

# Previous-digest stand-in for the first block of a chain
DEFAULT_GENESIS_MARKER = "0" * 64

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class RuntimeConfig:
    """
    Runtime configuration for chainkit.

    Can be loaded from:
    - Environment variables (and a .env file, via python-dotenv)
    - A plain dictionary
    - Programmatic construction
    """
    log_level: str = "INFO"
    log_file: Optional[str] = None
    genesis_marker: str = DEFAULT_GENESIS_MARKER
    debug: bool = False

    def __post_init__(self):
        if not is_digest(self.genesis_marker):
            raise ValueError(
                f"genesis_marker must be a 64 character lowercase hex digest, "
                f"got {self.genesis_marker!r}"
            )

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the single place environment variables are read.

        Supported variables:
        - CHAINKIT_LOG_LEVEL: Log level name (default: INFO)
        - CHAINKIT_LOG_FILE: Optional log file path
        - CHAINKIT_GENESIS_MARKER: Previous digest used by genesis blocks
        - CHAINKIT_DEBUG: Enable debug mode (true/false)
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if os.getenv(f"{ENV_PREFIX}GENESIS_MARKER"):
            overrides["genesis_marker"] = os.getenv(f"{ENV_PREFIX}GENESIS_MARKER")
        if os.getenv(f"{ENV_PREFIX}DEBUG"):
            overrides["debug"] = (
                os.getenv(f"{ENV_PREFIX}DEBUG", "false").lower() == "true"
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Create configuration from a dictionary, ignoring unknown keys."""
        return cls(
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            genesis_marker=data.get("genesis_marker", DEFAULT_GENESIS_MARKER),
            debug=bool(data.get("debug", False)),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows building a config in code first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        new_config.__post_init__()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "log_level": self.log_level,
            "log_file": self.log_file,
            "genesis_marker": self.genesis_marker,
            "debug": self.debug,
        }


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for applications embedding chainkit."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
    )


def configure_logging(config: RuntimeConfig | None = None) -> None:
    """Configure logging from a RuntimeConfig; debug mode forces DEBUG."""
    config = config or get_default_config()
    level = "DEBUG" if config.debug else config.log_level
    setup_logging(level, config.log_file)


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
