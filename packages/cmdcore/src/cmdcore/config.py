"""
Console Configuration

Settings come from the environment (CMDCORE_*), with defaults suitable for
running everything in-process.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_LOOKUP_TIMEOUT_S


@dataclass
class ConsoleConfig:
    """Configuration for a console instance."""

    identity_url: Optional[str] = None  # Remote identity service, if any
    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT_S
    name_cache_size: int = 0  # 0 = unbounded
    name_cache_ttl: int = 0  # Seconds, 0 = never expire
    log_level: str = "INFO"
    commands_path: Optional[str] = None  # Directory of YAML command declarations

    @classmethod
    def from_env(cls) -> "ConsoleConfig":
        return cls(
            identity_url=os.environ.get("CMDCORE_IDENTITY_URL") or None,
            lookup_timeout=float(
                os.environ.get("CMDCORE_LOOKUP_TIMEOUT", str(DEFAULT_LOOKUP_TIMEOUT_S))
            ),
            name_cache_size=int(os.environ.get("CMDCORE_NAME_CACHE_SIZE", "0")),
            name_cache_ttl=int(os.environ.get("CMDCORE_NAME_CACHE_TTL", "0")),
            log_level=os.environ.get("CMDCORE_LOG_LEVEL", "INFO").upper(),
            commands_path=os.environ.get("CMDCORE_COMMANDS_PATH") or None,
        )


def configure_logging(config: ConsoleConfig) -> None:
    """Apply the configured log level to the package loggers."""
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger("cmdcore").setLevel(level)
