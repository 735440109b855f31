"""Supervisor configuration loading.

Configuration is a small YAML document:

    retry:
      initial_backoff: 1.0   # seconds, 0 disables backoff
      max_backoff: 300.0
      multiplier: 2.0
    logging:
      level: INFO

Every key is optional; missing keys fall back to the defaults in const.py.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import voluptuous as vol
import yaml

from ..const import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_INITIAL_BACKOFF,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_BACKOFF,
    LOG_LEVELS,
)
from ..infrastructure.supervisor import RetryPolicy
from ..log import configure_logging

_LOGGER = logging.getLogger(__name__)


def _log_level(value: Any) -> str:
    """Normalize and validate a log level name."""
    level = str(value).upper()
    if level not in LOG_LEVELS:
        raise vol.Invalid(f"must be one of {', '.join(LOG_LEVELS)}")
    return level


RETRY_SCHEMA = vol.Schema(
    {
        vol.Optional("initial_backoff", default=DEFAULT_INITIAL_BACKOFF): vol.All(
            vol.Coerce(float), vol.Range(min=0)
        ),
        vol.Optional("max_backoff", default=DEFAULT_MAX_BACKOFF): vol.All(
            vol.Coerce(float), vol.Range(min=0)
        ),
        vol.Optional("multiplier", default=DEFAULT_BACKOFF_MULTIPLIER): vol.All(
            vol.Coerce(float), vol.Range(min=1)
        ),
    }
)

LOGGING_SCHEMA = vol.Schema(
    {
        vol.Optional("level", default=DEFAULT_LOG_LEVEL): _log_level,
    }
)

SUPERVISOR_SCHEMA = vol.Schema(
    {
        vol.Optional("retry", default={}): RETRY_SCHEMA,
        vol.Optional("logging", default={}): LOGGING_SCHEMA,
    }
)


@dataclass(frozen=True)
class SupervisorConfig:
    """Validated supervisor configuration.

    Attributes:
        initial_backoff: Delay before the first setup retry (seconds)
        max_backoff: Upper bound for setup retry delays (seconds)
        multiplier: Backoff growth factor
        log_level: Logging level name
    """

    initial_backoff: float = DEFAULT_INITIAL_BACKOFF
    max_backoff: float = DEFAULT_MAX_BACKOFF
    multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SupervisorConfig":
        """Validate a raw configuration mapping.

        Args:
            data: Parsed configuration (None is treated as empty)

        Returns:
            SupervisorConfig instance

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            config = SUPERVISOR_SCHEMA(dict(data or {}))
        except vol.Invalid as err:
            raise ValueError(f"Invalid supervisor configuration: {err}") from err

        retry = config["retry"]
        if retry["max_backoff"] < retry["initial_backoff"]:
            raise ValueError(
                "Invalid supervisor configuration: retry.max_backoff "
                f"({retry['max_backoff']}) must be >= retry.initial_backoff "
                f"({retry['initial_backoff']})"
            )

        return cls(
            initial_backoff=retry["initial_backoff"],
            max_backoff=retry["max_backoff"],
            multiplier=retry["multiplier"],
            log_level=config["logging"]["level"],
        )

    def apply_logging(self, logger: Optional[logging.Logger] = None) -> logging.Logger:
        """Configure logging at the configured level (root logger by default)."""
        return configure_logging(self.log_level, logger)

    def retry_policy(self) -> RetryPolicy:
        """Build the RetryPolicy described by this configuration."""
        return RetryPolicy(
            initial_backoff=self.initial_backoff,
            max_backoff=self.max_backoff,
            multiplier=self.multiplier,
        )


def load_supervisor_config(path: Union[str, Path]) -> SupervisorConfig:
    """Load and validate supervisor configuration from YAML.

    Args:
        path: Path to the YAML file

    Returns:
        Validated SupervisorConfig

    Raises:
        FileNotFoundError: If configuration file not found
        ValueError: If the YAML is malformed or configuration is invalid
    """
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        data = yaml.safe_load(config_file.read_text())
    except yaml.YAMLError as err:
        raise ValueError(f"Invalid YAML: {err}") from err

    if data is not None and not isinstance(data, dict):
        raise ValueError(
            f"Configuration root must be a mapping, got {type(data).__name__}"
        )

    config = SupervisorConfig.from_dict(data)
    _LOGGER.info(
        "Loaded supervisor configuration: backoff %.1fs-%.1fs (x%.1f), log level %s",
        config.initial_backoff,
        config.max_backoff,
        config.multiplier,
        config.log_level,
    )
    return config
