"""Constants for the modbus_poll package."""

from __future__ import annotations

# Modbus register layout
BYTES_PER_REGISTER = 2
MIN_REGISTER = 0x0000
MAX_REGISTER = 0xFFFF

# Supervisor retry pacing (seconds)
# Zero delay reproduces immediate setup retries; raise to harden.
DEFAULT_INITIAL_BACKOFF = 0.0
DEFAULT_MAX_BACKOFF = 300.0  # 5 minutes
DEFAULT_BACKOFF_MULTIPLIER = 2.0

# Logging
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
