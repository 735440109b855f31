"""Configuration loading for modbus_poll."""

from .supervisor_config import (
    SUPERVISOR_SCHEMA,
    SupervisorConfig,
    load_supervisor_config,
)

__all__ = [
    "SUPERVISOR_SCHEMA",
    "SupervisorConfig",
    "load_supervisor_config",
]
