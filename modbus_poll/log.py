"""Logging setup for processes hosting supervised polling loops."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .const import DEFAULT_LOG_LEVEL, LOG_DATE_FORMAT, LOG_FORMAT


def configure_logging(
    level: Union[str, int] = DEFAULT_LOG_LEVEL,
    logger: Optional[logging.Logger] = None,
) -> logging.Logger:
    """Attach a timestamped stream handler to a logger.

    Safe to call more than once; an existing handler installed by this
    function is reused and only the level is updated.

    Args:
        level: Level name ("INFO") or numeric level
        logger: Logger to configure (default: root logger)

    Returns:
        The configured logger

    Example:
        >>> log = configure_logging("DEBUG")
        >>> log.info("Polling started")  # 2024-02-03T12:00:00+0000 [INFO] root: ...
    """
    target = logger if logger is not None else logging.getLogger()
    if isinstance(level, str):
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric_level

    handler = next(
        (h for h in target.handlers if getattr(h, "_modbus_poll_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler._modbus_poll_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        target.addHandler(handler)

    target.setLevel(level)
    return target
