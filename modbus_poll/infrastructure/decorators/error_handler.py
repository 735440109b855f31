"""Error handling decorators for register transport operations."""

import asyncio
import logging
from functools import wraps
from typing import Any, Callable, Optional

from ...domain.exceptions import DecodeError, TransportError
from ...domain.helpers.validators import ValidationError


def _log_failure(log: logging.Logger, operation_name: str, err: Exception) -> None:
    """Log a failed operation at a level matching the error category.

    Timeouts are warnings. Transport and decode errors are expected on a
    noisy bus, and invalid caller arguments carry their own explanation, so
    these are logged without a traceback; anything else gets one.
    """
    if isinstance(err, asyncio.TimeoutError):
        log.warning("%s timed out: %s", operation_name, str(err) or "no response")
    elif isinstance(err, TransportError):
        log.error("%s transport error: %s", operation_name, err)
    elif isinstance(err, DecodeError):
        log.error("%s decode error: %s", operation_name, err)
    elif isinstance(err, ValidationError):
        log.error("%s rejected: %s", operation_name, err)
    else:
        log.error("%s unexpected error: %s", operation_name, err, exc_info=True)


def handle_transport_errors(
    operation_name: str,
    logger: Optional[logging.Logger] = None,
    reraise: bool = True,
    default_return: Any = None,
):
    """Log failures of a transport-facing operation.

    The logger is resolved per call: an explicit logger argument wins, then
    a `_logger` attribute on the bound instance, then the function's module
    logger. Cancellation is never intercepted.

    Args:
        operation_name: Human-readable operation name for logging
        logger: Logger to use
        reraise: Re-raise the original exception after logging
        default_return: Value returned on failure when not re-raising

    Example:
        @handle_transport_errors("Query window")
        async def execute(self, device_id, start, end, transform):
            ...
    """

    def decorator(func: Callable):
        def resolve_logger(args) -> logging.Logger:
            if logger is not None:
                return logger
            bound_logger = getattr(args[0], "_logger", None) if args else None
            if isinstance(bound_logger, logging.Logger):
                return bound_logger
            return logging.getLogger(func.__module__)

        if asyncio.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as err:
                    _log_failure(resolve_logger(args), operation_name, err)
                    if reraise:
                        raise
                    return default_return

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as err:
                _log_failure(resolve_logger(args), operation_name, err)
                if reraise:
                    raise
                return default_return

        return sync_wrapper

    return decorator
