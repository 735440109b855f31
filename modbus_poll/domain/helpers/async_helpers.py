"""Helpers for callables that may or may not be coroutine functions."""

import inspect
from typing import Any


async def maybe_await(result: Any) -> Any:
    """Await result if it is awaitable, otherwise return it unchanged.

    Lets callers treat sync and async callbacks uniformly: a plain value is
    an already-resolved result.

    Example:
        >>> await maybe_await(transform(decoder))
    """
    if inspect.isawaitable(result):
        return await result
    return result
