"""Use cases for modbus_poll.

Each use case has a single public method (execute) and coordinates the
transport interface with domain services.
"""

from .query_window_use_case import QueryWindowUseCase, query_window

__all__ = [
    "QueryWindowUseCase",
    "query_window",
]
