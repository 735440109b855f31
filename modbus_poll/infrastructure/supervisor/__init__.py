"""Supervised forever-loop."""

from .retry_policy import RetryPolicy
from .supervisor import Supervisor, run_forever

__all__ = [
    "RetryPolicy",
    "Supervisor",
    "run_forever",
]
