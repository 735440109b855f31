"""Domain services."""

from .register_window_decoder import RegisterWindowDecoder

__all__ = ["RegisterWindowDecoder"]
