"""Domain helper functions."""

from .address_helpers import (
    calculate_register_count,
    format_address,
    register_offset,
)
from .async_helpers import maybe_await
from .transformations import (
    decode_ascii,
    registers_to_bytes,
    trim_trailing_nul,
)
from .validators import (
    ValidationError,
    validate_non_negative,
    validate_register_address,
)

__all__ = [
    # Address helpers
    "format_address",
    "register_offset",
    "calculate_register_count",
    # Async helpers
    "maybe_await",
    # Transformations
    "registers_to_bytes",
    "decode_ascii",
    "trim_trailing_nul",
    # Validators
    "ValidationError",
    "validate_register_address",
    "validate_non_negative",
]
