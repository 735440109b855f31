"""Validation helper functions.

All validators raise ValidationError (subclass of ValueError) for invalid
inputs.
"""

from typing import Any

from ...const import MAX_REGISTER, MIN_REGISTER


class ValidationError(ValueError):
    """Domain validation error.

    Raised when validation fails. This is a subclass of ValueError
    for code simplicity.
    """


def validate_register_address(address: int, name: str = "address") -> int:
    """Validate register address is in valid range (0x0000-0xFFFF).

    Returns:
        Validated address

    Raises:
        ValidationError: If address is invalid
    """
    if not isinstance(address, int) or isinstance(address, bool):
        raise ValidationError(
            f"Invalid {name}: must be integer, got {type(address).__name__}"
        )

    if not MIN_REGISTER <= address <= MAX_REGISTER:
        raise ValidationError(
            f"Invalid {name}: {address} (must be 0x{MIN_REGISTER:04X}-0x{MAX_REGISTER:04X})"
        )

    return address


def validate_non_negative(value: Any, name: str = "value") -> int:
    """Validate value is an integer greater than or equal to zero."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"Invalid {name}: must be integer, got {type(value).__name__}"
        )
    if value < 0:
        raise ValidationError(f"Invalid {name}: {value} (must be >= 0)")
    return value
