"""RegisterWindow value object.

Represents the raw bytes returned by one bulk holding register read,
together with the half-open register range they cover.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...const import BYTES_PER_REGISTER, MAX_REGISTER
from ..helpers.address_helpers import calculate_register_count, format_address
from ..helpers.validators import ValidationError, validate_register_address


@dataclass(frozen=True)
class RegisterWindow:
    """Immutable window of contiguous registers.

    Attributes:
        start_register: First register in the window
        end_register: First register after the window (exclusive)
        raw: Register data, 2 bytes per register, big-endian

    Example:
        >>> window = RegisterWindow(100, 102, b"\\x00\\x2a\\xff\\xff")
        >>> window.register_count
        2
        >>> window.contains(102)
        False

    Raises:
        ValidationError: If the range is invalid or raw has the wrong length
    """

    start_register: int
    end_register: int
    raw: bytes

    def __post_init__(self) -> None:
        """Validate range and length invariant."""
        validate_register_address(self.start_register, "start_register")
        if not isinstance(self.end_register, int) or self.end_register < self.start_register:
            raise ValidationError(
                f"Window end {self.end_register!r} precedes start "
                f"{format_address(self.start_register)}"
            )
        if self.end_register > MAX_REGISTER + 1:
            raise ValidationError(
                f"Window end {self.end_register} exceeds register space"
            )

        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise ValidationError(
                f"Window data must be bytes, got {type(self.raw).__name__}"
            )
        # Store an immutable copy
        object.__setattr__(self, "raw", bytes(self.raw))

        expected = self.register_count * BYTES_PER_REGISTER
        if len(self.raw) != expected:
            raise ValidationError(
                f"Window {format_address(self.start_register)}-"
                f"{format_address(self.end_register)} expects {expected} bytes, "
                f"got {len(self.raw)}"
            )

    @property
    def register_count(self) -> int:
        """Number of registers covered by the window."""
        return calculate_register_count(self.start_register, self.end_register)

    @property
    def byte_length(self) -> int:
        """Number of bytes in the window."""
        return len(self.raw)

    def contains(self, register: int) -> bool:
        """Check whether a register lies inside the window."""
        return self.start_register <= register < self.end_register

    def __str__(self) -> str:
        """String representation for logging."""
        return (
            f"RegisterWindow({format_address(self.start_register)}-"
            f"{format_address(self.end_register)}, {len(self.raw)} bytes)"
        )
