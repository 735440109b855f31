"""Address helper functions.

This module provides utilities for formatting register addresses and for
translating register numbers into byte offsets within a fetched window.
"""

from ...const import BYTES_PER_REGISTER


def format_address(address: int, prefix: bool = True) -> str:
    """Format address as hex string.

    Examples:
        >>> format_address(4660)
        '0x1234'
        >>> format_address(4660, prefix=False)
        '1234'
    """
    if prefix:
        return f"0x{address:04X}"
    return f"{address:04X}"


def register_offset(register: int, start_register: int) -> int:
    """Byte offset of a register within a window starting at start_register.

    No bounds are checked here; callers validate the result.

    Examples:
        >>> register_offset(102, 100)
        4
    """
    return (register - start_register) * BYTES_PER_REGISTER


def calculate_register_count(start: int, end: int) -> int:
    """Calculate number of registers in a half-open range [start, end).

    Examples:
        >>> calculate_register_count(100, 104)
        4
    """
    return end - start
