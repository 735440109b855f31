"""Value transformation helper functions.

This module provides utilities for packing register words into bytes and
for turning raw register bytes into ASCII text.
"""

from typing import Sequence

NUL = "\x00"


def registers_to_bytes(registers: Sequence[int]) -> bytes:
    """Pack 16-bit register values into big-endian bytes.

    Examples:
        >>> registers_to_bytes([0x002A, 0xFFFF])
        b'\\x00*\\xff\\xff'
    """
    return b"".join((value & 0xFFFF).to_bytes(2, byteorder="big") for value in registers)


def decode_ascii(data: bytes) -> str:
    """Decode bytes as single-byte ASCII.

    The high bit of every byte is cleared first, so the result always has
    exactly one character per input byte and decoding never fails.

    Examples:
        >>> decode_ascii(b"AB")
        'AB'
        >>> decode_ascii(bytes([0xC1]))
        'A'
    """
    return bytes(byte & 0x7F for byte in data).decode("ascii")


def trim_trailing_nul(text: str) -> str:
    """Strip the trailing run of NUL characters.

    Only NULs at the very end are removed; leading and interior NULs are
    kept. Other whitespace is left untouched.

    Examples:
        >>> trim_trailing_nul("AB\\x00CD\\x00\\x00")
        'AB\\x00CD'
        >>> trim_trailing_nul("\\x00A ")
        '\\x00A '
    """
    return text.rstrip(NUL)
