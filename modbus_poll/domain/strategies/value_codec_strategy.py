"""Numeric decoding strategies using Strategy pattern.

One codec exists per member of FieldWidth x Signedness. CodecFactory
selects among them with an explicit branch per pair, so adding a width or
signedness variant without a codec fails loudly.
"""

import struct
from abc import ABC, abstractmethod

from ..value_objects.field_spec import FieldWidth, Signedness


class NumberCodecStrategy(ABC):
    """Abstract strategy for decoding a big-endian register field."""

    width: FieldWidth
    signedness: Signedness
    _format: str

    @property
    def byte_length(self) -> int:
        """Number of bytes consumed by decode()."""
        return self.width.byte_length

    def decode(self, data: bytes, offset: int = 0) -> int:
        """Decode one value from data starting at offset.

        Callers are expected to have checked the bounds; a short buffer
        surfaces as struct.error.

        Args:
            data: Window bytes
            offset: Byte offset of the field

        Returns:
            Decoded integer
        """
        return struct.unpack_from(self._format, data, offset)[0]

    @abstractmethod
    def encode(self, value: int) -> bytes:
        """Encode a value to its big-endian register bytes.

        Raises:
            ValueError: If value does not fit the field
        """

    def _pack(self, value: int) -> bytes:
        try:
            return struct.pack(self._format, value)
        except struct.error as err:
            raise ValueError(
                f"Value {value} does not fit {self.width.name} {self.signedness.value}"
            ) from err

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class UInt16Codec(NumberCodecStrategy):
    """Codec for unsigned 16-bit integers (one register)."""

    width = FieldWidth.WIDTH16
    signedness = Signedness.UNSIGNED
    _format = ">H"

    def encode(self, value: int) -> bytes:
        """Encode to unsigned 16-bit value."""
        return self._pack(value)


class Int16Codec(NumberCodecStrategy):
    """Codec for signed 16-bit integers (two's complement)."""

    width = FieldWidth.WIDTH16
    signedness = Signedness.SIGNED
    _format = ">h"

    def encode(self, value: int) -> bytes:
        """Encode to signed 16-bit value."""
        return self._pack(value)


class UInt32Codec(NumberCodecStrategy):
    """Codec for unsigned 32-bit integers (two registers, high word first)."""

    width = FieldWidth.WIDTH32
    signedness = Signedness.UNSIGNED
    _format = ">I"

    def encode(self, value: int) -> bytes:
        """Encode to unsigned 32-bit value."""
        return self._pack(value)


class Int32Codec(NumberCodecStrategy):
    """Codec for signed 32-bit integers (two registers, high word first)."""

    width = FieldWidth.WIDTH32
    signedness = Signedness.SIGNED
    _format = ">i"

    def encode(self, value: int) -> bytes:
        """Encode to signed 32-bit value."""
        return self._pack(value)


class CodecFactory:
    """Factory returning the codec for a width and signedness."""

    _UINT16 = UInt16Codec()
    _INT16 = Int16Codec()
    _UINT32 = UInt32Codec()
    _INT32 = Int32Codec()

    @classmethod
    def get_codec(cls, width: FieldWidth, signedness: Signedness) -> NumberCodecStrategy:
        """Get codec for a field layout.

        Args:
            width: Field width
            signedness: Signed or unsigned interpretation

        Returns:
            Shared codec instance

        Raises:
            ValueError: If the pair is not one of the four supported layouts

        Example:
            >>> codec = CodecFactory.get_codec(FieldWidth.WIDTH16, Signedness.SIGNED)
            >>> codec.decode(b"\\xff\\xec")
            -20
        """
        if width is FieldWidth.WIDTH16:
            if signedness is Signedness.UNSIGNED:
                return cls._UINT16
            if signedness is Signedness.SIGNED:
                return cls._INT16
        elif width is FieldWidth.WIDTH32:
            if signedness is Signedness.UNSIGNED:
                return cls._UINT32
            if signedness is Signedness.SIGNED:
                return cls._INT32
        raise ValueError(f"Unsupported field layout: {width!r} {signedness!r}")

    @classmethod
    def get_supported_layouts(cls) -> list[tuple[FieldWidth, Signedness]]:
        """Get every supported (width, signedness) pair."""
        return [(width, signedness) for width in FieldWidth for signedness in Signedness]
