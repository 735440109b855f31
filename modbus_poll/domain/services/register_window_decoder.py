"""Register window decoder.

Turns one bulk holding register read into register-addressed typed reads.
Callers address fields by absolute register number; the decoder owns the
byte-offset arithmetic and both bound checks.
"""

from __future__ import annotations

from typing import Union

from ..exceptions import BufferOverrunError, OutOfRangeError
from ..helpers.address_helpers import register_offset
from ..helpers.transformations import decode_ascii, trim_trailing_nul
from ..helpers.validators import validate_non_negative
from ..strategies.value_codec_strategy import CodecFactory
from ..value_objects.field_spec import (
    AsciiRequest,
    FieldRequest,
    FieldWidth,
    Signedness,
)
from ..value_objects.register_window import RegisterWindow


class RegisterWindowDecoder:
    """Typed read view over a RegisterWindow.

    The decoder has no side effects and never copies the window.

    Example:
        >>> decoder = RegisterWindowDecoder(
        ...     100, 104, bytes([0x00, 0x2A, 0xFF, 0xFF, 0x41, 0x00, 0x00, 0x00])
        ... )
        >>> decoder.number_at(100, 1, "unsigned")
        42
        >>> decoder.number_at(101, FieldWidth.WIDTH16, Signedness.SIGNED)
        -1
        >>> decoder.ascii_at(102, 2)
        'A'
    """

    def __init__(self, start_register: int, end_register: int, raw: bytes):
        """Initialize decoder.

        Args:
            start_register: First register of the window
            end_register: First register after the window (exclusive)
            raw: 2 * (end_register - start_register) bytes, big-endian

        Raises:
            ValidationError: If raw does not match the register range
        """
        self._window = RegisterWindow(start_register, end_register, raw)

    @classmethod
    def from_window(cls, window: RegisterWindow) -> "RegisterWindowDecoder":
        """Create a decoder over an existing window."""
        decoder = cls.__new__(cls)
        decoder._window = window
        return decoder

    @property
    def window(self) -> RegisterWindow:
        """Underlying register window."""
        return self._window

    @property
    def start_register(self) -> int:
        """First register of the window."""
        return self._window.start_register

    @property
    def end_register(self) -> int:
        """First register after the window."""
        return self._window.end_register

    def offset_of(self, register: int) -> int:
        """Byte offset of a register inside the window.

        Raises:
            OutOfRangeError: If register precedes the window start
        """
        if register < self._window.start_register:
            raise OutOfRangeError(register, self._window.start_register)
        return register_offset(register, self._window.start_register)

    def _check_end(self, register: int, offset: int, size: int) -> None:
        """Raise BufferOverrunError if size bytes at offset leave the window."""
        if offset + size > len(self._window.raw):
            raise BufferOverrunError(register, offset, size, len(self._window.raw))

    def number_at(
        self,
        register: int,
        width: Union[FieldWidth, int] = FieldWidth.WIDTH16,
        signedness: Union[Signedness, str, bool] = Signedness.UNSIGNED,
    ) -> int:
        """Read a big-endian integer field.

        Args:
            register: First register of the field
            width: FieldWidth, or register count 1 / 2
            signedness: Signedness, "signed"/"unsigned", or bool (True = signed)

        Returns:
            Decoded integer

        Raises:
            ValueError: For an unsupported width or signedness
            OutOfRangeError: If register precedes the window
            BufferOverrunError: If the field extends past the window
        """
        offset = self.offset_of(register)
        codec = CodecFactory.get_codec(
            FieldWidth.coerce(width), Signedness.coerce(signedness)
        )
        self._check_end(register, offset, codec.byte_length)
        return codec.decode(self._window.raw, offset)

    def ascii_at(self, register: int, length_registers: int) -> str:
        """Read an ASCII string, dropping only its trailing NUL padding.

        Args:
            register: First register of the string
            length_registers: String length in registers (2 characters each)

        Returns:
            Decoded string without trailing NUL characters

        Raises:
            ValidationError: If length_registers is negative
            OutOfRangeError: If register precedes the window
            BufferOverrunError: If the string extends past the window
        """
        offset = self.offset_of(register)
        validate_non_negative(length_registers, "length_registers")
        size = length_registers * 2
        self._check_end(register, offset, size)
        text = decode_ascii(self._window.raw[offset : offset + size])
        return trim_trailing_nul(text)

    def read(self, request: Union[FieldRequest, AsciiRequest]) -> Union[int, str]:
        """Read a field described by a request object.

        Raises:
            TypeError: If request is neither FieldRequest nor AsciiRequest
        """
        if isinstance(request, FieldRequest):
            return self.number_at(request.register, request.width, request.signedness)
        if isinstance(request, AsciiRequest):
            return self.ascii_at(request.register, request.length_registers)
        raise TypeError(f"Unsupported request type: {type(request).__name__}")

    def registers(self) -> tuple[int, ...]:
        """All window registers as unsigned 16-bit values."""
        codec = CodecFactory.get_codec(FieldWidth.WIDTH16, Signedness.UNSIGNED)
        return tuple(
            codec.decode(self._window.raw, offset)
            for offset in range(0, len(self._window.raw), codec.byte_length)
        )

    def __repr__(self) -> str:
        """Developer representation."""
        return f"RegisterWindowDecoder({self._window})"
