"""Custom exceptions for modbus_poll.

Decoder errors (OutOfRangeError, BufferOverrunError) propagate to the
caller of a field access. Supervisor errors wrap whatever a setup, loop or
teardown step raised; they are logged and absorbed by the supervisor and
never escape run_forever.
"""

from __future__ import annotations

from typing import Optional


class ModbusPollError(Exception):
    """Base class for all modbus_poll errors."""


class DecodeError(ModbusPollError):
    """A field could not be decoded from a register window."""


class OutOfRangeError(DecodeError):
    """Requested register precedes the start of the fetched window."""

    def __init__(self, register: int, start_register: int):
        self.register = register
        self.start_register = start_register
        super().__init__(
            f"Register {register} (0x{register:04X}) precedes window start "
            f"{start_register} (0x{start_register:04X})"
        )


class BufferOverrunError(DecodeError):
    """Requested field extends past the end of the fetched window."""

    def __init__(self, register: int, offset: int, size: int, buffer_length: int):
        self.register = register
        self.offset = offset
        self.size = size
        self.buffer_length = buffer_length
        super().__init__(
            f"Reading {size} bytes for register {register} (0x{register:04X}) "
            f"at offset {offset} overruns {buffer_length}-byte window"
        )


class TransportError(ModbusPollError):
    """The external register-read capability failed.

    Transport implementations raise this (or a subclass) for communication
    failures. The decoder never inspects it; query_window surfaces it
    unchanged.
    """


class SupervisorError(ModbusPollError):
    """A step of the supervised cycle failed.

    The failing step's exception is attached as __cause__.

    Attributes:
        phase: Supervisor phase name the failure occurred in
    """

    phase = "UNKNOWN"

    def __init__(self, message: str, cycle: Optional[int] = None):
        self.cycle = cycle
        super().__init__(message)


class SetupError(SupervisorError):
    """setup() failed; the supervisor retries it."""

    phase = "INIT"


class LoopError(SupervisorError):
    """loop() failed; the supervisor tears down and starts over."""

    phase = "RUNNING"


class TeardownError(SupervisorError):
    """teardown() failed; the supervisor continues with a fresh setup."""

    phase = "TEARDOWN"
