"""Windowed Modbus register decoding and supervised polling loops.

Public entry points:
- RegisterWindowDecoder: typed, register-addressed reads over one bulk read
- query_window: fetch a register window and hand a decoder to a transform
- run_forever: self-healing setup / loop / teardown supervisor
"""

from .application.use_cases import QueryWindowUseCase, query_window
from .domain.exceptions import (
    BufferOverrunError,
    DecodeError,
    LoopError,
    ModbusPollError,
    OutOfRangeError,
    SetupError,
    SupervisorError,
    TeardownError,
    TransportError,
)
from .domain.interfaces import IRegisterTransport
from .domain.services import RegisterWindowDecoder
from .domain.value_objects import (
    AsciiRequest,
    FieldRequest,
    FieldWidth,
    RegisterWindow,
    Signedness,
)
from .infrastructure.supervisor import RetryPolicy, Supervisor, run_forever

__all__ = [
    "AsciiRequest",
    "BufferOverrunError",
    "DecodeError",
    "FieldRequest",
    "FieldWidth",
    "IRegisterTransport",
    "LoopError",
    "ModbusPollError",
    "OutOfRangeError",
    "QueryWindowUseCase",
    "RegisterWindow",
    "RegisterWindowDecoder",
    "RetryPolicy",
    "SetupError",
    "Signedness",
    "Supervisor",
    "SupervisorError",
    "TeardownError",
    "TransportError",
    "query_window",
    "run_forever",
]
