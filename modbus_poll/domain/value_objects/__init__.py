"""Value Objects for modbus_poll.

Value Objects are immutable domain primitives that validate their
invariants at construction.
"""

from .field_spec import AsciiRequest, FieldRequest, FieldWidth, Signedness
from .register_window import RegisterWindow

__all__ = [
    "AsciiRequest",
    "FieldRequest",
    "FieldWidth",
    "RegisterWindow",
    "Signedness",
]
