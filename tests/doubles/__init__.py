"""Test doubles for unit testing.

Test doubles are fake implementations of interfaces used for testing.
They're faster and more reliable than mocking, and they implement the
actual interface contracts.

Example:
    >>> from tests.doubles import FakeRegisterTransport
    >>> transport = FakeRegisterTransport()
    >>> transport.set_registers(1, 0x0100, [42, 0xFFFF])
    >>> transport.set_target(1)
    >>> await transport.read_registers(0x0100, 2)
    b'\\x00*\\xff\\xff'
"""

from .fake_register_transport import FakeRegisterTransport

__all__ = ["FakeRegisterTransport"]
