"""Domain interfaces for modbus_poll.

Infrastructure supplied by the host application (the register transport)
implements these contracts.
"""

from .i_register_transport import IRegisterTransport

__all__ = ["IRegisterTransport"]
