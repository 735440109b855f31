"""IRegisterTransport interface for the register-read capability."""

from abc import ABC, abstractmethod


class IRegisterTransport(ABC):
    """Interface for a holding register transport.

    The transport owns the wire protocol (RTU, TCP, BLE bridge, ...).
    modbus_poll only selects a unit and reads contiguous holding registers.

    Example:
        >>> transport.set_target(1)
        >>> data = await transport.read_registers(0x0100, 4)
        >>> assert len(data) == 8
    """

    @abstractmethod
    def set_target(self, device_id: int) -> None:
        """Select the addressed unit (slave id) for subsequent reads.

        Args:
            device_id: Modbus unit identifier
        """

    @abstractmethod
    async def read_registers(self, start_register: int, count: int) -> bytes:
        """Read contiguous holding registers.

        Args:
            start_register: First register to read
            count: Number of registers to read

        Returns:
            count * 2 bytes of register data, big-endian

        Raises:
            TransportError: If communication with the device fails
            asyncio.TimeoutError: If the device does not answer in time
        """
