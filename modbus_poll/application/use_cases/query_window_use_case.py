"""QueryWindowUseCase: fetch a register window and transform it.

This use case orchestrates one fetch-decode-transform operation:
1. Select the target unit on the shared transport
2. Read the contiguous register window
3. Wrap the bytes in a RegisterWindowDecoder
4. Hand the decoder to a caller-supplied transform and return its result
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, TypeVar, Union

from ...const import MAX_REGISTER
from ...domain.exceptions import TransportError
from ...domain.helpers.address_helpers import calculate_register_count, format_address
from ...domain.helpers.async_helpers import maybe_await
from ...domain.helpers.validators import ValidationError, validate_register_address
from ...domain.interfaces import IRegisterTransport
from ...domain.services import RegisterWindowDecoder
from ...infrastructure.decorators import handle_transport_errors

_LOGGER = logging.getLogger(__name__)

OutT = TypeVar("OutT")

Transform = Callable[[RegisterWindowDecoder], Union[OutT, Awaitable[OutT]]]


class QueryWindowUseCase:
    """Use case for reading one register window into a domain result.

    Dependencies (injected):
    - transport: Register-read capability shared by all units on the bus
    - logger: Logger for transport and decode failures

    Transport failures (TransportError, asyncio.TimeoutError) and decoder
    failures propagate unchanged to the caller after being logged.

    Example:
        >>> use_case = QueryWindowUseCase(transport)
        >>> serial = await use_case.execute(
        ...     1, 0x0100, 0x0110, lambda d: d.ascii_at(0x0100, 8)
        ... )
    """

    def __init__(
        self,
        transport: IRegisterTransport,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize use case with dependencies.

        Args:
            transport: Register transport
            logger: Logger for failures (default: module logger)
        """
        self._transport = transport
        self._logger = logger or _LOGGER

    @handle_transport_errors("Query window")
    async def execute(
        self,
        device_id: int,
        start_register: int,
        end_register: int,
        transform: Transform,
    ):
        """Fetch registers [start_register, end_register) and transform them.

        Args:
            device_id: Unit to address
            start_register: First register of the window
            end_register: First register after the window (exclusive)
            transform: Callable receiving the decoder; may be async

        Returns:
            Whatever transform returns (awaited if awaitable)

        Raises:
            ValidationError: If the register range is invalid
            TransportError: If the transport read fails or returns a short window
            DecodeError: If the transform reads outside the window
        """
        count = self._validate_range(start_register, end_register)

        self._transport.set_target(device_id)
        raw = await self._transport.read_registers(start_register, count)
        if len(raw) != count * 2:
            raise TransportError(
                f"Unit {device_id} returned {len(raw)} bytes for {count} registers "
                f"at {format_address(start_register)}"
            )

        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "Read unit %d registers %s-%s: %s",
                device_id,
                format_address(start_register),
                format_address(end_register),
                bytes(raw).hex(),
            )

        decoder = RegisterWindowDecoder(start_register, end_register, raw)
        return await maybe_await(transform(decoder))

    @staticmethod
    def _validate_range(start_register: int, end_register: int) -> int:
        """Validate the requested window and return its register count."""
        validate_register_address(start_register, "start_register")
        count = calculate_register_count(start_register, end_register)
        if count < 1:
            raise ValidationError(
                f"Register count must be >= 1, got {count} "
                f"({format_address(start_register)}-{format_address(end_register)})"
            )
        # Per-request size limits belong to the transport
        if end_register > MAX_REGISTER + 1:
            raise ValidationError(
                f"Window end {format_address(end_register)} exceeds register space"
            )
        return count


async def query_window(
    transport: IRegisterTransport,
    device_id: int,
    start_register: int,
    end_register: int,
    transform: Transform,
    logger: Optional[logging.Logger] = None,
):
    """Fetch a register window and return transform(decoder).

    Functional form of QueryWindowUseCase.execute.

    Example:
        >>> async def parse(decoder):
        ...     return decoder.number_at(0x0100, 1, "unsigned")
        >>> soc = await query_window(transport, 1, 0x0100, 0x0101, parse)
    """
    return await QueryWindowUseCase(transport, logger).execute(
        device_id, start_register, end_register, transform
    )
