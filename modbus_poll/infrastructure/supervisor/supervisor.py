"""Self-healing setup / loop / teardown supervisor.

The supervisor drives an indefinite cycle:

    INIT      call setup(); on failure log and retry, on success go RUNNING
    RUNNING   call loop(state) repeatedly; on failure log and go TEARDOWN
    TEARDOWN  call teardown(state) once, log any failure, go back to INIT

Every failure inside the cycle is logged and absorbed. Only cancellation
(or another BaseException such as KeyboardInterrupt) ends run_forever,
unless an optional stop event is supplied.

Example:
    >>> async def setup():
    ...     return await open_client()
    >>> async def loop(client):
    ...     await query_window(client, 1, 0x0100, 0x0110, parse_status)
    >>> async def teardown(client):
    ...     await client.close()
    >>> await run_forever(setup, loop, teardown)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar, Union

from ...domain.exceptions import (
    LoopError,
    ModbusPollError,
    SetupError,
    SupervisorError,
    TeardownError,
)
from ...domain.helpers.async_helpers import maybe_await
from ..state_machines import SupervisorEvent, SupervisorPhase, SupervisorStateMachine
from .retry_policy import RetryPolicy

_LOGGER = logging.getLogger(__name__)

StateT = TypeVar("StateT")

SetupFn = Callable[[], Union[StateT, Awaitable[StateT]]]
StepFn = Callable[[StateT], Union[None, Awaitable[None]]]

_NO_STATE = object()


class Supervisor(Generic[StateT]):
    """Runs a setup / loop / teardown cycle forever.

    At most one of setup, loop and teardown is active at any time. The
    state returned by setup belongs to the supervisor for exactly one
    cycle and is dropped after teardown.

    Attributes:
        _setup: Produces a fresh state
        _loop: Performs one unit of work with the state
        _teardown: Releases the state after a loop failure
        _retry_policy: Delay between consecutive failed setups
        _stop_event: Optional event that ends run_forever when set

    Example:
        >>> supervisor = Supervisor(setup, loop, teardown, name="unit-1")
        >>> task = asyncio.create_task(supervisor.run_forever())
        >>> supervisor.get_stats()["phase"]
        'RUNNING'
    """

    def __init__(
        self,
        setup: SetupFn,
        loop: StepFn,
        teardown: StepFn,
        retry_policy: Optional[RetryPolicy] = None,
        logger: Optional[logging.Logger] = None,
        stop_event: Optional[asyncio.Event] = None,
        name: str = "supervisor",
    ):
        """Initialize supervisor.

        Args:
            setup: Callable returning the cycle state (sync or async)
            loop: Callable doing one poll with the state (sync or async)
            teardown: Callable releasing the state (sync or async)
            retry_policy: Setup retry pacing (default: immediate retry)
            logger: Logger for absorbed errors (default: module logger)
            stop_event: Event checked before each setup and loop call
            name: Label used in log messages
        """
        self._setup = setup
        self._loop = loop
        self._teardown = teardown
        self._retry_policy = retry_policy or RetryPolicy.immediate()
        self._logger = logger or _LOGGER
        self._stop_event = stop_event
        self._name = name

        self._state_machine = SupervisorStateMachine(self._logger)
        self._state_machine.on_phase(SupervisorPhase.RUNNING, self._on_running)

        # Metrics tracking
        self._consecutive_setup_failures = 0
        self._setup_failures = 0
        self._loop_failures = 0
        self._teardown_failures = 0
        self._cycles = 0
        self._loop_iterations = 0
        self._last_error: Optional[SupervisorError] = None

    def _on_running(self):
        """Callback when a setup succeeded."""
        self._logger.info("[%s] Setup complete, polling", self._name)

    @property
    def phase(self) -> SupervisorPhase:
        """Current supervisor phase."""
        return self._state_machine.phase

    @property
    def last_error(self) -> Optional[SupervisorError]:
        """Most recent absorbed error, if any."""
        return self._last_error

    def _stop_requested(self) -> bool:
        return self._stop_event is not None and self._stop_event.is_set()

    async def run_forever(self) -> None:
        """Run the cycle until cancelled (or until the stop event is set).

        Never raises for failures of setup, loop or teardown.
        """
        self._logger.debug("[%s] Supervisor started", self._name)
        while not self._stop_requested():
            state = await self._run_setup()
            if state is _NO_STATE:
                continue

            loop_failed = await self._run_loop(state)
            if loop_failed:
                self._state_machine.transition(SupervisorEvent.LOOP_FAILED)
            else:
                # Stop requested while running: release the live state
                self._state_machine.force_phase(SupervisorPhase.TEARDOWN)
            await self._run_teardown(state)

        self._logger.debug("[%s] Supervisor stopped", self._name)

    async def _run_setup(self) -> Any:
        """Call setup once, pacing retries by the retry policy.

        Returns:
            The new state, or _NO_STATE if setup failed or a stop was requested
        """
        delay = self._retry_policy.delay_for(self._consecutive_setup_failures)
        if delay > 0:
            self._logger.debug(
                "[%s] Waiting %.1fs before setup retry (failures: %d)",
                self._name,
                delay,
                self._consecutive_setup_failures,
            )
        # Always yield so a failing synchronous setup cannot starve the event loop
        await asyncio.sleep(delay)
        if self._stop_requested():
            return _NO_STATE

        try:
            state = await maybe_await(self._setup())
        except Exception as err:
            self._consecutive_setup_failures += 1
            self._setup_failures += 1
            self._absorb(SetupError(f"Error in setup: {err}", self._cycles), err)
            self._state_machine.transition(SupervisorEvent.SETUP_FAILED)
            return _NO_STATE

        self._consecutive_setup_failures = 0
        self._state_machine.transition(SupervisorEvent.SETUP_SUCCESS)
        return state

    async def _run_loop(self, state: StateT) -> bool:
        """Call loop repeatedly until it fails or a stop is requested.

        Returns:
            True if the loop failed, False if it ended on a stop request
        """
        while not self._stop_requested():
            try:
                await maybe_await(self._loop(state))
            except Exception as err:
                self._loop_failures += 1
                self._absorb(LoopError(f"Error in loop: {err}", self._cycles), err)
                return True
            self._loop_iterations += 1
            self._state_machine.transition(SupervisorEvent.LOOP_SUCCESS)
            # Yield between iterations so sibling supervisors get scheduled
            await asyncio.sleep(0)
        return False

    async def _run_teardown(self, state: StateT) -> None:
        """Call teardown exactly once; a failure is logged and absorbed."""
        try:
            await maybe_await(self._teardown(state))
        except Exception as err:
            self._teardown_failures += 1
            self._absorb(
                TeardownError(f"Error in teardown: {err}", self._cycles), err
            )
        finally:
            self._cycles += 1
            self._state_machine.transition(SupervisorEvent.TEARDOWN_DONE)

    def _absorb(self, error: SupervisorError, cause: Exception) -> None:
        """Log a cycle failure without letting it escape."""
        error.__cause__ = cause
        self._last_error = error

        if isinstance(cause, (ModbusPollError, asyncio.TimeoutError)):
            # Expected operational failure - log without stack trace
            self._logger.error("[%s] %s", self._name, error)
        else:
            self._logger.error(
                "[%s] %s",
                self._name,
                error,
                exc_info=(type(cause), cause, cause.__traceback__),
            )

    def get_stats(self) -> Dict[str, Any]:
        """Get supervisor counters.

        Returns:
            Dictionary with phase, failure counters, completed cycles and
            successful loop iterations
        """
        return {
            "name": self._name,
            "phase": self._state_machine.phase.name,
            "setup_failures": self._setup_failures,
            "consecutive_setup_failures": self._consecutive_setup_failures,
            "loop_failures": self._loop_failures,
            "teardown_failures": self._teardown_failures,
            "cycles": self._cycles,
            "loop_iterations": self._loop_iterations,
            "last_error": str(self._last_error) if self._last_error else None,
        }

    def __repr__(self) -> str:
        """Developer representation."""
        return f"Supervisor(name={self._name!r}, phase={self.phase.name})"


async def run_forever(
    setup: SetupFn,
    loop: StepFn,
    teardown: StepFn,
    *,
    retry_policy: Optional[RetryPolicy] = None,
    logger: Optional[logging.Logger] = None,
    stop_event: Optional[asyncio.Event] = None,
    name: str = "supervisor",
) -> None:
    """Run a setup / loop / teardown cycle forever.

    Convenience wrapper around Supervisor; see Supervisor for arguments.
    """
    supervisor = Supervisor(
        setup,
        loop,
        teardown,
        retry_policy=retry_policy,
        logger=logger,
        stop_event=stop_event,
        name=name,
    )
    await supervisor.run_forever()
