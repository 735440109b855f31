"""Tests for Supervisor.

The production contract never returns, so every test drives the supervisor
with a stop event that the scripted callbacks set once enough of the cycle
has been observed.
"""

import asyncio
import logging

import pytest
from unittest.mock import AsyncMock, patch

from modbus_poll.domain.exceptions import (
    LoopError,
    SetupError,
    TeardownError,
    TransportError,
)
from modbus_poll.infrastructure.state_machines import SupervisorPhase
from modbus_poll.infrastructure.supervisor import RetryPolicy, Supervisor, run_forever


class ScriptedCycle:
    """Scripted setup / loop / teardown recording every call.

    Attributes:
        events: Ordered call log ("setup", "loop", "teardown")
        stop: Event handed to the supervisor
    """

    def __init__(
        self,
        setup_failures: int = 0,
        fail_loop_on_call: int = 0,
        stop_after_loops: int = 0,
        stop_after_teardowns: int = 0,
        teardown_error: Exception = None,
        setup_error: Exception = None,
        failing_setup_calls: tuple = (),
    ):
        self.events = []
        self.stop = asyncio.Event()
        self.states = []
        self._setup_failures = setup_failures
        self._failing_setup_calls = failing_setup_calls
        self._fail_loop_on_call = fail_loop_on_call
        self._stop_after_loops = stop_after_loops
        self._stop_after_teardowns = stop_after_teardowns
        self._teardown_error = teardown_error
        self._setup_error = setup_error or RuntimeError("device not reachable")
        self._active = 0
        self.max_active = 0

    def _enter(self, name):
        self.events.append(name)
        self._active += 1
        self.max_active = max(self.max_active, self._active)

    def _leave(self):
        self._active -= 1

    def count(self, name):
        return self.events.count(name)

    async def setup(self):
        self._enter("setup")
        try:
            await asyncio.sleep(0)
            attempt = self.count("setup")
            if attempt <= self._setup_failures or attempt in self._failing_setup_calls:
                raise self._setup_error
            state = {"id": self.count("setup"), "loop_calls": 0, "closed": False}
            self.states.append(state)
            return state
        finally:
            self._leave()

    async def loop(self, state):
        self._enter("loop")
        try:
            await asyncio.sleep(0)
            assert not state["closed"]
            state["loop_calls"] += 1
            if self._stop_after_loops and self.count("loop") >= self._stop_after_loops:
                self.stop.set()
            if state["loop_calls"] == self._fail_loop_on_call:
                raise TransportError(f"poll {state['loop_calls']} failed")
        finally:
            self._leave()

    async def teardown(self, state):
        self._enter("teardown")
        try:
            await asyncio.sleep(0)
            state["closed"] = True
            if (
                self._stop_after_teardowns
                and self.count("teardown") >= self._stop_after_teardowns
            ):
                self.stop.set()
            if self._teardown_error is not None:
                raise self._teardown_error
        finally:
            self._leave()

    def supervisor(self, **kwargs):
        return Supervisor(
            self.setup, self.loop, self.teardown, stop_event=self.stop, **kwargs
        )


class TestSupervisorLiveness:
    """setup is retried until it succeeds, then loop runs."""

    @pytest.mark.asyncio
    async def test_loop_starts_after_third_setup(self):
        """Test two failed setups are retried before polling starts."""
        cycle = ScriptedCycle(setup_failures=2, stop_after_loops=10)

        await asyncio.wait_for(cycle.supervisor().run_forever(), timeout=5)

        assert cycle.events[:4] == ["setup", "setup", "setup", "loop"]
        assert cycle.count("setup") == 3
        assert cycle.count("loop") == 10

    @pytest.mark.asyncio
    async def test_no_setup_while_loop_succeeds(self):
        """Test a healthy loop never triggers another setup."""
        cycle = ScriptedCycle(stop_after_loops=50)

        await asyncio.wait_for(cycle.supervisor().run_forever(), timeout=5)

        assert cycle.count("setup") == 1
        assert cycle.events[1:51] == ["loop"] * 50

    @pytest.mark.asyncio
    async def test_stop_releases_live_state(self):
        """Test stopping while running tears the state down."""
        cycle = ScriptedCycle(stop_after_loops=3)

        await asyncio.wait_for(cycle.supervisor().run_forever(), timeout=5)

        assert cycle.events[-1] == "teardown"
        assert cycle.states[0]["closed"]

    @pytest.mark.asyncio
    async def test_stop_before_start(self):
        """Test nothing runs when already stopped."""
        cycle = ScriptedCycle()
        cycle.stop.set()

        await cycle.supervisor().run_forever()

        assert cycle.events == []


class TestSupervisorRecovery:
    """A failing loop leads to exactly one teardown, then a fresh setup."""

    @pytest.mark.asyncio
    async def test_teardown_once_between_cycles(self):
        """Test loop failing on its 5th call, over three forced cycles."""
        cycle = ScriptedCycle(fail_loop_on_call=5, stop_after_teardowns=3)

        await asyncio.wait_for(cycle.supervisor().run_forever(), timeout=5)

        one_cycle = ["setup"] + ["loop"] * 5 + ["teardown"]
        assert cycle.events == one_cycle * 3

    @pytest.mark.asyncio
    async def test_state_replaced_each_cycle(self):
        """Test every cycle gets its own state and tears down that state."""
        cycle = ScriptedCycle(fail_loop_on_call=2, stop_after_teardowns=3)

        await asyncio.wait_for(cycle.supervisor().run_forever(), timeout=5)

        assert [state["id"] for state in cycle.states] == [1, 2, 3]
        assert all(state["closed"] for state in cycle.states)
        assert all(state["loop_calls"] == 2 for state in cycle.states)

    @pytest.mark.asyncio
    async def test_teardown_failure_absorbed(self):
        """Test a failing teardown still leads to a new setup."""
        cycle = ScriptedCycle(
            fail_loop_on_call=1,
            stop_after_teardowns=2,
            teardown_error=RuntimeError("close failed"),
        )
        supervisor = cycle.supervisor()

        await asyncio.wait_for(supervisor.run_forever(), timeout=5)

        assert cycle.events == ["setup", "loop", "teardown"] * 2
        stats = supervisor.get_stats()
        assert stats["teardown_failures"] == 2
        assert stats["cycles"] == 2
        assert isinstance(supervisor.last_error, TeardownError)

    @pytest.mark.asyncio
    async def test_calls_never_overlap(self):
        """Test at most one of setup, loop, teardown is active."""
        cycle = ScriptedCycle(
            setup_failures=1, fail_loop_on_call=3, stop_after_teardowns=4
        )

        await asyncio.wait_for(cycle.supervisor().run_forever(), timeout=5)

        assert cycle.max_active == 1


class TestSupervisorErrors:
    """Absorbed errors are categorized and logged."""

    @pytest.mark.asyncio
    async def test_setup_error_logged(self, test_logger, caplog):
        """Test setup failures are logged on the injected logger."""
        cycle = ScriptedCycle(setup_failures=1, stop_after_loops=1)

        with caplog.at_level(logging.ERROR, logger=test_logger.name):
            await cycle.supervisor(logger=test_logger, name="unit-1").run_forever()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].name == test_logger.name
        assert "[unit-1] Error in setup: device not reachable" in errors[0].getMessage()
        # Unexpected exception type: traceback attached
        assert errors[0].exc_info is not None

    @pytest.mark.asyncio
    async def test_expected_errors_logged_without_traceback(self, test_logger, caplog):
        """Test transport failures in loop are logged without traceback."""
        cycle = ScriptedCycle(fail_loop_on_call=1, stop_after_teardowns=1)

        with caplog.at_level(logging.ERROR, logger=test_logger.name):
            await cycle.supervisor(logger=test_logger).run_forever()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Error in loop: poll 1 failed" in errors[0].getMessage()
        assert errors[0].exc_info is None

    @pytest.mark.asyncio
    async def test_errors_wrap_original(self):
        """Test absorbed errors keep the original as __cause__."""
        original = RuntimeError("port busy")
        cycle = ScriptedCycle(setup_failures=1, setup_error=original, stop_after_loops=1)
        supervisor = cycle.supervisor()

        with patch.object(
            supervisor, "_absorb", wraps=supervisor._absorb
        ) as absorb:
            await supervisor.run_forever()
            errors = [call.args[0] for call in absorb.call_args_list]

        assert len(errors) == 1
        assert isinstance(errors[0], SetupError)
        assert errors[0].__cause__ is original
        assert errors[0].phase == "INIT"

    @pytest.mark.asyncio
    async def test_loop_error_category(self):
        """Test loop failures are recorded as LoopError."""
        cycle = ScriptedCycle(fail_loop_on_call=1, stop_after_loops=1)
        supervisor = cycle.supervisor()

        await supervisor.run_forever()

        assert isinstance(supervisor.last_error, LoopError)
        assert isinstance(supervisor.last_error.__cause__, TransportError)


class TestSupervisorCallables:
    """setup / loop / teardown may be plain functions."""

    @pytest.mark.asyncio
    async def test_sync_callables(self):
        """Test synchronous callbacks are treated as resolved results."""
        stop = asyncio.Event()
        calls = []

        def setup():
            calls.append("setup")
            return "client"

        def loop(state):
            calls.append(("loop", state))
            if len(calls) == 3:
                raise TransportError("lost")

        def teardown(state):
            calls.append(("teardown", state))
            stop.set()

        await asyncio.wait_for(
            run_forever(setup, loop, teardown, stop_event=stop), timeout=5
        )

        assert calls == [
            "setup",
            ("loop", "client"),
            ("loop", "client"),
            ("teardown", "client"),
        ]

    @pytest.mark.asyncio
    async def test_none_state_is_valid(self):
        """Test a setup returning None still starts the loop."""
        stop = asyncio.Event()
        loop = AsyncMock(side_effect=lambda state: stop.set())
        teardown = AsyncMock()

        await run_forever(AsyncMock(return_value=None), loop, teardown, stop_event=stop)

        loop.assert_awaited_once_with(None)
        teardown.assert_awaited_once_with(None)


class TestSupervisorBackoff:
    """Setup retries follow the retry policy."""

    @pytest.mark.asyncio
    async def test_immediate_retry_by_default(self):
        """Test the default policy never waits."""
        cycle = ScriptedCycle(setup_failures=3, stop_after_loops=1)

        with patch(
            "modbus_poll.infrastructure.supervisor.supervisor.asyncio.sleep",
            new=AsyncMock(),
        ) as sleep:
            await cycle.supervisor().run_forever()

        assert all(call.args[0] == 0 for call in sleep.await_args_list)

    @pytest.mark.asyncio
    async def test_exponential_backoff(self):
        """Test delays grow and are capped at max_backoff."""
        cycle = ScriptedCycle(setup_failures=4, fail_loop_on_call=1, stop_after_teardowns=1)
        policy = RetryPolicy(initial_backoff=1.0, max_backoff=3.0, multiplier=2.0)

        with patch(
            "modbus_poll.infrastructure.supervisor.supervisor.asyncio.sleep",
            new=AsyncMock(),
        ) as sleep:
            await cycle.supervisor(retry_policy=policy).run_forever()

        delays = [call.args[0] for call in sleep.await_args_list if call.args[0] > 0]
        assert delays == [1.0, 2.0, 3.0, 3.0]
        assert cycle.count("setup") == 5

    @pytest.mark.asyncio
    async def test_backoff_restarts_after_successful_setup(self):
        """Test the first retry after a later cycle waits initial_backoff again."""
        cycle = ScriptedCycle(
            setup_failures=2,
            failing_setup_calls=(4,),
            fail_loop_on_call=1,
            stop_after_teardowns=2,
        )
        policy = RetryPolicy(initial_backoff=1.0, max_backoff=10.0, multiplier=2.0)

        with patch(
            "modbus_poll.infrastructure.supervisor.supervisor.asyncio.sleep",
            new=AsyncMock(),
        ) as sleep:
            await cycle.supervisor(retry_policy=policy).run_forever()

        delays = [call.args[0] for call in sleep.await_args_list if call.args[0] > 0]
        # Setups 1-3 then, after the first teardown, setups 4-5
        assert delays == [1.0, 2.0, 1.0]
        assert cycle.events == [
            "setup", "setup", "setup", "loop", "teardown",
            "setup", "setup", "loop", "teardown",
        ]


class TestSupervisorLifecycle:
    """Cancellation, stats and independence."""

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        """Test external cancellation ends run_forever."""
        cycle = ScriptedCycle()
        task = asyncio.create_task(cycle.supervisor().run_forever())

        while cycle.count("loop") < 3:
            await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_stats(self):
        """Test counters after a scripted run."""
        cycle = ScriptedCycle(
            setup_failures=2, fail_loop_on_call=4, stop_after_teardowns=2
        )
        supervisor = cycle.supervisor(name="meter")

        await asyncio.wait_for(supervisor.run_forever(), timeout=5)

        stats = supervisor.get_stats()
        assert stats["name"] == "meter"
        assert stats["setup_failures"] == 2
        assert stats["consecutive_setup_failures"] == 0
        assert stats["loop_failures"] == 2
        assert stats["teardown_failures"] == 0
        assert stats["cycles"] == 2
        assert stats["loop_iterations"] == 6
        assert stats["phase"] == "INIT"
        assert "poll 4 failed" in stats["last_error"]
        assert supervisor.phase == SupervisorPhase.INIT

    @pytest.mark.asyncio
    async def test_independent_supervisors(self):
        """Test two supervisors run concurrently without interfering."""
        first = ScriptedCycle(fail_loop_on_call=2, stop_after_teardowns=3)
        second = ScriptedCycle(setup_failures=1, stop_after_loops=20)

        await asyncio.wait_for(
            asyncio.gather(
                first.supervisor(name="first").run_forever(),
                second.supervisor(name="second").run_forever(),
            ),
            timeout=5,
        )

        assert first.count("teardown") == 3
        assert second.count("setup") == 2
        assert second.count("loop") == 20
        assert first.max_active == 1
        assert second.max_active == 1

    def test_repr(self):
        """Test developer representation."""
        supervisor = Supervisor(AsyncMock(), AsyncMock(), AsyncMock(), name="x")
        assert repr(supervisor) == "Supervisor(name='x', phase=INIT)"
