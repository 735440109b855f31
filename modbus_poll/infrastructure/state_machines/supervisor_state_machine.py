"""Supervisor state machine for explicit phase management."""

import logging
from enum import Enum, auto
from typing import Callable, Dict, Optional

_LOGGER = logging.getLogger(__name__)


class SupervisorPhase(Enum):
    """Supervisor phases. There is no terminal phase."""

    INIT = auto()
    RUNNING = auto()
    TEARDOWN = auto()


class SupervisorEvent(Enum):
    """Events that trigger phase transitions."""

    SETUP_SUCCESS = auto()
    SETUP_FAILED = auto()
    LOOP_SUCCESS = auto()
    LOOP_FAILED = auto()
    TEARDOWN_DONE = auto()


class SupervisorStateMachine:
    """State machine for the setup / loop / teardown cycle.

    Valid transitions:
        INIT -> RUNNING (on SETUP_SUCCESS)
        INIT -> INIT (on SETUP_FAILED)
        RUNNING -> RUNNING (on LOOP_SUCCESS)
        RUNNING -> TEARDOWN (on LOOP_FAILED)
        TEARDOWN -> INIT (on TEARDOWN_DONE, whether teardown succeeded or not)

    Example:
        >>> sm = SupervisorStateMachine()
        >>> sm.transition(SupervisorEvent.SETUP_SUCCESS)
        True
        >>> sm.phase
        <SupervisorPhase.RUNNING: 2>
    """

    _TRANSITIONS = {
        (SupervisorPhase.INIT, SupervisorEvent.SETUP_SUCCESS): SupervisorPhase.RUNNING,
        (SupervisorPhase.INIT, SupervisorEvent.SETUP_FAILED): SupervisorPhase.INIT,
        (SupervisorPhase.RUNNING, SupervisorEvent.LOOP_SUCCESS): SupervisorPhase.RUNNING,
        (SupervisorPhase.RUNNING, SupervisorEvent.LOOP_FAILED): SupervisorPhase.TEARDOWN,
        (SupervisorPhase.TEARDOWN, SupervisorEvent.TEARDOWN_DONE): SupervisorPhase.INIT,
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize state machine in INIT phase."""
        self._phase = SupervisorPhase.INIT
        self._previous_phase: Optional[SupervisorPhase] = None
        self._logger = logger or _LOGGER

        # Callbacks for phase entry
        self._on_phase_change: Dict[SupervisorPhase, Callable] = {}

    @property
    def phase(self) -> SupervisorPhase:
        """Get current phase."""
        return self._phase

    @property
    def previous_phase(self) -> Optional[SupervisorPhase]:
        """Get phase before the last transition."""
        return self._previous_phase

    @property
    def is_running(self) -> bool:
        """Check if a setup state is live and being polled."""
        return self._phase == SupervisorPhase.RUNNING

    def transition(self, event: SupervisorEvent) -> bool:
        """Attempt phase transition.

        Args:
            event: Event triggering transition

        Returns:
            True if transition valid and executed, False otherwise
        """
        key = (self._phase, event)

        if key not in self._TRANSITIONS:
            self._logger.debug(
                "Invalid transition: %s + %s",
                self._phase.name,
                event.name,
            )
            return False

        self._change_phase(self._TRANSITIONS[key], event)
        return True

    def _change_phase(self, new_phase: SupervisorPhase, event: SupervisorEvent):
        """Change to new phase and invoke callbacks."""
        self._previous_phase = self._phase
        self._phase = new_phase

        # Self-transitions happen once per poll; keep them out of debug noise
        if new_phase == self._previous_phase:
            return

        self._logger.debug(
            "Supervisor phase: %s -> %s (event: %s)",
            self._previous_phase.name,
            new_phase.name,
            event.name,
        )

        if new_phase in self._on_phase_change:
            try:
                self._on_phase_change[new_phase]()
            except Exception as err:
                self._logger.error("Error in phase change callback: %s", err)

    def force_phase(self, phase: SupervisorPhase):
        """Force phase change (bypasses validation).

        Use sparingly - prefer transition() for normal flow.

        Args:
            phase: Phase to force
        """
        self._previous_phase = self._phase
        self._phase = phase
        self._logger.debug(
            "Force phase: %s -> %s", self._previous_phase.name, phase.name
        )

    def on_phase(self, phase: SupervisorPhase, callback: Callable):
        """Register callback for phase entry (not invoked on self-transitions).

        Args:
            phase: Phase to watch
            callback: Function to call on phase entry (no args)
        """
        self._on_phase_change[phase] = callback

    def reset(self):
        """Reset to initial INIT phase."""
        self._phase = SupervisorPhase.INIT
        self._previous_phase = None

    def __str__(self) -> str:
        """String representation."""
        return f"SupervisorStateMachine(phase={self._phase.name})"

    def __repr__(self) -> str:
        """Developer representation."""
        return (
            f"SupervisorStateMachine(phase={self._phase!r}, "
            f"previous={self._previous_phase!r})"
        )
