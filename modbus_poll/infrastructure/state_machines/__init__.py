"""State machines for managing phase transitions."""

from .supervisor_state_machine import (
    SupervisorEvent,
    SupervisorPhase,
    SupervisorStateMachine,
)

__all__ = [
    "SupervisorStateMachine",
    "SupervisorPhase",
    "SupervisorEvent",
]
