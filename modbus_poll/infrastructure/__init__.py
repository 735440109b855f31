"""Infrastructure layer for modbus_poll.

The infrastructure layer contains:
- Decorators: standardized transport error logging
- State machines: the supervisor phase machine
- Supervisor: the self-healing setup / loop / teardown runner

This layer depends on the domain layer; the domain layer does NOT depend
on infrastructure.
"""
