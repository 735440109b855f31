"""Application layer for modbus_poll.

Use cases orchestrate the register transport and the domain decoder.
"""
