"""Domain layer for modbus_poll.

This layer contains:
- Exceptions: the decoder, transport and supervisor error taxonomy
- Value Objects: register windows and field requests
- Strategies: numeric codecs selected by width and signedness
- Services: the register window decoder
- Interfaces: the register transport port

The domain layer has no dependencies outside the Python standard library.
"""
