"""Pytest configuration and fixtures for modbus_poll tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import modbus_poll
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

import pytest

from modbus_poll.domain.services import RegisterWindowDecoder
from tests.doubles.fake_register_transport import FakeRegisterTransport


@pytest.fixture
def scenario_bytes() -> bytes:
    """Window 100-104: 42, -1 (0xFFFF), "A" padded with NULs."""
    return bytes([0x00, 0x2A, 0xFF, 0xFF, 0x41, 0x00, 0x00, 0x00])


@pytest.fixture
def scenario_decoder(scenario_bytes) -> RegisterWindowDecoder:
    """Decoder over registers 100-104."""
    return RegisterWindowDecoder(100, 104, scenario_bytes)


@pytest.fixture
def fake_transport() -> FakeRegisterTransport:
    """Register transport backed by an in-memory register map."""
    return FakeRegisterTransport()


@pytest.fixture
def test_logger() -> logging.Logger:
    """Dedicated logger so tests can assert on injected logging."""
    logger = logging.getLogger("tests.modbus_poll")
    logger.setLevel(logging.DEBUG)
    return logger
