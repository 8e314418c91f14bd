"""
Pytest configuration for thermal printer tests.

Provides an in-memory transport and a printer session whose start-up
commands have already been cleared.
"""

import pytest

from thermalpos import BufferTransport, ThermalPrinter


@pytest.fixture
def transport():
    """Record everything the printer writes."""
    return BufferTransport()


@pytest.fixture
def printer(transport):
    """Printer session with the initialization bytes discarded."""
    p = ThermalPrinter(transport)
    transport.clear()
    return p


@pytest.fixture
def legacy_printer(transport):
    """Non-strict session that drops invalid requests silently."""
    p = ThermalPrinter(transport, strict=False)
    transport.clear()
    return p
