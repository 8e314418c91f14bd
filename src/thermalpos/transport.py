"""
Byte transports for the printer.

The encoder only needs two blocking operations: write bytes, and wait.
SerialTransport drives a real printer through pyserial; BufferTransport
records everything in memory for tests and dry runs.
"""

import logging
import time
from typing import Optional, Protocol

import serial

from .errors import TransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """What the printer session needs from a transport."""

    def write(self, data: bytes) -> Optional[bool]:
        """Send bytes. Return False or raise TransportError on failure."""
        ...

    def sleep(self, milliseconds: float) -> None:
        """Block for the given time."""
        ...


class SerialTransport:
    """Serial port connection to the printer."""

    DEFAULT_BAUDRATE = 9600

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = 1.0,
        dsrdtr: bool = False,
    ):
        """
        Args:
            port: Device path (e.g. /dev/serial0, /dev/ttyUSB0, COM3)
            baudrate: Line speed; most TTL thermal printers ship at 9600 or 19200
            timeout: Write timeout in seconds
            dsrdtr: Enable DSR/DTR hardware flow control
        """
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.dsrdtr = dsrdtr
        self.serial: Optional[serial.Serial] = None

    def open(self) -> None:
        """
        Open the serial port.

        Raises:
            TransportError: If the port cannot be opened
        """
        if self.is_connected:
            return
        try:
            self.serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                write_timeout=self.timeout,
                dsrdtr=self.dsrdtr,
            )
        except serial.SerialException as e:
            raise TransportError(f"Cannot open {self.port}: {e}") from e
        logger.info("Opened %s at %d baud", self.port, self.baudrate)

    def close(self) -> None:
        """Close the serial port."""
        if self.serial is not None:
            try:
                self.serial.flush()
            finally:
                self.serial.close()
                self.serial = None
            logger.info("Closed %s", self.port)

    def write(self, data: bytes) -> bool:
        """
        Write data to the printer.

        Raises:
            TransportError: If the port is closed or the write fails
        """
        if not self.is_connected:
            raise TransportError(f"Port {self.port} is not open")
        try:
            written = self.serial.write(data)
        except serial.SerialException as e:
            raise TransportError(f"Write to {self.port} failed: {e}") from e
        if written is not None and written != len(data):
            raise TransportError(
                f"Short write to {self.port}: {written} of {len(data)} bytes"
            )
        return True

    def sleep(self, milliseconds: float) -> None:
        """Wait for the printer to catch up."""
        if not self.is_connected:
            raise TransportError(f"Port {self.port} is not open")
        if milliseconds > 0:
            self.serial.flush()
            time.sleep(milliseconds / 1000.0)

    @property
    def is_connected(self) -> bool:
        """Check if the port is open."""
        return self.serial is not None and self.serial.is_open

    def __enter__(self) -> "SerialTransport":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class BufferTransport:
    """In-memory transport that records writes and sleeps."""

    def __init__(self):
        self.writes: list[bytes] = []
        self.sleeps: list[float] = []

    def write(self, data: bytes) -> bool:
        self.writes.append(bytes(data))
        return True

    def sleep(self, milliseconds: float) -> None:
        self.sleeps.append(milliseconds)

    @property
    def data(self) -> bytes:
        """Everything written so far, concatenated."""
        return b"".join(self.writes)

    def clear(self) -> None:
        """Forget recorded writes and sleeps."""
        self.writes.clear()
        self.sleeps.clear()
