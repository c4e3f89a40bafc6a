"""
Serial (UART) transport for thermal printers.

Wraps a pyserial port configured for 8N1. The printer is write-only, so only
write/flush are used; opening and closing belong to the owner of the
transport.

Typical wiring:
- Raspberry Pi GPIO UART: /dev/serial0
- USB-serial adapters: /dev/ttyUSB0, COM3
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Optional, Type

import serial

from thermal_printer.exceptions import TransportError

logger = logging.getLogger(__name__)

__all__ = [
    "SerialTransport",
]


class SerialTransport:
    """
    Transport writing to a serial port through pyserial.

    Example:
        >>> with SerialTransport("/dev/serial0", baudrate=19200) as transport:
        ...     printer = ThermalPrinter(transport)
        ...     printer.write_line("Hello")
    """

    DEFAULT_PORT = "/dev/serial0"
    DEFAULT_BAUD = 19200

    def __init__(
        self,
        port: str = DEFAULT_PORT,
        baudrate: int = DEFAULT_BAUD,
        timeout: float = 2.0,
        *,
        open_port: bool = True,
    ) -> None:
        """
        Initialize the transport.

        Args:
            port: Serial port path.
            baudrate: Baud rate configured on the printer.
            timeout: Write timeout in seconds.
            open_port: Open the port immediately.

        Raises:
            TransportError: If the port cannot be opened.
        """
        self._port = port
        self._baudrate = baudrate
        self._timeout = timeout
        self._serial: Optional[serial.Serial] = None
        if open_port:
            self.open()

    @property
    def port(self) -> str:
        return self._port

    @property
    def baudrate(self) -> int:
        return self._baudrate

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        """Open the serial port (no-op when already open)."""
        if self.is_open:
            return
        try:
            self._serial = serial.Serial(
                port=self._port,
                baudrate=self._baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self._timeout,
                write_timeout=self._timeout,
            )
        except serial.SerialException as e:
            logger.error("Failed to open printer port %s: %s", self._port, e)
            raise TransportError(f"Cannot open serial port {self._port}", cause=e) from e
        logger.info("Printer port %s opened at %d baud", self._port, self._baudrate)

    def close(self) -> None:
        """Close the serial port."""
        if self._serial is not None:
            self._serial.close()
            self._serial = None
            logger.info("Printer port %s closed", self._port)

    def write(self, data: bytes) -> None:
        """
        Write bytes to the port.

        Raises:
            TransportError: If the port is closed or the write fails.
        """
        if self._serial is None:
            raise TransportError(f"Serial port {self._port} is not open")
        try:
            self._serial.write(data)
        except serial.SerialException as e:
            raise TransportError(
                f"Write of {len(data)} bytes to {self._port} failed", cause=e
            ) from e

    def flush(self) -> None:
        """Wait until all written bytes are transmitted."""
        if self._serial is None:
            raise TransportError(f"Serial port {self._port} is not open")
        try:
            self._serial.flush()
        except serial.SerialException as e:
            raise TransportError(f"Flush of {self._port} failed", cause=e) from e

    def __enter__(self) -> "SerialTransport":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"<SerialTransport port={self._port} baudrate={self._baudrate} {state}>"
