"""Byte transports for the printer session."""

from typing import Any

from thermal_printer.transports.memory import MemoryTransport

__all__ = [
    "MemoryTransport",
    "SerialTransport",
]


def __getattr__(name: str) -> Any:
    # pyserial is loaded on first use of SerialTransport.
    if name == "SerialTransport":
        from thermal_printer.transports.serial_port import SerialTransport

        return SerialTransport
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
