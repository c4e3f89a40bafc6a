"""Printer session driving a transport with encoded commands."""

from thermal_printer.printer.session import ThermalPrinter

__all__ = [
    "ThermalPrinter",
]
