# -*- coding: utf-8 -*-
"""
Exception hierarchy for the thermal printer driver.

Every failure raised by the codec or the printer session derives from
ThermalPrinterError, so callers can catch the whole family at one place and
still branch on the narrow subclasses.

Guidelines:
- Raise before any byte is written whenever the failure can be detected
  up front (dimensions, barcode rules, codepage coverage).
- Keep messages operational: what was rejected and which limit applies.
- Argument range checks on single-byte parameters raise the built-in
  ValueError instead.
"""

from __future__ import annotations

from typing import Optional


class ThermalPrinterError(Exception):
    """Base exception for all printer driver failures."""

    def __init__(
        self, message: str = "", *, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.__cause__ = cause


class TransportError(ThermalPrinterError):
    """Raised when writing to or flushing the transport fails."""


class EncodingError(ThermalPrinterError):
    """Raised when text or barcode data has no representation in the active codepage."""


class InvalidImageDimensionsError(ThermalPrinterError):
    """Raised when a raster image is not 384 dots wide or taller than 65535 rows."""


class InvalidBarcodeSpecError(ThermalPrinterError):
    """Raised when a barcode payload violates the rules of its symbology."""


__all__ = [
    "ThermalPrinterError",
    "TransportError",
    "EncodingError",
    "InvalidImageDimensionsError",
    "InvalidBarcodeSpecError",
]
