# -*- coding: utf-8 -*-
"""
Dependency-injection Protocols for the printer driver: the byte transport
the session writes to and the image source the raster codec reads from.

Design notes:
- Protocols are @runtime_checkable to allow isinstance checks in tests.
- The transport is write-only; the printer never answers.
- Image access is a brightness lookup, so the codec does not depend on any
  image decoding library.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Write-only byte sink connected to the printer."""

    def write(self, data: bytes) -> None:
        """
        Send bytes to the printer.

        Raises:
            TransportError or OSError: If the bytes could not be written.
        """
        ...

    def flush(self) -> None:
        """Block until buffered bytes have been handed to the device."""
        ...


@runtime_checkable
class RasterImage(Protocol):
    """Decoded picture exposed as per-pixel brightness."""

    @property
    def width(self) -> int:
        """Width in pixels."""
        ...

    @property
    def height(self) -> int:
        """Height in pixels."""
        ...

    def brightness_at(self, x: int, y: int) -> float:
        """Brightness of pixel (x, y) in [0, 1]; 0 is black."""
        ...


__all__ = [
    "Transport",
    "RasterImage",
]
