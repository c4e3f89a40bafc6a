"""
Raster bit-image commands for 384-dot thermal printers.

Contains the raster header commands and the pixel packing routine that turns
a brightness image into printer-native rows.

Reference: ESC/POS Application Programming Guide, GS v 0
           CSN-A2 firmware manual, DC2 v (legacy bitmap command)
Head width: 384 dots = 48 bytes per raster row

Data Format:
    Each row is 48 bytes, left to right. Inside a byte, bit n holds pixel
    8*x + n (LSB first). Value 1 = dark dot, 0 = paper.

        Bit 0 (LSB) ═══► leftmost pixel of the byte
        Bit 7 (MSB) ═══► rightmost pixel of the byte

    A pixel is dark when its brightness is below 0.5.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, List

from thermal_printer.exceptions import InvalidImageDimensionsError
from thermal_printer.protocols import RasterImage

__all__ = [
    "RASTER_WIDTH_DOTS",
    "RASTER_ROW_BYTES",
    "MAX_RASTER_HEIGHT",
    "DARK_THRESHOLD",
    "RasterCommand",
    "validate_raster_dimensions",
    "pack_raster_row",
    "pack_raster_rows",
    "raster_header",
    "encode_raster",
]

# =============================================================================
# RASTER GEOMETRY
# =============================================================================

RASTER_WIDTH_DOTS: Final[int] = 384
"""Dots per raster row on a 58 mm head."""

RASTER_ROW_BYTES: Final[int] = RASTER_WIDTH_DOTS // 8
"""Bytes per raster row (48)."""

MAX_RASTER_HEIGHT: Final[int] = 0xFFFF
"""Largest height the 16-bit height field can carry."""

DARK_THRESHOLD: Final[float] = 0.5
"""Pixels with brightness below this value are printed."""

# =============================================================================
# RASTER COMMANDS
# =============================================================================


class RasterCommand(Enum):
    """
    Header formats for raster bit images.

    Format: (prefix, header_length)
    """

    GS_V_0 = (b"\x1dv0", 8)
    """
    Print raster bit image.

    Command: GS v 0 m xL xH yL yH d1...dk
    Hex: 1D 76 30 m xL xH yL yH
    m = 0 (normal scale), xL xH = bytes per row, yL yH = rows
    """

    DC2_V = (b"\x12v", 4)
    """
    Print bitmap (legacy firmware command).

    Command: DC2 v nL nH d1...dk
    Hex: 12 76 nL nH
    nL nH = rows; row width is fixed at 48 bytes
    """

    def __init__(self, prefix: bytes, header_length: int) -> None:
        self.prefix = prefix
        self.header_length = header_length


# =============================================================================
# VALIDATION AND PACKING
# =============================================================================


def validate_raster_dimensions(width: int, height: int) -> None:
    """
    Check that an image fits the raster protocol.

    Raises:
        InvalidImageDimensionsError: If width is not 384 or height is
                                     negative or above 65535.
    """
    if width != RASTER_WIDTH_DOTS:
        raise InvalidImageDimensionsError(
            f"Image width must be {RASTER_WIDTH_DOTS} dots, got {width}"
        )
    if not (0 <= height <= MAX_RASTER_HEIGHT):
        raise InvalidImageDimensionsError(
            f"Image height must be 0-{MAX_RASTER_HEIGHT} rows, got {height}"
        )


def pack_raster_row(image: RasterImage, y: int) -> bytes:
    """
    Pack one image row into 48 printer bytes (LSB first, dark is 1).

    Args:
        image: Source image (width must already be validated).
        y: Row index.

    Returns:
        Packed row bytes.
    """
    row = bytearray(RASTER_ROW_BYTES)
    for x in range(RASTER_ROW_BYTES):
        value = 0
        for n in range(8):
            if image.brightness_at(x * 8 + n, y) < DARK_THRESHOLD:
                value |= 1 << n
        row[x] = value
    return bytes(row)


def pack_raster_rows(image: RasterImage) -> List[bytes]:
    """
    Validate an image and pack every row.

    Raises:
        InvalidImageDimensionsError: If the image does not fit the protocol.
    """
    validate_raster_dimensions(image.width, image.height)
    return [pack_raster_row(image, y) for y in range(image.height)]


def raster_header(height: int, command: RasterCommand = RasterCommand.GS_V_0) -> bytes:
    """
    Build the raster header for an image of the given height.

    The height is encoded little-endian: yL = height % 256, yH = height // 256.

    Args:
        height: Number of rows (0-65535).
        command: Header format.

    Returns:
        Header bytes (8 for GS v 0, 4 for DC2 v).

    Raises:
        InvalidImageDimensionsError: If height does not fit in 16 bits.

    Example:
        >>> raster_header(300)
        b'\\x1dv0\\x000\\x00,\\x01'
    """
    if not (0 <= height <= MAX_RASTER_HEIGHT):
        raise InvalidImageDimensionsError(
            f"Image height must be 0-{MAX_RASTER_HEIGHT} rows, got {height}"
        )

    y_low = height % 256
    y_high = height // 256

    if command is RasterCommand.GS_V_0:
        # m=0, then bytes per row as xL xH
        return command.prefix + bytes([0, RASTER_ROW_BYTES, 0, y_low, y_high])
    return command.prefix + bytes([y_low, y_high])


def encode_raster(
    image: RasterImage, command: RasterCommand = RasterCommand.GS_V_0
) -> bytes:
    """
    Generate the complete raster command for an image.

    Args:
        image: Source image, exactly 384 pixels wide.
        command: Header format.

    Returns:
        Header followed by height × 48 packed bytes.

    Raises:
        InvalidImageDimensionsError: If the image does not fit the protocol.
    """
    rows = pack_raster_rows(image)
    return raster_header(image.height, command) + b"".join(rows)
