"""
Line spacing commands for thermal printers.

Reference: ESC/POS Application Programming Guide, ESC 3
"""

from typing import Final

__all__ = [
    "DEFAULT_LINE_SPACING_DOTS",
    "set_line_spacing",
]

DEFAULT_LINE_SPACING_DOTS: Final[int] = 32
"""Line spacing after power-on or reset, in dots."""


def set_line_spacing(dots: int) -> bytes:
    """
    Set line spacing to n dots.

    Command: ESC 3 n
    Hex: 1B 33 n

    Args:
        dots: Line spacing in dots (0-255). Default after reset: 32.

    Returns:
        ESC/POS command bytes.

    Raises:
        ValueError: If dots is out of range.

    Example:
        >>> set_line_spacing(24)
        b'\\x1b3\\x18'
    """
    if not (0 <= dots <= 255):
        raise ValueError(f"Line spacing must be 0-255 dots, got {dots}")
    return b"\x1b3" + bytes([dots])
