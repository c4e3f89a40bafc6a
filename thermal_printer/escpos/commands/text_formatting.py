"""
Text formatting ESC/POS commands for thermal printers.

Contains the combined print mode command (ESC !), emphasized mode,
white-on-black inversion and character size selection.

Reference: ESC/POS Application Programming Guide, Chapter "Character commands"
Compatibility: 58 mm serial thermal printers (CSN-A2 class firmware)
"""

from enum import IntFlag
from typing import Final

__all__ = [
    "PrintingStyle",
    "BIG_STYLE",
    "style_on",
    "style_off",
    "ESC_BOLD_ON",
    "ESC_BOLD_OFF",
    "GS_INVERT_ON",
    "GS_INVERT_OFF",
    "set_character_size",
]

# =============================================================================
# PRINT MODE FLAGS
# =============================================================================


class PrintingStyle(IntFlag):
    """
    Bits of the ESC ! print mode byte.

    Flags can be combined with ``|``; the integer value is sent as-is.
    Bit 0 (font B) and bit 7 (underline) are not used by this driver.
    """

    REVERSE = 1 << 1
    UPDOWN = 1 << 2
    BOLD = 1 << 3
    DOUBLE_HEIGHT = 1 << 4
    DOUBLE_WIDTH = 1 << 5
    DELETE_LINE = 1 << 6


BIG_STYLE: Final[PrintingStyle] = (
    PrintingStyle.DOUBLE_HEIGHT | PrintingStyle.DOUBLE_WIDTH | PrintingStyle.BOLD
)
"""Style used for headline text: double height, double width and bold."""


def style_on(flags: PrintingStyle) -> bytes:
    """
    Select print mode.

    Command: ESC ! n
    Hex: 1B 21 n

    Args:
        flags: Combination of PrintingStyle bits. A plain int 0-255 is
               accepted too.

    Returns:
        ESC/POS command bytes.

    Raises:
        ValueError: If the value does not fit in one byte.

    Example:
        >>> style_on(PrintingStyle.BOLD | PrintingStyle.DOUBLE_WIDTH)
        b'\\x1b!('
    """
    value = int(flags)
    if not (0 <= value <= 255):
        raise ValueError(f"Print mode must be 0-255, got {value}")
    return b"\x1b!" + bytes([value])


def style_off() -> bytes:
    """
    Restore normal print mode.

    Command: ESC ! 0
    Hex: 1B 21 00
    """
    return b"\x1b!\x00"


# =============================================================================
# EMPHASIZED MODE
# =============================================================================

ESC_BOLD_ON: Final[bytes] = b"\x1b\x20\x01\x1bE\x01"
"""
Enable emphasized printing.

Command: ESC SP 1, ESC E 1
Hex: 1B 20 01 1B 45 01
Effect: Widens right-side character spacing by one dot and turns on
        emphasis, so bold glyphs do not touch each other
Reset: ESC_BOLD_OFF or printer reset
"""

ESC_BOLD_OFF: Final[bytes] = b"\x1b\x20\x00\x1bE\x00"
"""
Disable emphasized printing.

Command: ESC SP 0, ESC E 0
Hex: 1B 20 00 1B 45 00
"""

# =============================================================================
# WHITE-ON-BLACK
# =============================================================================

GS_INVERT_ON: Final[bytes] = b"\x1dB\x01"
"""
Enable white-on-black (reverse) printing.

Command: GS B 1
Hex: 1D 42 01
"""

GS_INVERT_OFF: Final[bytes] = b"\x1dB\x00"
"""
Disable white-on-black printing.

Command: GS B 0
Hex: 1D 42 00
"""

# =============================================================================
# CHARACTER SIZE
# =============================================================================


def set_character_size(double_width: bool, double_height: bool) -> bytes:
    """
    Select character size.

    Command: GS ! n
    Hex: 1D 21 n

    The high nibble enables horizontal enlargement, the low nibble vertical
    enlargement. This firmware treats any set bit in a nibble as "double".

    Args:
        double_width: Enlarge characters horizontally.
        double_height: Enlarge characters vertically.

    Returns:
        ESC/POS command bytes.

    Example:
        >>> set_character_size(True, False)
        b'\\x1d!\\xf0'
    """
    size = (0xF0 if double_width else 0x00) + (0x0F if double_height else 0x00)
    return b"\x1d!" + bytes([size])
