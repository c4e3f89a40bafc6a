"""
Printer control commands for ESC/POS thermal receipt printers.

Contains the control prefixes, initialization, low-power switching and the
thermal head tuning command.

Reference: ESC/POS Application Programming Guide (thermal printers)
Compatibility: 58 mm serial thermal printers (384-dot head, CSN-A2 class)
"""

from typing import Final

__all__ = [
    "ESC",
    "GS",
    "DC2",
    "ESC_INIT_PRINTER",
    "ESC_SLEEP",
    "ESC_WAKE_UP",
    "RESET_DELAY_MS",
    "set_printing_parameters",
]

# =============================================================================
# CONTROL PREFIXES
# =============================================================================

ESC: Final[int] = 0x1B
"""Escape prefix (27) for ESC commands."""

GS: Final[int] = 0x1D
"""Group separator prefix (29) for GS commands."""

DC2: Final[int] = 0x12
"""Device control 2 prefix (18), used by the legacy raster command."""

# =============================================================================
# INITIALIZATION
# =============================================================================

ESC_INIT_PRINTER: Final[bytes] = b"\x1b@"
"""
Initialize printer.

Command: ESC @
Hex: 1B 40
Effect: Clears the print buffer and restores every mode to power-on defaults
Note: Firmware needs settling time afterwards (see RESET_DELAY_MS)

Example:
    >>> transport.write(ESC_INIT_PRINTER)
"""

RESET_DELAY_MS: Final[int] = 50
"""Minimum pause after ESC @ before the next command is accepted."""

# =============================================================================
# LOW-POWER MODE
# =============================================================================

ESC_SLEEP: Final[bytes] = b"\x1b=\x00"
"""
Set printer offline (sleep).

Command: ESC = 0
Hex: 1B 3D 00
Effect: Printer ignores data until woken up
"""

ESC_WAKE_UP: Final[bytes] = b"\x1b=\x01"
"""
Set printer online (wake up).

Command: ESC = 1
Hex: 1B 3D 01
Effect: Printer accepts data again
"""

# =============================================================================
# HEATING PARAMETERS
# =============================================================================


def set_printing_parameters(
    max_printing_dots: int, heating_time: int, heating_interval: int
) -> bytes:
    """
    Set thermal head control parameters.

    Command: ESC 7 n1 n2 n3
    Hex: 1B 37 n1 n2 n3

    Args:
        max_printing_dots: Max heating dots (0-255), unit: 8 dots.
                           Default 7 (64 dots).
        heating_time: Heating time (0-255), unit: 10 µs. Default 80 (800 µs).
                      Higher values print darker and slower.
        heating_interval: Heating interval (0-255), unit: 10 µs.
                          Default 2 (20 µs).

    Returns:
        ESC/POS command bytes.

    Raises:
        ValueError: If any parameter is out of range.

    Example:
        >>> set_printing_parameters(7, 80, 2)
        b'\\x1b7\\x07P\\x02'
    """
    for name, value in (
        ("max_printing_dots", max_printing_dots),
        ("heating_time", heating_time),
        ("heating_interval", heating_interval),
    ):
        if not (0 <= value <= 255):
            raise ValueError(f"{name} must be 0-255, got {value}")

    return b"\x1b7" + bytes([max_printing_dots, heating_time, heating_interval])
