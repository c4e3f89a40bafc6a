"""
ESC/POS command encoders for 58 mm serial thermal printers.

This package is the codec of the driver: constants and pure functions that
map printer operations to wire-exact byte sequences. Nothing here performs
I/O; the printer session writes the returned bytes to its transport.

Module Structure:
    commands/
    ├── __init__.py             # This file (public API exports)
    ├── hardware.py             # Prefixes, reset, sleep/wake, heating
    ├── charset.py              # Code page selection, text encoding
    ├── text_formatting.py      # Print mode flags, bold, invert, size
    ├── positioning.py          # Line feed, alignment, indent, rule
    ├── line_spacing.py         # Line spacing in dots
    ├── barcode.py              # Barcode validation and GS k
    └── graphics.py             # Raster header and pixel packing

Target Printer: CSN-A2 class thermal printers (384-dot head)
Character Set: IBM850 primary, IBM437 selectable

Usage:
    >>> from thermal_printer.escpos.commands import style_on, style_off, PrintingStyle
    >>> command = style_on(PrintingStyle.BOLD) + b"Bold text" + style_off()
    >>> transport.write(command)

Public API:
    All command constants are re-exported from this module for convenience.
    Import either from specific modules or from this package root.
"""

# Barcode commands
from thermal_printer.escpos.commands.barcode import (
    BarcodeSpec,
    BarcodeType,
    encode_barcode,
    set_barcode_left_spacing,
    set_large_barcode,
    validate_barcode,
)

# Character set commands
from thermal_printer.escpos.commands.charset import (
    TextEncoding,
    encode_text,
    select_character_table,
)

# Graphics commands
from thermal_printer.escpos.commands.graphics import (
    MAX_RASTER_HEIGHT,
    RASTER_ROW_BYTES,
    RASTER_WIDTH_DOTS,
    RasterCommand,
    encode_raster,
    pack_raster_rows,
    raster_header,
)

# Hardware control commands
from thermal_printer.escpos.commands.hardware import (
    ESC_INIT_PRINTER,
    ESC_SLEEP,
    ESC_WAKE_UP,
    RESET_DELAY_MS,
    set_printing_parameters,
)

# Line spacing commands
from thermal_printer.escpos.commands.line_spacing import set_line_spacing

# Positioning commands
from thermal_printer.escpos.commands.positioning import (
    LF,
    Alignment,
    feed_dots,
    feed_lines,
    horizontal_rule,
    set_alignment,
    set_indent,
)

# Text formatting commands
from thermal_printer.escpos.commands.text_formatting import (
    BIG_STYLE,
    ESC_BOLD_OFF,
    ESC_BOLD_ON,
    GS_INVERT_OFF,
    GS_INVERT_ON,
    PrintingStyle,
    set_character_size,
    style_off,
    style_on,
)

__all__ = [
    # Text formatting
    "PrintingStyle",
    "BIG_STYLE",
    "style_on",
    "style_off",
    "ESC_BOLD_ON",
    "ESC_BOLD_OFF",
    "GS_INVERT_ON",
    "GS_INVERT_OFF",
    "set_character_size",
    # Charset
    "TextEncoding",
    "encode_text",
    "select_character_table",
    # Positioning
    "LF",
    "Alignment",
    "set_alignment",
    "set_indent",
    "feed_lines",
    "feed_dots",
    "horizontal_rule",
    # Line spacing
    "set_line_spacing",
    # Barcode
    "BarcodeType",
    "BarcodeSpec",
    "validate_barcode",
    "encode_barcode",
    "set_large_barcode",
    "set_barcode_left_spacing",
    # Graphics
    "RASTER_WIDTH_DOTS",
    "RASTER_ROW_BYTES",
    "MAX_RASTER_HEIGHT",
    "RasterCommand",
    "pack_raster_rows",
    "raster_header",
    "encode_raster",
    # Hardware
    "ESC_INIT_PRINTER",
    "ESC_SLEEP",
    "ESC_WAKE_UP",
    "RESET_DELAY_MS",
    "set_printing_parameters",
]
