"""
Printer session for ESC/POS thermal receipt printers.

ThermalPrinter owns the session configuration, turns each operation into
bytes through the command encoders and writes them to a transport. Where the
print head needs settling time (reset, text lines, raster rows) the session
flushes the transport and blocks on the injected sleep function, so no byte
of the next operation leaves before the previous delay has elapsed.

Hardware assumptions:
- Paper width: 58 mm (384 dots at 203 DPI)
- Interface: write-only serial link
- Commands: ESC/POS subset of CSN-A2 class firmware
"""

from __future__ import annotations

import dataclasses
import logging
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from thermal_printer.config import PrinterConfig
from thermal_printer.escpos.commands.barcode import (
    BarcodeSpec,
    encode_barcode,
    set_barcode_left_spacing,
    set_large_barcode,
)
from thermal_printer.escpos.commands.charset import (
    TextEncoding,
    encode_text,
    select_character_table,
)
from thermal_printer.escpos.commands.graphics import pack_raster_rows, raster_header
from thermal_printer.escpos.commands.hardware import (
    ESC_INIT_PRINTER,
    ESC_SLEEP,
    ESC_WAKE_UP,
    RESET_DELAY_MS,
    set_printing_parameters,
)
from thermal_printer.escpos.commands.line_spacing import set_line_spacing
from thermal_printer.escpos.commands.positioning import (
    LF,
    Alignment,
    feed_dots,
    feed_lines,
    horizontal_rule,
    set_alignment,
    set_indent,
)
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
from thermal_printer.exceptions import (
    EncodingError,
    InvalidBarcodeSpecError,
    TransportError,
)
from thermal_printer.model.raster import BrightnessGrid
from thermal_printer.protocols import RasterImage, Transport

logger = logging.getLogger(__name__)

__all__ = [
    "ThermalPrinter",
]

SleepFunction = Callable[[float], None]


class ThermalPrinter:
    """
    Stateful driver for one thermal printer.

    The session is not thread-safe: use one session per printer and
    serialize access externally.

    Example:
        >>> transport = MemoryTransport()
        >>> printer = ThermalPrinter(transport)
        >>> printer.set_alignment(Alignment.CENTER)
        >>> printer.write_line_big("RECEIPT")
        >>> printer.horizontal_rule(32)
    """

    def __init__(
        self,
        transport: Transport,
        config: Optional[PrinterConfig] = None,
        *,
        sleep: SleepFunction = time.sleep,
        auto_initialize: bool = True,
    ) -> None:
        """
        Initialize the session.

        Args:
            transport: Byte sink connected to the printer.
            config: Session configuration; defaults to PrinterConfig().
            sleep: Blocking sleep taking seconds; replaceable for tests.
            auto_initialize: Reset the printer and transmit heating
                parameters and character table right away.
        """
        self._transport = transport
        self._config = config if config is not None else PrinterConfig()
        self._sleep = sleep

        if auto_initialize:
            self.initialize()

    @property
    def config(self) -> PrinterConfig:
        """Current configuration (immutable; changed through setter methods)."""
        return self._config

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def initialize(self) -> None:
        """Reset the printer, then send heating parameters and character table."""
        self.reset()
        self._send(
            set_printing_parameters(
                self._config.max_printing_dots,
                self._config.heating_time,
                self._config.heating_interval,
            )
        )
        self._send(select_character_table(self._config.text_encoding))
        logger.info("Printer initialized: %r", self)

    def reset(self) -> None:
        """Send ESC @ and block for the firmware reinitialization delay."""
        self._send(ESC_INIT_PRINTER)
        self._flush()
        self._sleep(RESET_DELAY_MS / 1000.0)

    def sleep(self) -> None:
        """Put the printer offline (low-power)."""
        self._send(ESC_SLEEP)

    def wake_up(self) -> None:
        """Put the printer back online."""
        self._send(ESC_WAKE_UP)

    def set_printing_parameters(
        self, max_printing_dots: int, heating_time: int, heating_interval: int
    ) -> None:
        """
        Update and transmit thermal head parameters.

        A value of 0 keeps the current setting of that parameter.

        Raises:
            ValueError: If a value is outside 0-255.
        """
        self._config = dataclasses.replace(
            self._config,
            max_printing_dots=max_printing_dots or self._config.max_printing_dots,
            heating_time=heating_time or self._config.heating_time,
            heating_interval=heating_interval or self._config.heating_interval,
        )
        logger.info(
            "Printing parameters: dots=%d time=%d interval=%d",
            self._config.max_printing_dots,
            self._config.heating_time,
            self._config.heating_interval,
        )
        self._send(
            set_printing_parameters(
                self._config.max_printing_dots,
                self._config.heating_time,
                self._config.heating_interval,
            )
        )

    def set_encoding(self, encoding: TextEncoding) -> None:
        """Switch the active code page and select it on the printer."""
        self._config = dataclasses.replace(self._config, text_encoding=encoding)
        logger.info("Text encoding set to %s", encoding.name)
        self._send(select_character_table(encoding))

    def set_line_delays(
        self,
        picture_line_delay_ms: Optional[int] = None,
        text_line_delay_ms: Optional[int] = None,
    ) -> None:
        """Change the pauses after raster rows and text lines (None keeps)."""
        changes: Dict[str, int] = {}
        if picture_line_delay_ms is not None:
            changes["picture_line_delay_ms"] = picture_line_delay_ms
        if text_line_delay_ms is not None:
            changes["text_line_delay_ms"] = text_line_delay_ms
        self._config = dataclasses.replace(self._config, **changes)

    # =========================================================================
    # TEXT
    # =========================================================================

    def write_line(self, text: str) -> None:
        """Print a line of text followed by a line feed."""
        self._send(self._encode(text) + LF)
        self._pause(self._config.text_line_delay_ms)

    def write_line_buffered(self, text: str) -> None:
        """Put text into the printer buffer; it prints with the next line feed."""
        self._send(self._encode(text))

    def write_line_styled(self, text: str, style: PrintingStyle) -> None:
        """Print a line with ESC ! print mode flags, then restore normal mode."""
        self._write_paired(style_on(style), text, style_off())
        self._end_line()

    def write_line_big(self, text: str) -> None:
        """Print a line in double height, double width and bold."""
        self.write_line_styled(text, BIG_STYLE)

    def write_line_bold(self, text: str) -> None:
        """Print an emphasized line followed by a blank line."""
        self._write_paired(ESC_BOLD_ON, text, ESC_BOLD_OFF)
        self._end_line()
        self.line_feed()

    def write_line_inverted(self, text: str) -> None:
        """Print a white-on-black line followed by a blank line."""
        self._write_paired(GS_INVERT_ON, text, GS_INVERT_OFF)
        self._end_line()
        self.line_feed()

    def bold_on(self) -> None:
        self._send(ESC_BOLD_ON)

    def bold_off(self) -> None:
        self._send(ESC_BOLD_OFF)

    def set_inverted(self, enabled: bool) -> None:
        """Switch white-on-black printing on or off."""
        self._send(GS_INVERT_ON if enabled else GS_INVERT_OFF)

    def set_character_size(self, double_width: bool, double_height: bool) -> None:
        self._send(set_character_size(double_width, double_height))

    # =========================================================================
    # LAYOUT
    # =========================================================================

    def set_alignment(self, alignment: Alignment) -> None:
        self._send(set_alignment(alignment))

    def set_indent(self, columns: int) -> None:
        """Set left indent (0-31 columns; anything else means no indent)."""
        self._send(set_indent(columns))

    def set_line_spacing(self, dots: int) -> None:
        self._send(set_line_spacing(dots))

    def line_feed(self) -> None:
        self._send(LF)

    def feed_lines(self, lines: int) -> None:
        self._send(feed_lines(lines))

    def feed_dots(self, dots: int) -> None:
        self._send(feed_dots(dots))

    def horizontal_rule(self, length: int = 32) -> None:
        """Print a rule of up to 32 box-drawing characters."""
        self._send(horizontal_rule(length))

    # =========================================================================
    # BARCODES
    # =========================================================================

    def print_barcode(self, spec: BarcodeSpec) -> None:
        """
        Print a barcode.

        Raises:
            InvalidBarcodeSpecError: If the payload violates the symbology
                rules. Nothing is sent.
            EncodingError: If the payload cannot be represented.
        """
        try:
            command = encode_barcode(spec, self._config.text_encoding)
        except (InvalidBarcodeSpecError, EncodingError):
            logger.warning(
                "Rejected %s barcode %r", spec.symbology.name, spec.payload
            )
            raise
        self._send(command)

    def set_large_barcode(self, large: bool) -> None:
        self._send(set_large_barcode(large))

    def set_barcode_left_spacing(self, dots: int) -> None:
        self._send(set_barcode_left_spacing(dots))

    # =========================================================================
    # IMAGES
    # =========================================================================

    def print_image(self, image: RasterImage) -> None:
        """
        Print a 384-dot wide image row by row.

        The header goes out once; every row is followed by a pause of
        picture_line_delay_ms so the printer buffer is not overrun.

        Raises:
            InvalidImageDimensionsError: Before any byte is sent, if the
                image is not 384 wide or taller than 65535.
        """
        rows = pack_raster_rows(image)
        logger.debug("Printing %d raster rows", len(rows))

        self._send(raster_header(len(rows), self._config.raster_command))
        for row in rows:
            self._send(row)
            self._pause(self._config.picture_line_delay_ms)

    def print_image_file(
        self, path: Union[str, Path], *, fit_width: bool = False
    ) -> None:
        """Load an image file with Pillow and print it."""
        self.print_image(BrightnessGrid.from_file(path, fit_width=fit_width))

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _encode(self, text: str) -> bytes:
        return encode_text(
            text, self._config.text_encoding, self._config.encoding_errors
        )

    def _write_paired(self, on: bytes, text: str, off: bytes) -> None:
        # "off" is sent even when encoding the body fails.
        self._send(on)
        try:
            self._send(self._encode(text))
        finally:
            self._send(off)

    def _end_line(self) -> None:
        self._send(LF)
        self._pause(self._config.text_line_delay_ms)

    def _send(self, data: bytes) -> None:
        if not data:
            return
        try:
            self._transport.write(data)
        except TransportError:
            logger.error("Transport write of %d bytes failed", len(data))
            raise
        except OSError as e:
            logger.error("Transport write of %d bytes failed: %s", len(data), e)
            raise TransportError(f"Write of {len(data)} bytes failed", cause=e) from e

    def _flush(self) -> None:
        try:
            self._transport.flush()
        except TransportError:
            logger.error("Transport flush failed")
            raise
        except OSError as e:
            logger.error("Transport flush failed: %s", e)
            raise TransportError("Flush failed", cause=e) from e

    def _pause(self, delay_ms: int) -> None:
        if delay_ms > 0:
            self._flush()
            self._sleep(delay_ms / 1000.0)

    def __repr__(self) -> str:
        c = self._config
        return (
            f"ThermalPrinter(transport={self._transport!r}, "
            f"max_printing_dots={c.max_printing_dots}, heating_time={c.heating_time}, "
            f"heating_interval={c.heating_interval}, "
            f"picture_line_delay_ms={c.picture_line_delay_ms}, "
            f"text_line_delay_ms={c.text_line_delay_ms}, "
            f"text_encoding={c.text_encoding.name})"
        )
