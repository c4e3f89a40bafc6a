#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Demo receipt for a serial thermal printer.

Prints a short receipt exercising text styles, alignment, a barcode and,
optionally, an image scaled to the 384-dot head.

Usage:
    python scripts/print_demo.py --port /dev/serial0 --baud 19200
    python scripts/print_demo.py --codepage IBM437 --image logo.png
    python scripts/print_demo.py --dry-run
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from thermal_printer import (
    Alignment,
    BarcodeSpec,
    BarcodeType,
    MemoryTransport,
    PrinterConfig,
    PrintingStyle,
    SerialTransport,
    TextEncoding,
    ThermalPrinter,
    ThermalPrinterError,
    get_logger,
    load_config,
)

logger = get_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a demo receipt")
    parser.add_argument("--config", type=Path, help="JSON settings file")
    parser.add_argument("--port", help="Serial port (default from config)")
    parser.add_argument("--baud", type=int, help="Baud rate (default from config)")
    parser.add_argument(
        "--codepage",
        choices=[e.name for e in TextEncoding],
        help="Printer code page",
    )
    parser.add_argument("--image", type=Path, help="Image file to print at the end")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Encode into memory and print the byte count instead of sending",
    )
    return parser.parse_args(argv)


def print_receipt(printer: ThermalPrinter, image: Optional[Path]) -> None:
    """Send the demo receipt through an initialized session."""
    printer.set_alignment(Alignment.CENTER)
    printer.write_line_big("DEMO")
    printer.write_line_inverted(" THERMAL PRINTER ")
    printer.set_alignment(Alignment.LEFT)

    printer.horizontal_rule()
    printer.write_line("Café au lait          3.50")
    printer.write_line("Croissant             2.10")
    printer.horizontal_rule()
    printer.write_line_bold("TOTAL                 5.60")

    printer.write_line_styled("upside down", PrintingStyle.UPDOWN)
    printer.write_line_styled("struck out", PrintingStyle.DELETE_LINE)

    printer.set_alignment(Alignment.CENTER)
    printer.set_large_barcode(False)
    printer.print_barcode(BarcodeSpec(BarcodeType.EAN13, "400638133393"))
    printer.line_feed()

    if image is not None:
        printer.print_image_file(image, fit_width=True)

    printer.set_alignment(Alignment.LEFT)
    printer.feed_lines(3)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    settings = load_config(args.config)
    if args.port:
        settings["port"] = args.port
    if args.baud:
        settings["baudrate"] = args.baud
    if args.codepage:
        settings["text_encoding"] = args.codepage

    try:
        config = PrinterConfig.from_mapping(settings)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.dry_run:
        memory = MemoryTransport()
        print_receipt(ThermalPrinter(memory, config, sleep=lambda _: None), args.image)
        print(f"Encoded {len(memory.data)} bytes in {len(memory.chunks)} writes")
        return 0

    try:
        with SerialTransport(
            settings["port"], baudrate=settings["baudrate"], timeout=settings["timeout"]
        ) as transport:
            print_receipt(ThermalPrinter(transport, config), args.image)
    except (ThermalPrinterError, FileNotFoundError) as e:
        logger.error("Demo receipt failed: %s", e)
        print(f"Printing failed: {e}", file=sys.stderr)
        return 1

    print(f"Demo receipt sent to {settings['port']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
