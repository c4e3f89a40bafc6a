# -*- coding: utf-8 -*-
"""
Printer session configuration: heating parameters, active code page and the
timing contracts of the print head.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Final, Mapping

from thermal_printer.escpos.commands.charset import ENCODING_ERROR_POLICIES, TextEncoding
from thermal_printer.escpos.commands.graphics import RasterCommand

_BYTE_FIELDS: Final[tuple[str, ...]] = (
    "max_printing_dots",
    "heating_time",
    "heating_interval",
)

_DELAY_FIELDS: Final[tuple[str, ...]] = (
    "picture_line_delay_ms",
    "text_line_delay_ms",
)


@dataclass(frozen=True)
class PrinterConfig:
    """
    Configuration owned by a printer session.

    Attributes:
        max_printing_dots: Max heating dots, unit 8 dots (0-255).
        heating_time: Heating time, unit 10 µs (0-255).
        heating_interval: Heating interval, unit 10 µs (0-255).
        text_encoding: Active code page for text and barcodes.
        picture_line_delay_ms: Pause after each raster row.
        text_line_delay_ms: Pause after each printed text line.
        encoding_errors: "strict" raises on unmappable characters,
            "replace" prints '?' instead.
        raster_command: Header format used for images.

    Examples:
        >>> config = PrinterConfig()
        >>> config.heating_time
        80

        >>> PrinterConfig(heating_time=300)
        Traceback (most recent call last):
        ...
        ValueError: heating_time must be 0-255, got 300
    """

    max_printing_dots: int = 7
    heating_time: int = 80
    heating_interval: int = 2
    text_encoding: TextEncoding = TextEncoding.IBM850
    picture_line_delay_ms: int = 20
    text_line_delay_ms: int = 0
    encoding_errors: str = "strict"
    raster_command: RasterCommand = RasterCommand.GS_V_0

    def __post_init__(self) -> None:
        """Validate parameters."""
        for name in _BYTE_FIELDS + _DELAY_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in _BYTE_FIELDS:
            value = getattr(self, name)
            if not (0 <= value <= 255):
                raise ValueError(f"{name} must be 0-255, got {value}")
        for name in _DELAY_FIELDS:
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if not isinstance(self.text_encoding, TextEncoding):
            raise ValueError(
                f"text_encoding must be a TextEncoding, got {self.text_encoding!r}"
            )
        if not isinstance(self.raster_command, RasterCommand):
            raise ValueError(
                f"raster_command must be a RasterCommand, got {self.raster_command!r}"
            )
        if self.encoding_errors not in ENCODING_ERROR_POLICIES:
            raise ValueError(
                f"encoding_errors must be one of {ENCODING_ERROR_POLICIES}, "
                f"got {self.encoding_errors!r}"
            )

    @staticmethod
    def from_mapping(values: Mapping[str, Any]) -> "PrinterConfig":
        """
        Build a configuration from a loaded settings dictionary.

        Unknown keys (port, baudrate, log_level, ...) are ignored. Enum
        fields accept their names as strings.

        Args:
            values: Settings, typically the result of load_config().

        Returns:
            PrinterConfig instance.

        Raises:
            ValueError: If a value is invalid.

        Examples:
            >>> PrinterConfig.from_mapping({"text_encoding": "IBM437"}).text_encoding
            <TextEncoding.IBM437: (0, 'cp437')>
        """
        known = {f.name for f in fields(PrinterConfig)}
        kwargs = {key: value for key, value in values.items() if key in known}

        encoding = kwargs.get("text_encoding")
        if isinstance(encoding, str):
            kwargs["text_encoding"] = TextEncoding.from_name(encoding)

        raster = kwargs.get("raster_command")
        if isinstance(raster, str):
            try:
                kwargs["raster_command"] = RasterCommand[raster.upper()]
            except KeyError:
                raise ValueError(f"Unsupported raster command: {raster!r}") from None

        return PrinterConfig(**kwargs)


__all__ = [
    "PrinterConfig",
]
