"""Value types consumed by the codec."""

from thermal_printer.model.raster import BrightnessGrid, pixel_brightness

__all__ = [
    "BrightnessGrid",
    "pixel_brightness",
]
