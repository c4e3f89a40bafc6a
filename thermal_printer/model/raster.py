"""
model/raster.py

Brightness grid: the decoded-image value type consumed by the raster codec.

The codec only needs brightness_at(x, y); this module supplies it from
Pillow images or image files and keeps the grid as plain floats so it can be
built by hand in tests.

Brightness follows the HSL lightness definition: (max(R, G, B) + min(R, G, B)) / 2,
scaled to [0, 1].
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Sequence, Union

from thermal_printer.escpos.commands.graphics import RASTER_WIDTH_DOTS

# Pillow is imported inside the loaders.
if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)

__all__ = [
    "BrightnessGrid",
    "pixel_brightness",
]


def pixel_brightness(red: int, green: int, blue: int) -> float:
    """Return the HSL lightness of an 8-bit RGB pixel in [0, 1]."""
    return (max(red, green, blue) + min(red, green, blue)) / 510.0


@dataclass
class BrightnessGrid:
    """
    Row-major brightness values of a picture.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
        values: width * height floats in [0, 1], row after row.
    """

    width: int
    height: int
    values: List[float] = field(repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if len(self.values) != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} brightness values, "
                f"got {len(self.values)}"
            )

    def brightness_at(self, x: int, y: int) -> float:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.values[y * self.width + x]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "BrightnessGrid":
        """Build a grid from a list of rows of equal length."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        values: List[float] = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} values, expected {width}")
            values.extend(float(v) for v in row)
        return cls(width=width, height=height, values=values)

    @classmethod
    def from_function(
        cls, width: int, height: int, brightness: Callable[[int, int], float]
    ) -> "BrightnessGrid":
        """Sample brightness(x, y) over the whole grid."""
        values = [brightness(x, y) for y in range(height) for x in range(width)]
        return cls(width=width, height=height, values=values)

    @classmethod
    def from_image(cls, image: Image.Image, *, fit_width: bool = False) -> "BrightnessGrid":
        """
        Convert a Pillow image.

        Args:
            image: Source image in any mode; it is converted to RGB.
            fit_width: Scale the image to the 384-dot head width, keeping
                the aspect ratio.

        Returns:
            BrightnessGrid of the (possibly scaled) image.
        """
        from PIL import Image

        rgb = image.convert("RGB")
        if fit_width and rgb.width != RASTER_WIDTH_DOTS and rgb.width > 0:
            height = max(1, round(rgb.height * RASTER_WIDTH_DOTS / rgb.width))
            logger.debug(
                "Scaling image from %dx%d to %dx%d",
                rgb.width,
                rgb.height,
                RASTER_WIDTH_DOTS,
                height,
            )
            rgb = rgb.resize((RASTER_WIDTH_DOTS, height), Image.Resampling.LANCZOS)

        data = rgb.tobytes()
        values = [
            pixel_brightness(data[i], data[i + 1], data[i + 2])
            for i in range(0, len(data), 3)
        ]
        return cls(width=rgb.width, height=rgb.height, values=values)

    @classmethod
    def from_file(
        cls, path: Union[str, Path], *, fit_width: bool = False
    ) -> "BrightnessGrid":
        """
        Load an image file through Pillow.

        Raises:
            FileNotFoundError: If the file does not exist.
            PIL.UnidentifiedImageError: If the file is not a readable image.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Image file does not exist: {path}")

        from PIL import Image

        with Image.open(path) as image:
            grid = cls.from_image(image, fit_width=fit_width)
        logger.info("Loaded %s as %dx%d raster", path, grid.width, grid.height)
        return grid
