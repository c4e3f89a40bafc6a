from pathlib import Path

import pytest
from PIL import Image

from thermal_printer.escpos.commands.graphics import encode_raster
from thermal_printer.model.raster import BrightnessGrid, pixel_brightness
from thermal_printer.protocols import RasterImage


class TestPixelBrightness:
    @pytest.mark.parametrize(
        "rgb, expected",
        [
            ((255, 255, 255), 1.0),
            ((0, 0, 0), 0.0),
            ((255, 0, 0), 0.5),
            ((0, 0, 255), 0.5),
            ((128, 128, 128), 128 / 255),
        ],
    )
    def test_lightness(self, rgb: tuple, expected: float) -> None:
        assert pixel_brightness(*rgb) == pytest.approx(expected)


class TestBrightnessGrid:
    def test_from_rows(self) -> None:
        grid = BrightnessGrid.from_rows([[0.0, 1.0], [0.25, 0.75]])
        assert (grid.width, grid.height) == (2, 2)
        assert grid.brightness_at(1, 0) == 1.0
        assert grid.brightness_at(0, 1) == 0.25

    def test_from_rows_ragged(self) -> None:
        with pytest.raises(ValueError, match="Row 1"):
            BrightnessGrid.from_rows([[0.0, 1.0], [0.5]])

    def test_from_rows_empty(self) -> None:
        grid = BrightnessGrid.from_rows([])
        assert (grid.width, grid.height) == (0, 0)

    def test_value_count_mismatch(self) -> None:
        with pytest.raises(ValueError, match="Expected 4"):
            BrightnessGrid(width=2, height=2, values=[0.0, 1.0, 0.0])

    def test_negative_dimensions(self) -> None:
        with pytest.raises(ValueError):
            BrightnessGrid(width=-1, height=0, values=[])

    @pytest.mark.parametrize("x, y", [(-1, 0), (2, 0), (0, 2)])
    def test_out_of_bounds(self, x: int, y: int) -> None:
        grid = BrightnessGrid.from_rows([[0.0, 1.0], [1.0, 0.0]])
        with pytest.raises(IndexError):
            grid.brightness_at(x, y)

    def test_from_function(self) -> None:
        grid = BrightnessGrid.from_function(3, 2, lambda x, y: x * 10 + y)
        assert grid.brightness_at(2, 1) == 21

    def test_satisfies_raster_protocol(self) -> None:
        assert isinstance(BrightnessGrid.from_rows([[1.0]]), RasterImage)

    def test_feeds_raster_codec(self) -> None:
        grid = BrightnessGrid.from_function(384, 2, lambda x, y: 0.0 if x < 8 else 1.0)
        data = encode_raster(grid)
        assert data[8] == 0xFF
        assert data[9] == 0x00
        assert len(data) == 8 + 96


class TestFromImage:
    def test_white_rgb(self) -> None:
        grid = BrightnessGrid.from_image(Image.new("RGB", (4, 2), "white"))
        assert grid.values == [1.0] * 8

    def test_grayscale_is_converted(self) -> None:
        grid = BrightnessGrid.from_image(Image.new("L", (2, 1), 0))
        assert grid.values == [0.0, 0.0]

    def test_pixel_values(self) -> None:
        image = Image.new("RGB", (2, 1))
        image.putpixel((0, 0), (255, 0, 0))
        image.putpixel((1, 0), (255, 255, 255))
        grid = BrightnessGrid.from_image(image)
        assert grid.brightness_at(0, 0) == pytest.approx(0.5)
        assert grid.brightness_at(1, 0) == pytest.approx(1.0)

    def test_fit_width_scales(self) -> None:
        grid = BrightnessGrid.from_image(Image.new("RGB", (192, 10), "black"), fit_width=True)
        assert (grid.width, grid.height) == (384, 20)

    def test_no_scaling_by_default(self) -> None:
        grid = BrightnessGrid.from_image(Image.new("RGB", (192, 10)))
        assert grid.width == 192


class TestFromFile:
    def test_loads_png(self, tmp_path: Path) -> None:
        path = tmp_path / "logo.png"
        Image.new("RGB", (384, 3), "black").save(path)

        grid = BrightnessGrid.from_file(path)

        assert (grid.width, grid.height) == (384, 3)
        assert set(grid.values) == {0.0}

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "dot.png"
        Image.new("RGB", (1, 1), "white").save(path)
        assert BrightnessGrid.from_file(str(path)).values == [1.0]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            BrightnessGrid.from_file(tmp_path / "missing.png")
