import numpy as np
import pytest

from bmpstudio.models.image_model import BmpHeader, DecodeFailure, Grid, Pixel


def test_from_rows_dimensions_and_access():
    grid = Grid.from_rows([[(1, 2, 3), (4, 5, 6), (7, 8, 9)], [(10, 11, 12), (13, 14, 15), (16, 17, 18)]])
    assert grid.width == 3
    assert grid.height == 2
    assert grid.pixel(1, 2) == Pixel(16, 17, 18)
    assert grid.to_rows()[0][1] == Pixel(4, 5, 6)


def test_ragged_rows_rejected():
    with pytest.raises(ValueError):
        Grid.from_rows([[(0, 0, 0), (0, 0, 0)], [(0, 0, 0)]])


@pytest.mark.parametrize("rows", [[], [[]]])
def test_empty_grid_rejected(rows):
    with pytest.raises(ValueError):
        Grid.from_rows(rows)


def test_out_of_range_channel_rejected():
    with pytest.raises(ValueError):
        Grid.from_rows([[(256, 0, 0)]])
    with pytest.raises(ValueError):
        Grid.from_rows([[(-1, 0, 0)]])


def test_pixels_are_read_only_and_copied():
    source = np.zeros((1, 1, 3), dtype=np.uint8)
    grid = Grid(source)
    source[0, 0, 0] = 99
    assert grid.pixel(0, 0) == Pixel(0, 0, 0)
    with pytest.raises(ValueError):
        grid.pixels[0, 0, 0] = 1


def test_equality_by_content():
    a = Grid.from_rows([[(1, 2, 3)]])
    b = Grid.from_rows([[(1, 2, 3)]])
    c = Grid.from_rows([[(1, 2, 4)]])
    assert a == b
    assert a != c
    assert a != Grid.from_rows([[(1, 2, 3), (1, 2, 3)]])


def test_pil_bridge_drops_alpha(sample_grid):
    image = sample_grid.to_pil()
    assert image.size == (sample_grid.width, sample_grid.height)
    assert image.mode == "RGB"
    assert Grid.from_pil(image.convert("RGBA")) == sample_grid


def test_header_padding_arithmetic():
    header = BmpHeader(file_size=0, pixel_offset=54, width=5, height=2, bits_per_pixel=24)
    assert header.scanline_bytes == 15
    assert header.padding == 1
    assert header.row_stride == 16
    assert header.expected_file_size == 54 + 32
    assert BmpHeader(0, 54, 4, 1, 24).padding == 0
    assert BmpHeader(0, 54, 3, 1, 32).padding == 0


def test_decode_failure_is_falsy(tmp_path):
    assert not DecodeFailure(tmp_path / "x.bmp", "broken")
