import struct

import numpy as np
import pytest

from bmpstudio.models.image_model import Grid
from bmpstudio.services.bmp_codec import encode_bmp


def random_grid(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return Grid(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def raw_bmp(width, height, bpp, pixel_rows, file_size=None, signature=b"BM"):
    """Собирает BMP-файл вручную: pixel_rows — уже готовые байты строк в порядке файла."""
    body = b"".join(pixel_rows)
    declared = file_size if file_size is not None else 54 + len(body)
    header = struct.pack("<2sIHHI", signature, declared, 0, 0, 54)
    info = struct.pack("<IiiHHIIiiII", 40, width, height, 1, bpp, 0, len(body), 2835, 2835, 0, 0)
    return header + info + body


@pytest.fixture
def gray_grid():
    return Grid.from_rows([[(128, 128, 128), (128, 128, 128)], [(128, 128, 128), (128, 128, 128)]])


@pytest.fixture
def sample_grid():
    return random_grid(5, 3, seed=42)


@pytest.fixture
def bmp_file(tmp_path):
    def _write(grid, name="image.bmp"):
        path = tmp_path / name
        path.write_bytes(encode_bmp(grid))
        return path
    return _write
