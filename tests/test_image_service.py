import struct

from bmpstudio.models.image_model import DecodeFailure, Grid, ImageData
from bmpstudio.services import bmp_codec
from bmpstudio.services.image_service import ImageService
from conftest import random_grid


def test_write_then_read(tmp_path, sample_grid):
    service = ImageService()
    path = tmp_path / "out.bmp"
    assert service.write_image(path, sample_grid) is True
    assert service.read_image(path) == sample_grid


def test_load_image_reports_metadata(bmp_file):
    path = bmp_file(random_grid(5, 1))
    loaded = ImageService().load_image(path)
    assert isinstance(loaded, ImageData)
    assert (loaded.width, loaded.height) == (5, 1)
    assert loaded.header.bits_per_pixel == 24
    assert loaded.size_bytes == 54 + 16


def test_corrupt_file_returns_failure(tmp_path, bmp_file, caplog):
    path = bmp_file(random_grid(3, 3))
    data = bytearray(path.read_bytes())
    data[2:6] = struct.pack("<I", 12345)
    path.write_bytes(bytes(data))

    result = ImageService().read_image(path)
    assert isinstance(result, DecodeFailure)
    assert not result
    assert result.path == path
    assert any(record.levelname == "WARNING" for record in caplog.records)


def test_missing_file_returns_failure(tmp_path):
    result = ImageService().read_image(tmp_path / "nope.bmp")
    assert isinstance(result, DecodeFailure)


def test_unwritable_destination_returns_false(tmp_path, sample_grid):
    target = tmp_path / "missing-dir" / "out.bmp"
    assert ImageService().write_image(target, sample_grid) is False
    assert not target.exists()


def test_write_does_not_mutate_grid(tmp_path):
    grid = Grid.from_rows([[(1, 2, 3), (4, 5, 6)]])
    before = grid.to_rows()
    ImageService().write_image(tmp_path / "a.bmp", grid)
    assert grid.to_rows() == before


def test_load_image_parses_header_once(bmp_file, monkeypatch):
    path = bmp_file(random_grid(4, 2))
    calls = []
    original = bmp_codec.parse_header

    def counting_parse_header(data):
        calls.append(len(data))
        return original(data)

    monkeypatch.setattr(bmp_codec, "parse_header", counting_parse_header)
    loaded = ImageService().load_image(path)

    assert isinstance(loaded, ImageData)
    assert loaded.header == original(path.read_bytes())
    assert len(calls) == 1
