import struct

import pytest

from bmpstudio.models.transform_model import Darken, Enlarge, Grayscale, Lighten, Rotate90
from bmpstudio.services.image_service import ImageService
from bmpstudio.services.pipeline_service import PipelineService, has_bmp_suffix
from bmpstudio.services.process_service import ProcessService
from conftest import random_grid


@pytest.fixture
def pipeline():
    return PipelineService()


def test_run_writes_transformed_image(tmp_path, bmp_file, pipeline):
    source = random_grid(5, 3, seed=7)
    src = bmp_file(source)
    dst = tmp_path / "result.bmp"

    result = pipeline.run(src, dst, Rotate90())

    assert result.ok, result.message
    expected = ProcessService().rotate_90(source)
    assert result.output_grid == expected
    assert ImageService().read_image(dst) == expected


def test_source_image_reusable_across_runs(tmp_path, bmp_file, pipeline):
    source = random_grid(4, 4, seed=1)
    src = bmp_file(source)
    pipeline.run(src, tmp_path / "a.bmp", Grayscale())
    pipeline.run(src, tmp_path / "b.bmp", Darken(0.5))
    assert ImageService().read_image(src) == source


def test_corrupt_input_reported(tmp_path, bmp_file, pipeline):
    src = bmp_file(random_grid(2, 2))
    data = bytearray(src.read_bytes())
    data[2:6] = struct.pack("<I", 1)
    src.write_bytes(bytes(data))
    dst = tmp_path / "out.bmp"

    result = pipeline.run(src, dst, Grayscale())

    assert not result.ok
    assert result.output_grid is None
    assert not dst.exists()


def test_invalid_parameters_reported(tmp_path, bmp_file, pipeline):
    dst = tmp_path / "out.bmp"
    result = pipeline.run(bmp_file(random_grid(2, 2)), dst, Enlarge(0, 2))
    assert not result.ok
    assert not dst.exists()


def test_unwritable_output_reported(tmp_path, bmp_file, pipeline):
    result = pipeline.run(bmp_file(random_grid(2, 2)), tmp_path / "no" / "out.bmp", Lighten(0.5))
    assert not result.ok


@pytest.mark.parametrize("src_name,dst_name", [("in.png", "out.bmp"), ("in.bmp", "out.png"), ("in.bmp", "out")])
def test_bmp_suffix_required(tmp_path, bmp_file, pipeline, src_name, dst_name):
    src = bmp_file(random_grid(1, 1), name=src_name)
    result = pipeline.run(src, tmp_path / dst_name, Grayscale())
    assert not result.ok
    assert not (tmp_path / dst_name).exists()


def test_suffix_check_is_case_insensitive():
    assert has_bmp_suffix("PHOTO.BMP")
    assert not has_bmp_suffix("photo.bmp.txt")
