import struct

import pytest

pytest.importorskip("customtkinter")

from bmpstudio.controllers.app_controller import AppController
from bmpstudio.models.transform_model import TransformKind
from bmpstudio.services.image_service import ImageService
from bmpstudio.services.process_service import ProcessService
from conftest import random_grid


class StubViewer:
    def __init__(self):
        self.grid = None
        self.processed = None

    def set_grid(self, grid):
        self.grid = grid

    def set_processed_grid(self, grid):
        self.processed = grid

    def get_zoom_percent(self):
        return 100

    def set_zoom_to_fit(self):
        pass


class StubSidebar:
    """Отдаёт параметры как настоящая панель: нецелое поле даёт ValueError."""
    def __init__(self):
        self.info = None
        self.turns = "1"
        self.scales = ("2", "2")

    def set_image_info(self, image):
        self.info = image

    def update_cursor_info(self, x, y, pixel):
        pass

    def get_factor(self, kind):
        return 0.5

    def get_turns(self):
        return int(self.turns)

    def get_enlarge_scales(self):
        return int(self.scales[0]), int(self.scales[1])


class StubBottom:
    def __init__(self):
        self.messages = []

    def set_status(self, message, error=False):
        self.messages.append((message, error))

    def set_zoom_percent(self, zoom_percent):
        pass

    @property
    def last_error(self):
        return self.messages[-1][1]


@pytest.fixture
def controller():
    return AppController(viewer=StubViewer(), sidebar=StubSidebar(), bottom=StubBottom(), window=None)


def test_open_shows_image_and_info(controller, bmp_file):
    source = random_grid(3, 2)
    controller.open_path(str(bmp_file(source)))

    assert controller.viewer.grid == source
    assert controller.viewer.processed is None
    assert (controller.sidebar.info.width, controller.sidebar.info.height) == (3, 2)
    assert controller.bottom.last_error is False


def test_failed_open_keeps_previous_image(controller, bmp_file):
    first = random_grid(3, 2)
    controller.open_path(str(bmp_file(first, "a.bmp")))
    broken = bmp_file(random_grid(2, 2), "broken.bmp")
    data = bytearray(broken.read_bytes())
    data[2:6] = struct.pack("<I", 999)
    broken.write_bytes(bytes(data))

    controller.open_path(str(broken))

    assert controller.bottom.last_error is True
    assert "broken.bmp" in controller.bottom.messages[-1][0]
    assert controller.viewer.grid == first
    assert controller.sidebar.info.path.name == "a.bmp"


def test_valid_enlarge_sets_processed_grid(controller, bmp_file):
    source = random_grid(3, 2)
    controller.open_path(str(bmp_file(source)))
    controller._handle_processing_change(TransformKind.ENLARGE)

    expected = ProcessService().enlarge(source, 2, 2)
    assert controller.viewer.processed == expected
    assert controller.bottom.last_error is False


def test_invalid_scale_clears_processed_grid(controller, bmp_file):
    controller.open_path(str(bmp_file(random_grid(3, 2))))
    controller._handle_processing_change(TransformKind.ENLARGE)
    assert controller.viewer.processed is not None

    controller.sidebar.scales = ("0", "2")
    controller._handle_processing_change(TransformKind.ENLARGE)

    assert controller.viewer.processed is None
    assert controller.bottom.last_error is True


def test_non_integer_turns_clears_processed_grid(controller, bmp_file):
    controller.open_path(str(bmp_file(random_grid(3, 2))))
    controller._handle_processing_change(TransformKind.ROTATE)
    assert controller.viewer.processed is not None

    controller.sidebar.turns = "1.5"
    controller._handle_processing_change(TransformKind.ROTATE)

    assert controller.viewer.processed is None
    message, error = controller.bottom.messages[-1]
    assert error is True
    assert "поворотов" in message


def test_save_writes_processed_grid(controller, bmp_file, tmp_path):
    source = random_grid(3, 2)
    controller.open_path(str(bmp_file(source)))
    controller._handle_processing_change(TransformKind.ROTATE_90)
    out = tmp_path / "out.bmp"

    controller.save_path(str(out))

    assert controller.bottom.last_error is False
    assert ImageService().read_image(out) == ProcessService().rotate_90(source)


def test_save_without_transform_writes_original(controller, bmp_file, tmp_path):
    source = random_grid(3, 2)
    controller.open_path(str(bmp_file(source)))
    out = tmp_path / "out.bmp"

    controller.save_path(str(out))

    assert ImageService().read_image(out) == source


def test_save_after_failed_apply_on_new_file_writes_new_original(controller, bmp_file, tmp_path):
    first = random_grid(3, 2, seed=1)
    second = random_grid(4, 4, seed=2)
    controller.open_path(str(bmp_file(first, "a.bmp")))
    controller._handle_processing_change(TransformKind.ENLARGE)
    controller.sidebar.scales = ("0", "2")
    controller.open_path(str(bmp_file(second, "b.bmp")))
    out = tmp_path / "out.bmp"

    controller.save_path(str(out))

    assert ImageService().read_image(out) == second
