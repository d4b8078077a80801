"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки изображений).
- DIP: работает с `PipelineService`; чтение, преобразования и запись инкапсулированы в нём.
Clean Code:
- Состояние сеанса (текущий файл, результат) хранится в полях контроллера, а не глобально.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from tkinter import filedialog, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from bmpstudio.models.image_model import DecodeFailure, Grid, ImageData, Pixel
from bmpstudio.models.transform_model import TransformKind, build_transform
from bmpstudio.services.pipeline_service import PipelineService
from bmpstudio.ui.bottom_bar import BottomBar
from bmpstudio.ui.image_viewer import ImageViewer
from bmpstudio.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

BMP_FILETYPES = (("BMP", "*.bmp"), ("All files", "*.*"))


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Загрузка и сохранение BMP через `PipelineService`.
    - Применение выбранного преобразования к исходной сетке (она не меняется).
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _pipeline: PipelineService = field(default_factory=PipelineService)
    _current_image: Optional[ImageData] = None
    _processed: Optional[Grid] = None
    _processing_kind: Optional[TransformKind] = None

    def bind_events(self) -> None:
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_save_file = self._handle_save_file
        self.sidebar.on_processing_change = self._handle_processing_change

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._sync_zoom

        self.bottom.on_zoom_change = self.viewer.set_zoom_percent
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_compare_mode_change = self.viewer.set_compare_mode

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(title="Выберите BMP", filetypes=BMP_FILETYPES)
        except TclError:
            return
        if file_path:
            self.open_path(file_path)

    def _handle_save_file(self) -> None:
        if self._current_image is None:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить как", defaultextension=".bmp", filetypes=BMP_FILETYPES
            )
        except TclError:
            return
        if file_path:
            self.save_path(file_path)

    def _handle_processing_change(self, kind: Optional[TransformKind]) -> None:
        self._processing_kind = kind
        self._apply_processing()

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], pixel: Optional[Pixel]) -> None:
        self.sidebar.update_cursor_info(x, y, pixel)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self._sync_zoom(self.viewer.get_zoom_percent())

    def _sync_zoom(self, zoom_percent: int) -> None:
        self.bottom.set_zoom_percent(zoom_percent)

    # ---- Session operations ----
    def open_path(self, file_path: str) -> None:
        """Загружает новый исходный файл; при ошибке прежнее изображение остаётся."""
        loaded = self._pipeline.image_service.load_image(file_path)
        if isinstance(loaded, DecodeFailure):
            self.bottom.set_status(f"Не удалось открыть {loaded.path.name}: {loaded.reason}", error=True)
            return
        self._current_image = loaded
        self.viewer.set_grid(loaded.grid)
        self.sidebar.set_image_info(loaded)
        self._apply_processing()
        self._sync_zoom(self.viewer.get_zoom_percent())
        self.bottom.set_status(f"Открыт {loaded.path.name}: {loaded.width} × {loaded.height} px")

    def save_path(self, file_path: str) -> None:
        """Сохраняет результат (или оригинал, если преобразование не выбрано)."""
        if self._current_image is None:
            return
        grid = self._processed if self._processed is not None else self._current_image.grid
        result = self._pipeline.save(file_path, grid)
        self.bottom.set_status(result.message, error=not result.ok)

    # ---- Helpers ----
    def _read_int_params(self, kind: TransformKind) -> Tuple[int, int, int]:
        """Raises ValueError, если в полях поворотов или масштабов не целые числа."""
        turns, (x_scale, y_scale) = 1, (1, 1)
        if kind is TransformKind.ROTATE:
            turns = self.sidebar.get_turns()
        elif kind is TransformKind.ENLARGE:
            x_scale, y_scale = self.sidebar.get_enlarge_scales()
        return turns, x_scale, y_scale

    def _clear_processed(self) -> None:
        self._processed = None
        self.viewer.set_processed_grid(None)

    def _apply_processing(self) -> None:
        """Применяет выбранное преобразование к исходной сетке текущего файла.

        При любой ошибке прежний результат сбрасывается: сохраняться будет оригинал.
        """
        if self._current_image is None:
            return
        kind = self._processing_kind
        if kind is None:
            self._clear_processed()
            return
        try:
            turns, x_scale, y_scale = self._read_int_params(kind)
        except ValueError:
            self._clear_processed()
            self.bottom.set_status("Число поворотов и масштабы X/Y должны быть целыми числами", error=True)
            return
        factor = self.sidebar.get_factor(kind)
        transform = build_transform(kind, factor=factor, turns=turns, x_scale=x_scale, y_scale=y_scale)
        result = self._pipeline.transform_grid(self._current_image.grid, transform)
        self.bottom.set_status(result.message, error=not result.ok)
        if not result.ok:
            self._clear_processed()
            return
        self._processed = result.output_grid
        self.viewer.set_processed_grid(self._processed)
