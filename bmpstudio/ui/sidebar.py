"""Боковая панель: файл, информация, курсор, выбор преобразования и его параметры.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from bmpstudio.config import AppConfig
from bmpstudio.models.image_model import ImageData, Pixel
from bmpstudio.models.transform_model import TransformKind

NO_TRANSFORM = "Нет"

COLOR_KINDS = (
    TransformKind.VIGNETTE,
    TransformKind.CLARENDON,
    TransformKind.GRAYSCALE,
    TransformKind.HIGH_CONTRAST,
    TransformKind.LIGHTEN,
    TransformKind.DARKEN,
    TransformKind.FIVE_COLORS,
)
GEOMETRY_KINDS = (
    TransformKind.ROTATE_90,
    TransformKind.ROTATE,
    TransformKind.ENLARGE,
)


def _pixel_to_hex(pixel: Pixel) -> str:
    return f"#{pixel.red:02X}{pixel.green:02X}{pixel.blue:02X}"


def _format_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "Размер: —"
    if size_bytes < 1024:
        return f"Размер: {size_bytes} Б"
    return f"Размер: {size_bytes / 1024:.1f} КБ"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, курсор, обработка."""
    def __init__(self, master: ctk.CTk, config: AppConfig, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_save_file: Optional[Callable[[], None]] = None
        self.on_processing_change: Optional[Callable[[Optional[TransformKind]], None]] = None

        bold = ctk.CTkFont(size=16, weight="bold")

        # File
        self._title = ctk.CTkLabel(self, text="Файл", font=bold)
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")
        self._open_btn = ctk.CTkButton(self, text="Открыть BMP…", command=lambda: self._emit(self.on_open_file))
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._save_btn = ctk.CTkButton(self, text="Сохранить результат…", command=lambda: self._emit(self.on_save_file))
        self._save_btn.grid(row=2, column=0, padx=8, pady=(0, 12), sticky="ew")
        self._save_btn.configure(state="disabled")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=bold)
        self._info_title.grid(row=3, column=0, padx=8, pady=(8, 4), sticky="w")
        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._depth_val = ctk.StringVar(value="—")
        info_vars = (self._path_val, self._size_val, self._dims_val, self._depth_val)
        for offset, var in enumerate(info_vars):
            label = ctk.CTkLabel(self, textvariable=var, wraplength=250, anchor="w", justify="left")
            label.grid(row=4 + offset, column=0, padx=8, pady=(0, 2), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=bold)
        self._cursor_title.grid(row=8, column=0, padx=8, pady=(8, 4), sticky="w")
        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgb_val = ctk.StringVar(value="—")
        self._cursor_hex_val = ctk.StringVar(value="—")
        for offset, var in enumerate((self._cursor_xy_val, self._cursor_rgb_val, self._cursor_hex_val)):
            label = ctk.CTkLabel(self, textvariable=var, anchor="w", justify="left")
            label.grid(row=9 + offset, column=0, padx=8, pady=(0, 2), sticky="ew")

        # Обработка
        self._proc_title = ctk.CTkLabel(self, text="Обработка", font=bold)
        self._proc_title.grid(row=20, column=0, padx=8, pady=(8, 4), sticky="w")
        self._processing_mode = ctk.StringVar(value=NO_TRANSFORM)
        self._tabs = ctk.CTkTabview(self)
        self._tabs.grid(row=21, column=0, padx=8, pady=(0, 8), sticky="nsew")
        self._tabs.add("Цвет")
        self._tabs.add("Геометрия")
        self.grid_rowconfigure(21, weight=1)

        self._reset_btn = ctk.CTkButton(self, text="Показать оригинал", command=self._reset_to_original)
        self._reset_btn.grid(row=22, column=0, padx=8, pady=(0, 8), sticky="ew")

        color_tab = ctk.CTkScrollableFrame(self._tabs.tab("Цвет"))
        color_tab.pack(fill="both", expand=True)
        color_tab.grid_columnconfigure(0, weight=1)
        row = self._add_radio(color_tab, 0, None)
        for kind in COLOR_KINDS:
            row = self._add_radio(color_tab, row, kind)

        # Коэффициент для кларендона, осветления и затемнения
        self._factor_label = ctk.CTkLabel(color_tab, text="Коэффициент:")
        self._factor_label.grid(row=row, column=0, padx=6, pady=(8, 2), sticky="w")
        self._factors = {
            TransformKind.CLARENDON: config.clarendon_factor,
            TransformKind.LIGHTEN: config.lighten_factor,
            TransformKind.DARKEN: config.darken_factor,
        }
        self._factor_val = ctk.StringVar(value=f"{config.clarendon_factor:.2f}")
        self._factor_slider = ctk.CTkSlider(color_tab, from_=0.0, to=1.0, number_of_steps=100, command=self._on_factor_change)
        self._factor_slider.set(config.clarendon_factor)
        self._factor_slider.grid(row=row + 1, column=0, padx=6, pady=(0, 2), sticky="ew")
        self._factor_value = ctk.CTkLabel(color_tab, textvariable=self._factor_val, width=48, anchor="w")
        self._factor_value.grid(row=row + 2, column=0, padx=6, pady=(0, 6), sticky="w")

        geo_tab = self._tabs.tab("Геометрия")
        geo_tab.grid_columnconfigure(0, weight=1)
        row = 0
        for kind in GEOMETRY_KINDS:
            row = self._add_radio(geo_tab, row, kind)

        self._turns_val = ctk.StringVar(value="1")
        self._x_scale_val = ctk.StringVar(value=str(config.enlarge_x))
        self._y_scale_val = ctk.StringVar(value=str(config.enlarge_y))
        for caption, var in (
            ("Число поворотов на 90°:", self._turns_val),
            ("Масштаб X:", self._x_scale_val),
            ("Масштаб Y:", self._y_scale_val),
        ):
            ctk.CTkLabel(geo_tab, text=caption).grid(row=row, column=0, padx=6, pady=(6, 2), sticky="w")
            entry = ctk.CTkEntry(geo_tab, textvariable=var, width=80)
            entry.grid(row=row + 1, column=0, padx=6, pady=(0, 4), sticky="w")
            entry.bind("<FocusOut>", self._on_params_commit)
            entry.bind("<Return>", self._on_params_commit)
            row += 2

    # ---- public API ----
    def set_image_info(self, image: ImageData) -> None:
        self._path_val.set(f"Файл: {image.path}")
        self._size_val.set(_format_size(image.size_bytes))
        self._dims_val.set(f"Разрешение: {image.width} × {image.height} px")
        self._depth_val.set(f"Глубина цвета: {image.header.bits_per_pixel} бит")
        self._save_btn.configure(state="normal")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], pixel: Optional[Pixel]) -> None:
        if x is None or y is None or pixel is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgb_val.set("—")
            self._cursor_hex_val.set("—")
            return
        self._cursor_xy_val.set(f"x: {x}, y: {y}")
        self._cursor_rgb_val.set(f"RGB: {pixel.red}, {pixel.green}, {pixel.blue}")
        self._cursor_hex_val.set(_pixel_to_hex(pixel))

    def get_processing_kind(self) -> Optional[TransformKind]:
        value = self._processing_mode.get()
        if value == NO_TRANSFORM:
            return None
        return TransformKind[value]

    def get_factor(self, kind: TransformKind) -> float:
        return self._factors.get(kind, float(self._factor_slider.get()))

    def get_turns(self) -> int:
        """Raises ValueError, если в поле не целое число."""
        return int(self._turns_val.get().strip())

    def get_enlarge_scales(self) -> Tuple[int, int]:
        """Raises ValueError, если в полях не целые числа."""
        return int(self._x_scale_val.get().strip()), int(self._y_scale_val.get().strip())

    def set_processing_kind(self, kind: Optional[TransformKind]) -> None:
        self._processing_mode.set(NO_TRANSFORM if kind is None else kind.name)
        self._sync_factor_slider()

    # ---- internals ----
    def _add_radio(self, parent: ctk.CTkFrame, row: int, kind: Optional[TransformKind]) -> int:
        button = ctk.CTkRadioButton(
            parent,
            text=NO_TRANSFORM if kind is None else kind.label,
            variable=self._processing_mode,
            value=NO_TRANSFORM if kind is None else kind.name,
            command=self._emit_processing_change,
        )
        button.grid(row=row, column=0, padx=6, pady=(4, 2), sticky="w")
        return row + 1

    def _emit(self, callback: Optional[Callable[[], None]]) -> None:
        if callback:
            callback()

    def _emit_processing_change(self) -> None:
        self._sync_factor_slider()
        if self.on_processing_change:
            self.on_processing_change(self.get_processing_kind())

    def _sync_factor_slider(self) -> None:
        kind = self.get_processing_kind()
        if kind in self._factors:
            self._factor_slider.set(self._factors[kind])
            self._factor_val.set(f"{self._factors[kind]:.2f}")

    def _on_factor_change(self, value: float) -> None:
        kind = self.get_processing_kind()
        self._factor_val.set(f"{value:.2f}")
        if kind in self._factors:
            self._factors[kind] = float(value)
            if self.on_processing_change:
                self.on_processing_change(kind)

    def _on_params_commit(self, _event=None) -> None:
        kind = self.get_processing_kind()
        if kind in (TransformKind.ROTATE, TransformKind.ENLARGE) and self.on_processing_change:
            self.on_processing_change(kind)

    def _reset_to_original(self) -> None:
        self.set_processing_kind(None)
        if self.on_processing_change:
            self.on_processing_change(None)
