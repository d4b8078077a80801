"""Виджет просмотра: масштаб, панорамирование и сравнение «до/после».

Принципы:
- SRP: отвечает только за отображение `Grid` и события мыши над ним.
- Пиксели масштабируются без сглаживания (NEAREST), чтобы результат
  увеличения и пороговых преобразований был виден как есть.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

from bmpstudio.models.image_model import Grid, Pixel

SIDE_BY_SIDE_GAP = 16
MIN_SCALE = 0.1
MAX_SCALE = 8.0


class ImageViewer(ctk.CTkFrame):
    """Канва с исходной и обработанной сеткой: одиночный вид или 2-up."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._original: Optional[Grid] = None
        self._processed: Optional[Grid] = None
        self._original_pil: Optional[Image.Image] = None
        self._processed_pil: Optional[Image.Image] = None
        self._tk_images: list[ImageTk.PhotoImage] = []

        self._scale_factor: float = 1.0
        self._top_left: Optional[Tuple[int, int]] = None
        self._pan_anchor: Optional[Tuple[int, int, int, int]] = None

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Pixel]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._side_by_side: bool = False
        self._hold_before: bool = False

        self._canvas.bind("<Configure>", lambda _e: self._render())
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", self._on_mouse_leave)
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down
        self._canvas.bind("<ButtonPress-1>", self._on_pan_start)
        self._canvas.bind("<B1-Motion>", self._on_pan_move)
        self._canvas.bind("<ButtonRelease-1>", self._on_pan_end)
        self._canvas.bind("<KeyPress-space>", lambda _e: self._set_hold_before(True))
        self._canvas.bind("<KeyRelease-space>", lambda _e: self._set_hold_before(False))

    # ---- Public API ----
    def set_grid(self, grid: Grid) -> None:
        """Показывает новую исходную сетку и сбрасывает результат и масштаб."""
        self._original = grid
        self._original_pil = grid.to_pil()
        self._processed = None
        self._processed_pil = None
        self.set_zoom_to_fit()

    def set_processed_grid(self, grid: Optional[Grid]) -> None:
        """Показывает результат преобразования (None — только оригинал)."""
        self._processed = grid
        self._processed_pil = grid.to_pil() if grid is not None else None
        self._top_left = None
        self._render()

    def set_zoom_to_fit(self) -> None:
        self._scale_factor = self._fit_scale()
        self._top_left = None
        self._render()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        self._scale_factor = max(MIN_SCALE, min(MAX_SCALE, zoom_percent / 100.0))
        self._render()

    def get_zoom_percent(self) -> int:
        return int(round(self._scale_factor * 100))

    def set_compare_mode(self, mode: str) -> None:
        """Режим сравнения: 'Нет' | '2-up'."""
        self._side_by_side = mode == "2-up"
        self._top_left = None
        self._render()

    # ---- Rendering ----
    def _shown_sizes(self) -> list[Tuple[int, int]]:
        sizes = []
        for image in self._visible_images():
            w, h = image.size
            sizes.append((max(1, int(w * self._scale_factor)), max(1, int(h * self._scale_factor))))
        return sizes

    def _visible_images(self) -> list[Image.Image]:
        if self._original_pil is None:
            return []
        after = self._processed_pil if self._processed_pil is not None and not self._hold_before else None
        if self._side_by_side and self._processed_pil is not None:
            # правая половина при удержании пробела тоже показывает оригинал
            return [self._original_pil, after or self._original_pil]
        return [after or self._original_pil]

    def _render(self) -> None:
        self._canvas.delete("all")
        self._tk_images = []
        images = self._visible_images()
        if not images:
            return

        sizes = self._shown_sizes()
        content_w = sum(w for w, _ in sizes) + SIDE_BY_SIDE_GAP * (len(sizes) - 1)
        content_h = max(h for _, h in sizes)
        canvas_w = int(self._canvas.winfo_width())
        canvas_h = int(self._canvas.winfo_height())

        if self._top_left is None:
            self._top_left = (max(0, (canvas_w - content_w) // 2), max(0, (canvas_h - content_h) // 2))
        x, y = self._top_left
        for image, size in zip(images, sizes):
            tk_image = ImageTk.PhotoImage(image.resize(size, Image.Resampling.NEAREST))
            self._tk_images.append(tk_image)
            self._canvas.create_image(x, y, image=tk_image, anchor="nw")
            x += size[0] + SIDE_BY_SIDE_GAP

    def _fit_scale(self) -> float:
        if self._original_pil is None:
            return 1.0
        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))
        img_w, img_h = self._original_pil.size
        return max(MIN_SCALE, min(MAX_SCALE, canvas_w / img_w, canvas_h / img_h))

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    # ---- Cursor ----
    def _grid_under(self, cx: int, cy: int) -> Tuple[Optional[Grid], int, int]:
        if self._top_left is None:
            return None, 0, 0
        grids = [self._original]
        if self._side_by_side and self._processed is not None:
            grids.append(self._processed if not self._hold_before else self._original)
        elif self._processed is not None and not self._hold_before:
            grids = [self._processed]
        x, y = self._top_left
        for grid, (w, h) in zip(grids, self._shown_sizes()):
            if grid is not None and x <= cx < x + w and y <= cy < y + h:
                col = min(grid.width - 1, int((cx - x) / self._scale_factor))
                row = min(grid.height - 1, int((cy - y) / self._scale_factor))
                return grid, row, col
            x += w + SIDE_BY_SIDE_GAP
        return None, 0, 0

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self.on_cursor_move is None:
            return
        grid, row, col = self._grid_under(event.x, event.y)
        if grid is None:
            self.on_cursor_move(None, None, None)
            return
        self.on_cursor_move(col, row, grid.pixel(row, col))

    def _on_mouse_leave(self, _event: tk.Event) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(None, None, None)

    def _set_hold_before(self, active: bool) -> None:
        if self._hold_before != active:
            self._hold_before = active
            self._render()

    # ---- Zoom / pan ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if event.delta:
            self._zoom_at_point(event.x, event.y, 1.1 if event.delta > 0 else 1.0 / 1.1)

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        self._zoom_at_point(event.x, event.y, 1.1 if getattr(event, "num", None) == 4 else 1.0 / 1.1)

    def _zoom_at_point(self, cx: int, cy: int, factor: float) -> None:
        if self._top_left is None or self._original is None:
            return
        old_scale = self._scale_factor
        new_scale = max(MIN_SCALE, min(MAX_SCALE, old_scale * factor))
        if abs(new_scale - old_scale) < 1e-6:
            return
        # точка под курсором остаётся на месте
        ox, oy = self._top_left
        self._top_left = (
            int(round(cx - (cx - ox) / old_scale * new_scale)),
            int(round(cy - (cy - oy) / old_scale * new_scale)),
        )
        self._scale_factor = new_scale
        self._render()
        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    def _on_pan_start(self, event: tk.Event) -> None:
        if self._top_left is None:
            return
        self._canvas.focus_set()
        self._pan_anchor = (event.x, event.y, *self._top_left)

    def _on_pan_move(self, event: tk.Event) -> None:
        if self._pan_anchor is None:
            return
        sx, sy, ox, oy = self._pan_anchor
        self._top_left = (ox + event.x - sx, oy + event.y - sy)
        self._render()

    def _on_pan_end(self, _event: tk.Event) -> None:
        self._pan_anchor = None
