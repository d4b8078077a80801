from __future__ import annotations

import logging
import math
from numbers import Integral, Real

import numpy as np

from bmpstudio.errors import TransformParameterError
from bmpstudio.models.image_model import Grid
from bmpstudio.models.transform_model import (
    Clarendon,
    Darken,
    Enlarge,
    FiveColors,
    Grayscale,
    HighContrast,
    Lighten,
    Rotate,
    Rotate90,
    Transform,
    Vignette,
)

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


class ProcessService:
    """Десять попиксельных и геометрических преобразований над `Grid`.

    Все методы чистые: исходная сетка не меняется, результат — новая `Grid`.
    Канальная арифметика выполняется в float64 с отбрасыванием дробной части
    (усечение к нулю, не округление) и последующим ограничением в [0, 255].
    """

    # ---------- Вспомогательные функции ----------
    def _channels(self, grid: Grid) -> np.ndarray:
        """Возвращает копию пикселей в int64, чтобы суммы каналов не переполнялись."""
        return grid.pixels.astype(np.int64)

    def _to_grid(self, values: np.ndarray) -> Grid:
        """Усекает к нулю, ограничивает диапазоном [0, 255] и упаковывает в `Grid`."""
        truncated = np.trunc(values)
        return Grid(np.clip(truncated, 0, 255).astype(np.uint8))

    def _average(self, grid: Grid) -> np.ndarray:
        """Среднее (r+g+b)/3 с целочисленным делением, форма (H, W)."""
        return self._channels(grid).sum(axis=2) // 3

    def _check_factor(self, name: str, factor: float) -> float:
        if isinstance(factor, bool) or not isinstance(factor, Real) or not math.isfinite(factor) or factor < 0:
            raise TransformParameterError(name, factor, f"Коэффициент {name} должен быть конечным числом ≥ 0: {factor!r}")
        return float(factor)

    def _check_integer(self, name: str, value: int, minimum: int | None = None) -> int:
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise TransformParameterError(name, value, f"Параметр {name} должен быть целым: {value!r}")
        if minimum is not None and value < minimum:
            raise TransformParameterError(name, value, f"Параметр {name} должен быть ≥ {minimum}: {value!r}")
        return int(value)

    def _lighten_values(self, channels: np.ndarray, factor: float) -> np.ndarray:
        return 255 - (255 - channels) * factor

    # ---------- 1) Виньетка ----------
    def vignette(self, grid: Grid) -> Grid:
        """
        Затемнение к краям: factor = (H - d) / H, где d — расстояние до центра
        (W // 2, H // 2). Каждый канал умножается на factor.
        """
        height, width = grid.height, grid.width
        rows = np.arange(height).reshape(-1, 1)
        cols = np.arange(width).reshape(1, -1)
        distance = np.sqrt((cols - width // 2) ** 2.0 + (rows - height // 2) ** 2.0)
        factor = (height - distance) / height
        return self._to_grid(self._channels(grid) * factor[:, :, np.newaxis])

    # ---------- 2) Кларендон ----------
    def clarendon(self, grid: Grid, factor: float) -> Grid:
        """
        Светлые пиксели (среднее ≥ 170) осветляются, тёмные (< 90) затемняются
        с одним и тем же коэффициентом; средние тона не меняются.
        """
        factor = self._check_factor("factor", factor)
        channels = self._channels(grid)
        avg = self._average(grid)[:, :, np.newaxis]
        out = np.where(
            avg >= 170,
            self._lighten_values(channels, factor),
            np.where(avg < 90, channels * factor, channels),
        )
        return self._to_grid(out)

    # ---------- 3) Оттенки серого ----------
    def to_grayscale(self, grid: Grid) -> Grid:
        """Все три канала = (r+g+b) // 3."""
        gray = self._average(grid)
        return Grid(np.repeat(gray[:, :, np.newaxis], 3, axis=2))

    # ---------- 4, 5) Повороты ----------
    def rotate_90(self, grid: Grid) -> Grid:
        """
        Поворот на четверть оборота по часовой стрелке:
        пиксель (row, col) переходит в (col, H - 1 - row).
        """
        return Grid(np.rot90(grid.pixels, k=-1, axes=(0, 1)))

    def rotate(self, grid: Grid, turns: int) -> Grid:
        """
        Поворот на turns × 90° по часовой стрелке. Угол берётся по модулю 360
        в математическом смысле, поэтому turns = -1 эквивалентно turns = 3.
        """
        turns = self._check_integer("turns", turns)
        angle = (turns * 90) % 360
        if angle == 0:
            return Grid(grid.pixels)
        out = grid
        for _ in range(angle // 90):
            out = self.rotate_90(out)
        return out

    # ---------- 6) Увеличение ----------
    def enlarge(self, grid: Grid, x_scale: int, y_scale: int) -> Grid:
        """
        Увеличение методом ближайшего соседа: результат W·x × H·y,
        пиксель (row, col) берётся из (row // y, col // x).
        """
        x_scale = self._check_integer("x_scale", x_scale, minimum=1)
        y_scale = self._check_integer("y_scale", y_scale, minimum=1)
        rows = np.arange(grid.height * y_scale) // y_scale
        cols = np.arange(grid.width * x_scale) // x_scale
        return Grid(grid.pixels[rows[:, np.newaxis], cols[np.newaxis, :]])

    # ---------- 7) Высокий контраст ----------
    def high_contrast(self, grid: Grid) -> Grid:
        """Порог по среднему: ≥ 127 → белый, иначе чёрный."""
        mask = self._average(grid) >= 255 // 2
        out = np.where(mask[:, :, np.newaxis], np.array(WHITE), np.array(BLACK))
        return Grid(out)

    # ---------- 8, 9) Осветление и затемнение ----------
    def lighten(self, grid: Grid, factor: float) -> Grid:
        """Каждый канал = 255 - (255 - c) · factor; factor обычно в [0, 1]."""
        factor = self._check_factor("factor", factor)
        return self._to_grid(self._lighten_values(self._channels(grid), factor))

    def darken(self, grid: Grid, factor: float) -> Grid:
        """Каждый канал = c · factor; factor обычно в [0, 1]."""
        factor = self._check_factor("factor", factor)
        return self._to_grid(self._channels(grid) * factor)

    # ---------- 10) Пять цветов ----------
    def five_colors(self, grid: Grid) -> Grid:
        """
        Квантование в белый, чёрный, красный, зелёный, синий:
        сумма ≥ 550 → белый; < 150 → чёрный; затем строго доминирующий
        красный или зелёный; всё остальное (включая равенства) → синий.
        """
        channels = self._channels(grid)
        r, g, b = channels[:, :, 0], channels[:, :, 1], channels[:, :, 2]
        total = r + g + b
        conditions = [
            total >= 550,
            total < 150,
            (r > g) & (r > b),
            (g > r) & (g > b),
        ]
        palette = [np.array(WHITE), np.array(BLACK), np.array(RED), np.array(GREEN)]
        out = np.broadcast_to(np.array(BLUE), channels.shape).copy()
        # обратный порядок: первое сработавшее условие должно победить
        for condition, color in reversed(list(zip(conditions, palette))):
            out[condition] = color
        return Grid(out)

    # ---------- Диспетчеризация ----------
    def apply(self, grid: Grid, transform: Transform) -> Grid:
        """Применяет преобразование, описанное значением из `transform_model`.

        Raises:
            TransformParameterError: если параметры преобразования недопустимы.
        """
        logger.debug("Применение %s к сетке %dx%d", transform, grid.width, grid.height)
        if isinstance(transform, Vignette):
            return self.vignette(grid)
        if isinstance(transform, Clarendon):
            return self.clarendon(grid, transform.factor)
        if isinstance(transform, Grayscale):
            return self.to_grayscale(grid)
        if isinstance(transform, Rotate90):
            return self.rotate_90(grid)
        if isinstance(transform, Rotate):
            return self.rotate(grid, transform.turns)
        if isinstance(transform, Enlarge):
            return self.enlarge(grid, transform.x_scale, transform.y_scale)
        if isinstance(transform, HighContrast):
            return self.high_contrast(grid)
        if isinstance(transform, Lighten):
            return self.lighten(grid, transform.factor)
        if isinstance(transform, Darken):
            return self.darken(grid, transform.factor)
        if isinstance(transform, FiveColors):
            return self.five_colors(grid)
        raise TypeError(f"Неизвестное преобразование: {transform!r}")
