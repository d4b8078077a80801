"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`, массив только для чтения) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Sequence

import numpy as np
from PIL import Image


class Pixel(NamedTuple):
    red: int
    green: int
    blue: int


@dataclass(frozen=True, eq=False)
class Grid:
    """Неизменяемая сетка пикселей RGB.

    Fields:
        pixels: массив numpy формы (height, width, 3), dtype uint8, строка 0 — верхняя.

    Конструктор копирует массив и запрещает в нём запись, так что любое
    преобразование обязано вернуть новую сетку.
    """
    pixels: np.ndarray

    def __post_init__(self) -> None:
        arr = np.asarray(self.pixels)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"Ожидается массив формы (H, W, 3), получено {arr.shape}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError("Пустое изображение: ширина и высота должны быть больше 0")
        if arr.dtype != np.uint8:
            if arr.size and (arr.min() < 0 or arr.max() > 255):
                raise ValueError("Значения каналов должны лежать в диапазоне [0, 255]")
        arr = np.array(arr, dtype=np.uint8, copy=True)
        arr.setflags(write=False)
        object.__setattr__(self, "pixels", arr)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Iterable[int]]]) -> "Grid":
        """Строит сетку из вложенных строк пикселей (кортежей r, g, b)."""
        if not rows:
            raise ValueError("Пустое изображение: нет ни одной строки")
        width = len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Строка {index} имеет длину {len(row)}, ожидалось {width}")
        return cls(np.array([[tuple(p) for p in row] for row in rows], dtype=np.int64))

    @classmethod
    def from_pil(cls, image: Image.Image) -> "Grid":
        # альфа-канал отбрасывается
        return cls(np.asarray(image.convert("RGB")))

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    def pixel(self, row: int, col: int) -> Pixel:
        r, g, b = self.pixels[row, col]
        return Pixel(int(r), int(g), int(b))

    def to_rows(self) -> List[List[Pixel]]:
        return [[Pixel(int(r), int(g), int(b)) for r, g, b in row] for row in self.pixels]

    def to_pil(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and bool(np.array_equal(self.pixels, other.pixels))

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"


@dataclass(frozen=True)
class BmpHeader:
    """Поля заголовка BMP, нужные для разбора массива пикселей.

    Fields:
        file_size: Размер файла, заявленный в заголовке (смещение 2).
        pixel_offset: Начало массива пикселей (смещение 10).
        width: Ширина, px (смещение 18).
        height: Высота, px (смещение 22).
        bits_per_pixel: Бит на пиксель (смещение 28).
    """
    file_size: int
    pixel_offset: int
    width: int
    height: int
    bits_per_pixel: int

    @property
    def bytes_per_pixel(self) -> int:
        return self.bits_per_pixel // 8

    @property
    def scanline_bytes(self) -> int:
        return self.width * self.bytes_per_pixel

    @property
    def padding(self) -> int:
        return (4 - self.scanline_bytes % 4) % 4

    @property
    def row_stride(self) -> int:
        return self.scanline_bytes + self.padding

    @property
    def expected_file_size(self) -> int:
        return self.pixel_offset + self.row_stride * self.height


@dataclass(frozen=True)
class DecodeFailure:
    """Результат неудачного чтения: файл повреждён, не BMP или недоступен."""
    path: Path
    reason: str

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель загруженного BMP и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        grid: Декодированные пиксели.
        header: Заголовок, из которого они прочитаны.
        size_bytes: Размер файла на диске, если доступен.
    """
    path: Path
    grid: Grid
    header: BmpHeader
    size_bytes: Optional[int]

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height
