"""Описание преобразований: закрытый набор видов и их параметров.

Каждому виду соответствует свой неизменяемый класс параметров, поэтому
контроллер и CLI передают в `ProcessService.apply` типизированное значение,
а не строку режима.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class TransformKind(Enum):
    VIGNETTE = 1
    CLARENDON = 2
    GRAYSCALE = 3
    ROTATE_90 = 4
    ROTATE = 5
    ENLARGE = 6
    HIGH_CONTRAST = 7
    LIGHTEN = 8
    DARKEN = 9
    FIVE_COLORS = 10

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def cli_name(self) -> str:
        return self.name.lower().replace("_", "-")


_LABELS = {
    TransformKind.VIGNETTE: "Виньетка",
    TransformKind.CLARENDON: "Кларендон",
    TransformKind.GRAYSCALE: "Оттенки серого",
    TransformKind.ROTATE_90: "Поворот на 90°",
    TransformKind.ROTATE: "Поворот на N×90°",
    TransformKind.ENLARGE: "Увеличение",
    TransformKind.HIGH_CONTRAST: "Высокий контраст",
    TransformKind.LIGHTEN: "Осветление",
    TransformKind.DARKEN: "Затемнение",
    TransformKind.FIVE_COLORS: "Пять цветов",
}


@dataclass(frozen=True)
class Vignette:
    kind: ClassVar[TransformKind] = TransformKind.VIGNETTE


@dataclass(frozen=True)
class Clarendon:
    factor: float
    kind: ClassVar[TransformKind] = TransformKind.CLARENDON


@dataclass(frozen=True)
class Grayscale:
    kind: ClassVar[TransformKind] = TransformKind.GRAYSCALE


@dataclass(frozen=True)
class Rotate90:
    kind: ClassVar[TransformKind] = TransformKind.ROTATE_90


@dataclass(frozen=True)
class Rotate:
    turns: int
    kind: ClassVar[TransformKind] = TransformKind.ROTATE


@dataclass(frozen=True)
class Enlarge:
    x_scale: int
    y_scale: int
    kind: ClassVar[TransformKind] = TransformKind.ENLARGE


@dataclass(frozen=True)
class HighContrast:
    kind: ClassVar[TransformKind] = TransformKind.HIGH_CONTRAST


@dataclass(frozen=True)
class Lighten:
    factor: float
    kind: ClassVar[TransformKind] = TransformKind.LIGHTEN


@dataclass(frozen=True)
class Darken:
    factor: float
    kind: ClassVar[TransformKind] = TransformKind.DARKEN


@dataclass(frozen=True)
class FiveColors:
    kind: ClassVar[TransformKind] = TransformKind.FIVE_COLORS


Transform = Union[
    Vignette, Clarendon, Grayscale, Rotate90, Rotate, Enlarge, HighContrast, Lighten, Darken, FiveColors
]


def build_transform(
    kind: TransformKind,
    factor: float = 0.5,
    turns: int = 1,
    x_scale: int = 2,
    y_scale: int = 2,
) -> Transform:
    """Собирает параметры преобразования по его виду.

    Лишние аргументы игнорируются: например, для `GRAYSCALE` параметры не нужны.
    Проверка значений выполняется в `ProcessService`, а не здесь.
    """
    if kind is TransformKind.CLARENDON:
        return Clarendon(factor)
    if kind is TransformKind.LIGHTEN:
        return Lighten(factor)
    if kind is TransformKind.DARKEN:
        return Darken(factor)
    if kind is TransformKind.ROTATE:
        return Rotate(turns)
    if kind is TransformKind.ENLARGE:
        return Enlarge(x_scale, y_scale)
    simple = {
        TransformKind.VIGNETTE: Vignette,
        TransformKind.GRAYSCALE: Grayscale,
        TransformKind.ROTATE_90: Rotate90,
        TransformKind.HIGH_CONTRAST: HighContrast,
        TransformKind.FIVE_COLORS: FiveColors,
    }
    return simple[kind]()
