"""Полный цикл для одного пункта меню: чтение → преобразование → запись.

Ошибки любого шага возвращаются в `PipelineResult`, исключения наружу не выходят.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from bmpstudio.errors import TransformParameterError
from bmpstudio.models.image_model import DecodeFailure, Grid
from bmpstudio.models.transform_model import Transform
from bmpstudio.services.image_service import ImageService
from bmpstudio.services.process_service import ProcessService

logger = logging.getLogger(__name__)

BMP_SUFFIX = ".bmp"


def has_bmp_suffix(file_path: str | Path) -> bool:
    return Path(file_path).suffix.lower() == BMP_SUFFIX


@dataclass(frozen=True)
class PipelineResult:
    """Итог выполнения: признак успеха, сообщение для пользователя и результат."""
    ok: bool
    message: str
    output_grid: Optional[Grid] = None


@dataclass
class PipelineService:
    image_service: ImageService = field(default_factory=ImageService)
    process_service: ProcessService = field(default_factory=ProcessService)

    def transform_grid(self, grid: Grid, transform: Transform) -> PipelineResult:
        """Применяет преобразование к уже загруженной сетке."""
        try:
            output = self.process_service.apply(grid, transform)
        except TransformParameterError as exc:
            logger.warning("Недопустимые параметры %s: %s", transform, exc)
            return PipelineResult(False, str(exc))
        return PipelineResult(True, f"{transform.kind.label}: применено", output)

    def save(self, output_path: str | Path, grid: Grid) -> PipelineResult:
        if not has_bmp_suffix(output_path):
            return PipelineResult(False, f"Имя выходного файла должно оканчиваться на {BMP_SUFFIX}: {output_path}")
        if not self.image_service.write_image(output_path, grid):
            return PipelineResult(False, f"Не удалось записать {output_path}")
        return PipelineResult(True, f"Сохранено: {output_path}", grid)

    def run(self, input_path: str | Path, output_path: str | Path, transform: Transform) -> PipelineResult:
        """Читает `input_path`, применяет `transform` и пишет результат в `output_path`."""
        if not has_bmp_suffix(input_path):
            return PipelineResult(False, f"Входной файл должен оканчиваться на {BMP_SUFFIX}: {input_path}")
        if not has_bmp_suffix(output_path):
            return PipelineResult(False, f"Имя выходного файла должно оканчиваться на {BMP_SUFFIX}: {output_path}")

        source = self.image_service.read_image(input_path)
        if isinstance(source, DecodeFailure):
            return PipelineResult(False, f"Не удалось прочитать {input_path}: {source.reason}")

        transformed = self.transform_grid(source, transform)
        if not transformed.ok or transformed.output_grid is None:
            return transformed

        saved = self.save(output_path, transformed.output_grid)
        if not saved.ok:
            return saved
        logger.info("%s: %s -> %s", transform.kind.cli_name, input_path, output_path)
        return PipelineResult(True, f"{transform.kind.label}: успешно применено, результат в {output_path}", saved.output_grid)
