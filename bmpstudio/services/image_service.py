"""Чтение и запись BMP-файлов на диске.

Принципы:
- SRP: класс отвечает только за файловый ввод-вывод вокруг кодека.
- Результаты вместо исключений: неудачное чтение возвращает `DecodeFailure`,
  неудачная запись возвращает `False`. Вызывающий обязан проверить результат.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from bmpstudio.errors import BmpFormatError
from bmpstudio.models.image_model import DecodeFailure, Grid, ImageData
from bmpstudio.services.bmp_codec import decode_bmp_with_header, encode_bmp

logger = logging.getLogger(__name__)


class ImageService:
    def read_image(self, file_path: str | Path) -> Union[Grid, DecodeFailure]:
        """Декодирует BMP-файл.

        Returns:
            `Grid` при успехе; `DecodeFailure` с причиной, если файл не найден,
            не читается или не является корректным 24/32-битным BMP.
        """
        result = self.load_image(file_path)
        if isinstance(result, DecodeFailure):
            return result
        return result.grid

    def load_image(self, file_path: str | Path) -> Union[ImageData, DecodeFailure]:
        """Загружает BMP вместе с заголовком и размером файла (для панели информации)."""
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.warning("Не удалось прочитать %s: %s", path, exc)
            return DecodeFailure(path, f"Файл недоступен: {exc.strerror or exc}")

        try:
            header, grid = decode_bmp_with_header(data)
        except BmpFormatError as exc:
            logger.warning("Повреждённый или неподдерживаемый BMP %s: %s", path, exc.reason)
            return DecodeFailure(path, exc.reason)

        logger.info("Загружено %s: %dx%d, %d бит", path, grid.width, grid.height, header.bits_per_pixel)
        return ImageData(path=path, grid=grid, header=header, size_bytes=len(data))

    def write_image(self, file_path: str | Path, grid: Grid) -> bool:
        """Записывает `grid` как 24-битный BMP.

        Returns:
            True при успехе; False, если файл не удалось открыть или записать.
            Частично записанный файл при ошибке удаляется.
        """
        path = Path(file_path)
        payload = encode_bmp(grid)
        opened = False
        try:
            with open(path, "wb") as stream:
                opened = True
                stream.write(payload)
        except OSError as exc:
            logger.error("Не удалось записать %s: %s", path, exc)
            if opened:
                self._remove_partial(path)
            return False
        logger.info("Сохранено %s: %dx%d, %d байт", path, grid.width, grid.height, len(payload))
        return True

    @staticmethod
    def _remove_partial(path: Path) -> None:
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Не удалось удалить частично записанный файл %s: %s", path, exc)

