"""Побайтовый кодек BMP: 24-битный несжатый формат с заголовком BITMAPINFOHEADER.

Строки пикселей в файле идут снизу вверх, каждая дополнена нулями до
кратности 4 байтам, пиксель хранится как B, G, R. `Grid` всегда
ориентирована сверху вниз и хранит каналы в порядке R, G, B.
"""
from __future__ import annotations

import logging
import struct
from typing import Tuple

import numpy as np

from bmpstudio.errors import BmpFormatError
from bmpstudio.models.image_model import BmpHeader, Grid

logger = logging.getLogger(__name__)

BMP_SIGNATURE = b"BM"
FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
PIXEL_ARRAY_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE
RESOLUTION_PPM = 2835  # 72 dpi
SUPPORTED_BIT_DEPTHS = (24, 32)


def row_padding(width: int, bytes_per_pixel: int = 3) -> int:
    """Число байт выравнивания, которое дописывается к каждой строке."""
    return (4 - (width * bytes_per_pixel) % 4) % 4


def parse_header(data: bytes) -> BmpHeader:
    """Читает поля заголовка по фиксированным смещениям (little-endian)."""
    if len(data) < PIXEL_ARRAY_OFFSET:
        raise BmpFormatError(f"Файл слишком мал для BMP: {len(data)} байт")
    if data[0:2] != BMP_SIGNATURE:
        raise BmpFormatError("Неверная сигнатура BMP")
    file_size = struct.unpack_from("<I", data, 2)[0]
    pixel_offset = struct.unpack_from("<I", data, 10)[0]
    width = struct.unpack_from("<I", data, 18)[0]
    height = struct.unpack_from("<I", data, 22)[0]
    bits_per_pixel = struct.unpack_from("<H", data, 28)[0]
    return BmpHeader(
        file_size=file_size,
        pixel_offset=pixel_offset,
        width=width,
        height=height,
        bits_per_pixel=bits_per_pixel,
    )


def decode_bmp(data: bytes) -> Grid:
    """Разбирает содержимое BMP-файла в `Grid`; см. `decode_bmp_with_header`."""
    return decode_bmp_with_header(data)[1]


def decode_bmp_with_header(data: bytes) -> Tuple[BmpHeader, Grid]:
    """Разбирает BMP-файл, возвращая разобранный заголовок вместе с сеткой.

    Raises:
        BmpFormatError: если заявленный размер не совпадает с геометрией массива
            пикселей, глубина цвета не 24/32 бита или данных меньше, чем заявлено.
    """
    header = parse_header(data)
    logger.debug(
        "Заголовок BMP: size=%d offset=%d %dx%d bpp=%d",
        header.file_size, header.pixel_offset, header.width, header.height, header.bits_per_pixel,
    )
    if header.bits_per_pixel not in SUPPORTED_BIT_DEPTHS:
        raise BmpFormatError(f"Неподдерживаемая глубина цвета: {header.bits_per_pixel} бит")
    if header.file_size != header.expected_file_size:
        raise BmpFormatError(
            f"Повреждённый или неподдерживаемый BMP: заявлено {header.file_size} байт, "
            f"по геометрии ожидается {header.expected_file_size}"
        )
    if header.width == 0 or header.height == 0:
        raise BmpFormatError("Пустое изображение")
    if len(data) < header.file_size:
        raise BmpFormatError(f"Файл обрезан: {len(data)} из {header.file_size} байт")

    stride = header.row_stride
    end = header.pixel_offset + stride * header.height
    rows = np.frombuffer(data[header.pixel_offset:end], dtype=np.uint8).reshape(header.height, stride)
    # отбрасываем выравнивание, затем альфа-байт (для 32 бит)
    pixels = rows[:, :header.scanline_bytes].reshape(header.height, header.width, header.bytes_per_pixel)
    bgr = pixels[:, :, :3]
    # первая строка файла — нижняя строка изображения
    return header, Grid(bgr[::-1, :, ::-1])


def encode_bmp(grid: Grid) -> bytes:
    """Собирает 24-битный BMP: 14 байт заголовка файла, 40 байт BITMAPINFOHEADER, пиксели."""
    width, height = grid.width, grid.height
    row_bytes = width * 3
    padding = row_padding(width)
    pixel_array_size = (row_bytes + padding) * height

    file_header = struct.pack(
        "<2sIHHI",
        BMP_SIGNATURE,
        PIXEL_ARRAY_OFFSET + pixel_array_size,
        0,
        0,
        PIXEL_ARRAY_OFFSET,
    )
    info_header = struct.pack(
        "<IiiHHIIiiII",
        INFO_HEADER_SIZE,
        width,
        height,
        1,  # color planes
        24,
        0,  # BI_RGB
        pixel_array_size,
        RESOLUTION_PPM,
        RESOLUTION_PPM,
        0,
        0,
    )

    rows = np.zeros((height, row_bytes + padding), dtype=np.uint8)
    rows[:, :row_bytes] = grid.pixels[::-1, :, ::-1].reshape(height, row_bytes)
    return file_header + info_header + rows.tobytes()
