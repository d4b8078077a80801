"""Консольный вызов: одно преобразование BMP-файла без окна.

Пример:
    bmpstudio-cli photo.bmp out.bmp lighten --factor 0.3
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from bmpstudio.config import AppConfig, configure_logging
from bmpstudio.models.transform_model import TransformKind, build_transform
from bmpstudio.services.pipeline_service import PipelineService

KINDS_BY_NAME = {kind.cli_name: kind for kind in TransformKind}


def build_parser(config: AppConfig) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bmpstudio-cli", description="Преобразование 24-битных BMP-файлов")
    p.add_argument("input_file", help="Исходный BMP")
    p.add_argument("output_file", help="Куда записать результат (.bmp)")
    p.add_argument("transform", choices=sorted(KINDS_BY_NAME), help="Преобразование")
    p.add_argument("--factor", type=float, default=None,
                   help="Коэффициент для clarendon/lighten/darken")
    p.add_argument("--turns", type=int, default=1, help="Число поворотов на 90° для rotate")
    p.add_argument("--x-scale", type=int, default=config.enlarge_x, help="Масштаб по X для enlarge")
    p.add_argument("--y-scale", type=int, default=config.enlarge_y, help="Масштаб по Y для enlarge")
    p.add_argument("--log-level", default=config.log_level, help="Уровень логирования (DEBUG, INFO, ...)")
    return p


def _default_factor(kind: TransformKind, config: AppConfig) -> float:
    if kind is TransformKind.LIGHTEN:
        return config.lighten_factor
    if kind is TransformKind.DARKEN:
        return config.darken_factor
    return config.clarendon_factor


def main(argv: Optional[List[str]] = None) -> int:
    config = AppConfig.from_env()
    args = build_parser(config).parse_args(argv)
    configure_logging(args.log_level)

    kind = KINDS_BY_NAME[args.transform]
    factor = args.factor if args.factor is not None else _default_factor(kind, config)
    transform = build_transform(kind, factor=factor, turns=args.turns, x_scale=args.x_scale, y_scale=args.y_scale)

    result = PipelineService().run(args.input_file, args.output_file, transform)
    stream = sys.stdout if result.ok else sys.stderr
    print(result.message, file=stream)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
