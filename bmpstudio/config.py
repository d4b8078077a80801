"""Настройки приложения и логирования."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
    """Значения по умолчанию для окна и параметров преобразований.

    Переменные окружения `BMPSTUDIO_LOG_LEVEL` и `BMPSTUDIO_APPEARANCE`
    переопределяют уровень логирования и тему ("system" | "light" | "dark").
    """
    appearance_mode: str = "system"
    color_theme: str = "blue"
    window_title: str = "BMP Studio"
    min_width: int = 900
    min_height: int = 600
    clarendon_factor: float = 0.5
    lighten_factor: float = 0.5
    darken_factor: float = 0.5
    enlarge_x: int = 2
    enlarge_y: int = 2
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        config = cls()
        level = env.get("BMPSTUDIO_LOG_LEVEL")
        if level:
            config = replace(config, log_level=level.upper())
        appearance = env.get("BMPSTUDIO_APPEARANCE")
        if appearance:
            config = replace(config, appearance_mode=appearance.lower())
        return config


def configure_logging(level: str = "WARNING") -> None:
    """Настраивает корневой логгер; вызывается только из точек входа."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
