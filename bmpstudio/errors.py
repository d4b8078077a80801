"""Исключения приложения.

Наружу из `ImageService`/`PipelineService` они не выходят: на границе
кодека и конвейера ошибки превращаются в значения-результаты.
"""


class BmpStudioError(Exception):
    """Базовый класс ошибок bmpstudio."""
    pass


class BmpFormatError(BmpStudioError):
    """Файл повреждён или это неподдерживаемый вариант BMP."""
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class TransformParameterError(BmpStudioError, ValueError):
    """Недопустимый параметр преобразования (масштаб, коэффициент, число поворотов)."""
    def __init__(self, name: str, value: object, message: str = "") -> None:
        self.name = name
        self.value = value
        super().__init__(message or f"Недопустимое значение параметра {name}: {value!r}")
