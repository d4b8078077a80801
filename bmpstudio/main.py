"""Точка входа в приложение."""
import sys

from bmpstudio.app import BmpStudioApp
from bmpstudio.config import AppConfig, configure_logging


def main() -> None:
    """Создаёт и запускает главное окно; необязательный аргумент — BMP для открытия."""
    config = AppConfig.from_env()
    configure_logging(config.log_level)
    app = BmpStudioApp(config)
    if len(sys.argv) > 1:
        app.after(100, app.open_initial, sys.argv[1])
    app.mainloop()


if __name__ == "__main__":
    main()
