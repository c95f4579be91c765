"""Точка входа в приложение."""
import logging

from wastickers.app import StickerInspectorApp
from wastickers.config import load_settings


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    settings = load_settings()
    logging.basicConfig(level=settings.log_level.upper())
    app = StickerInspectorApp(settings)
    app.mainloop()


if __name__ == "__main__":
    main()
