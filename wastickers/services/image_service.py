"""Загрузка файлов стикеров из каталога ресурсов.

Принципы:
- SRP: класс отвечает только за поиск файла и чтение его байтов.
- OCP: другие источники (архив, URL) можно добавить отдельными методами.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from wastickers.models.image_model import ImageFormat

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageResource:
    """Байты файла и формат, выведенный из расширения (None, если расширение чужое)."""
    path: Path
    data: bytes
    declared_format: Optional[ImageFormat]


class ImageService:
    def __init__(self, bundle_dir: str | Path = ".") -> None:
        self._root = Path(bundle_dir)

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, filename: str) -> Optional[Path]:
        """Ищет файл внутри каталога ресурсов; пути за его пределами не находятся."""
        root = self._root.resolve()
        candidate = (root / filename).resolve()
        if not candidate.is_relative_to(root):
            LOGGER.warning("Путь вне каталога ресурсов отклонён: %s", filename)
            return None
        if not candidate.is_file():
            return None
        return candidate

    def load_resource(self, filename: str) -> ImageResource:
        """Читает файл ресурса.

        Args:
            filename: Имя файла относительно каталога ресурсов, с расширением.

        Returns:
            `ImageResource` с байтами и форматом по расширению.

        Raises:
            FileNotFoundError: если файл не найден в каталоге ресурсов.
        """
        path = self.resolve(filename)
        if path is None:
            raise FileNotFoundError(f"Файл не найден: {self._root / filename}")
        return ImageResource(path=path, data=path.read_bytes(), declared_format=ImageFormat.from_extension(path.name))
