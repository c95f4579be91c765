"""Модели данных для изображений стикеров.

Принципы:
- SRP: только структура данных, без логики проверки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

import io
from dataclasses import dataclass, field
from enum import Enum

from PIL import Image


class ImageFormat(str, Enum):
    """Поддерживаемые форматы стикеров."""
    PNG = "png"
    WEBP = "webp"

    @classmethod
    def from_extension(cls, name: str) -> "ImageFormat | None":
        """Возвращает формат по расширению файла (`"a.webp"`, `".PNG"`, `"png"`) или None."""
        ext = name.rsplit(".", 1)[-1].lower()
        for fmt in cls:
            if fmt.value == ext:
                return fmt
        return None


class StickerRole(str, Enum):
    """Назначение изображения: стикер в чате или иконка набора (tray)."""
    MESSAGE = "message"
    TRAY = "tray"


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель изображения, прошедшего проверку.

    Экземпляры создаёт только `ComplianceService`, поэтому объект
    в несоответствующем состоянии не существует.

    Fields:
        data: Исходные байты файла.
        format: Формат, определённый по сигнатуре.
        role: Назначение (стикер или иконка набора).
        width: Ширина, px.
        height: Высота, px.
    """
    data: bytes = field(repr=False)
    format: ImageFormat
    role: StickerRole
    width: int
    height: int

    @property
    def byte_size(self) -> int:
        return len(self.data)

    @property
    def is_tray(self) -> bool:
        return self.role is StickerRole.TRAY

    @property
    def image(self) -> Image.Image:
        """Декодирует байты в изображение PIL (RGBA) для показа или копирования."""
        with Image.open(io.BytesIO(self.data)) as img:
            return img.convert("RGBA")
