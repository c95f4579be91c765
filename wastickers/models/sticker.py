"""Стикер и набор стикеров.

Принципы:
- SRP: сущности хранят проверенные данные; правила проверки — в `ComplianceService`.
- DIP: буфер обмена передаётся как `ClipboardWriter`, без привязки к платформе.
"""
from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from wastickers.models.image_model import ImageData, ImageFormat, StickerRole
from wastickers.services.clipboard_service import ClipboardWriter
from wastickers.services.compliance_service import ComplianceService


MAX_STICKERS_PER_PACK = 30
MIN_STICKERS_PER_PACK = 3


@dataclass(frozen=True)
class Sticker:
    """Стикер с проверенным изображением и привязанными эмодзи."""
    image_data: ImageData
    emojis: Tuple[str, ...] = ()

    @property
    def byte_size(self) -> int:
        return self.image_data.byte_size

    @classmethod
    def from_file(
        cls, filename: str, service: ComplianceService, emojis: Optional[Sequence[str]] = None
    ) -> "Sticker":
        """Создаёт стикер из файла каталога ресурсов.

        Raises:
            StickerComplianceError: если файл не найден или не проходит проверку.
        """
        image_data = service.validate_file(filename, StickerRole.MESSAGE, emojis).unwrap()
        return cls(image_data=image_data, emojis=tuple(emojis or ()))

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        image_format: ImageFormat | str,
        service: ComplianceService,
        emojis: Optional[Sequence[str]] = None,
    ) -> "Sticker":
        """Создаёт стикер из байтов PNG/WebP.

        Raises:
            StickerComplianceError: если данные не проходят проверку.
        """
        image_data = service.validate(data, image_format, StickerRole.MESSAGE, emojis).unwrap()
        return cls(image_data=image_data, emojis=tuple(emojis or ()))

    def copy_to_pasteboard(self, writer: ClipboardWriter) -> None:
        """Декодирует изображение и кладёт его в буфер обмена как PNG."""
        buffer = io.BytesIO()
        self.image_data.image.save(buffer, format="PNG")
        writer.write_image(buffer.getvalue())


class StickerPackError(ValueError):
    pass


@dataclass
class StickerPack:
    """Набор стикеров с иконкой (tray).

    Fields:
        identifier: Уникальный идентификатор набора.
        name: Отображаемое имя.
        publisher: Автор набора.
        tray_image: Иконка, проверенная с ролью TRAY.
        stickers: Стикеры набора (не более `MAX_STICKERS_PER_PACK`).
    """
    identifier: str
    name: str
    publisher: str
    tray_image: ImageData
    stickers: List[Sticker] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.tray_image.is_tray:
            raise StickerPackError("Иконка набора должна быть проверена с ролью tray")

    @classmethod
    def from_tray_file(
        cls, identifier: str, name: str, publisher: str, tray_filename: str, service: ComplianceService
    ) -> "StickerPack":
        """Создаёт набор с иконкой из каталога ресурсов.

        Raises:
            StickerComplianceError: если иконка не проходит проверку.
            MissingLimitsError: если лимиты tray не настроены.
        """
        tray = service.validate_file(tray_filename, StickerRole.TRAY).unwrap()
        return cls(identifier=identifier, name=name, publisher=publisher, tray_image=tray)

    @property
    def bytes_size(self) -> int:
        return self.tray_image.byte_size + sum(sticker.byte_size for sticker in self.stickers)

    @property
    def is_complete(self) -> bool:
        return len(self.stickers) >= MIN_STICKERS_PER_PACK

    def add_sticker(self, sticker: Sticker) -> None:
        if len(self.stickers) >= MAX_STICKERS_PER_PACK:
            raise StickerPackError(f"В наборе уже {MAX_STICKERS_PER_PACK} стикеров")
        if any(existing.image_data.data == sticker.image_data.data for existing in self.stickers):
            raise StickerPackError("Такой стикер уже есть в наборе")
        self.stickers.append(sticker)
