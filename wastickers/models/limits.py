"""Пороговые значения WhatsApp для стикеров.

Лимиты иконки набора (tray) намеренно не имеют значений по умолчанию:
их передаёт конфигурация (`wastickers.config.Settings`).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from wastickers.models.image_model import StickerRole


KB = 1024


@dataclass(frozen=True)
class ComplianceLimits:
    """Набор порогов для одной роли изображения.

    Fields:
        max_file_size: Максимальный размер файла, байт (включительно).
        dimensions: Требуемые (ширина, высота), px.
        max_emojis: Максимум эмодзи на стикер.
    """
    max_file_size: int
    dimensions: Tuple[int, int]
    max_emojis: int = 3

    def __post_init__(self) -> None:
        if self.max_file_size <= 0:
            raise ValueError(f"max_file_size должен быть положительным: {self.max_file_size}")
        width, height = self.dimensions
        if width <= 0 or height <= 0:
            raise ValueError(f"Некорректные размеры: {self.dimensions}")
        if self.max_emojis < 0:
            raise ValueError(f"max_emojis не может быть отрицательным: {self.max_emojis}")


MESSAGE_STICKER_LIMITS = ComplianceLimits(max_file_size=100 * KB, dimensions=(512, 512), max_emojis=3)


class MissingLimitsError(ValueError):
    """Для роли не настроены лимиты (обычно — tray без конфигурации)."""

    def __init__(self, role: StickerRole) -> None:
        super().__init__(f"Лимиты для роли '{role.value}' не настроены")
        self.role = role


def limits_for(profiles: Dict[StickerRole, ComplianceLimits], role: StickerRole) -> ComplianceLimits:
    limits: Optional[ComplianceLimits] = profiles.get(role)
    if limits is None:
        raise MissingLimitsError(role)
    return limits
