"""Результат проверки соответствия и таксономия ошибок."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from wastickers.models.image_model import ImageData


class ComplianceError(str, Enum):
    FILE_NOT_FOUND = "file_not_found"
    UNSUPPORTED_IMAGE_FORMAT = "unsupported_image_format"
    IMAGE_TOO_BIG = "image_too_big"
    INCORRECT_IMAGE_SIZE = "incorrect_image_size"
    ANIMATED_IMAGES_NOT_SUPPORTED = "animated_images_not_supported"
    TOO_MANY_EMOJIS = "too_many_emojis"


class StickerComplianceError(ValueError):
    """Исключение для вызывающих, которым удобнее `raise`, чем разбор результата."""

    def __init__(self, error: ComplianceError, detail: str = "") -> None:
        super().__init__(detail or error.value)
        self.error = error
        self.detail = detail


@dataclass(frozen=True)
class ComplianceResult:
    """Либо `image_data` (успех), либо `error` с пояснением (отказ)."""
    image_data: Optional[ImageData] = None
    error: Optional[ComplianceError] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None and self.image_data is not None

    @classmethod
    def success(cls, image_data: ImageData) -> "ComplianceResult":
        return cls(image_data=image_data)

    @classmethod
    def failure(cls, error: ComplianceError, detail: str = "") -> "ComplianceResult":
        return cls(error=error, detail=detail)

    def unwrap(self) -> ImageData:
        """Возвращает `ImageData` или бросает `StickerComplianceError`."""
        if self.error is not None:
            raise StickerComplianceError(self.error, self.detail)
        if self.image_data is None:
            raise ValueError("Пустой результат проверки")
        return self.image_data
