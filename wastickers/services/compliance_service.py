"""Проверка изображений стикеров на соответствие требованиям WhatsApp.

Принципы:
- SRP: сервис только принимает решение «подходит / не подходит»; разбор
  заголовков вынесен в `image_probe`, чтение файлов — в `ImageService`.
- DIP: пороги приходят извне как `ComplianceLimits` по ролям.
Clean Code:
- Проверки идут в фиксированном порядке, первая неудача возвращается сразу.
- Ошибки соответствия не бросаются, а возвращаются в `ComplianceResult`.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from wastickers.models.compliance import ComplianceError, ComplianceResult
from wastickers.models.image_model import ImageData, ImageFormat, StickerRole
from wastickers.models.limits import MESSAGE_STICKER_LIMITS, ComplianceLimits, limits_for
from wastickers.services import image_probe
from wastickers.services.image_service import ImageService

LOGGER = logging.getLogger(__name__)


class ComplianceService:
    """Валидатор стикеров.

    Args:
        limits: Пороги по ролям. Без явной конфигурации доступна только роль
            MESSAGE; попытка проверить TRAY тогда даёт `MissingLimitsError`.
        image_service: Источник файлов для `validate_file`.
    """

    def __init__(
        self,
        limits: Optional[Dict[StickerRole, ComplianceLimits]] = None,
        image_service: Optional[ImageService] = None,
    ) -> None:
        self._limits = dict(limits) if limits is not None else {StickerRole.MESSAGE: MESSAGE_STICKER_LIMITS}
        self._image_service = image_service or ImageService()

    def limits(self, role: StickerRole) -> ComplianceLimits:
        return limits_for(self._limits, role)

    def validate_file(
        self,
        filename: str,
        role: StickerRole = StickerRole.MESSAGE,
        emojis: Optional[Sequence[str]] = None,
    ) -> ComplianceResult:
        """Находит файл в каталоге ресурсов и проверяет его.

        Формат берётся из расширения и затем сверяется с сигнатурой байтов.
        Отсутствующий файл даёт FILE_NOT_FOUND раньше, чем проверяются лимиты роли.
        """
        try:
            resource = self._image_service.load_resource(filename)
        except FileNotFoundError as exc:
            return self._reject(ComplianceError.FILE_NOT_FOUND, str(exc))
        limits = self.limits(role)
        if resource.declared_format is None:
            return self._reject(
                ComplianceError.UNSUPPORTED_IMAGE_FORMAT,
                f"Расширение не поддерживается: {resource.path.name}",
            )
        return self._check(resource.data, resource.declared_format, role, limits, emojis)

    def validate(
        self,
        data: bytes,
        declared_format: ImageFormat | str,
        role: StickerRole = StickerRole.MESSAGE,
        emojis: Optional[Sequence[str]] = None,
    ) -> ComplianceResult:
        """Проверяет байты изображения с заявленным форматом (`ImageFormat` или `"png"`/`"webp"`)."""
        limits = self.limits(role)
        fmt = declared_format if isinstance(declared_format, ImageFormat) else ImageFormat.from_extension(declared_format)
        if fmt is None:
            return self._reject(
                ComplianceError.UNSUPPORTED_IMAGE_FORMAT,
                f"Формат не поддерживается: {declared_format}",
            )
        return self._check(bytes(data), fmt, role, limits, emojis)

    # ---- Checks ----
    def _check(
        self,
        data: bytes,
        declared_format: ImageFormat,
        role: StickerRole,
        limits: ComplianceLimits,
        emojis: Optional[Sequence[str]],
    ) -> ComplianceResult:
        detected = image_probe.sniff_format(data)
        if detected is None or detected is not declared_format:
            return self._reject(
                ComplianceError.UNSUPPORTED_IMAGE_FORMAT,
                f"Сигнатура не соответствует {declared_format.value}",
            )

        if len(data) > limits.max_file_size:
            return self._reject(
                ComplianceError.IMAGE_TOO_BIG,
                f"Размер {len(data)} байт превышает {limits.max_file_size}",
            )

        try:
            width, height = image_probe.read_dimensions(data, detected)
        except image_probe.OversizedCanvasError as exc:
            return self._reject(ComplianceError.INCORRECT_IMAGE_SIZE, str(exc))
        except ValueError as exc:
            return self._reject(ComplianceError.UNSUPPORTED_IMAGE_FORMAT, str(exc))
        if (width, height) != tuple(limits.dimensions):
            req_w, req_h = limits.dimensions
            return self._reject(
                ComplianceError.INCORRECT_IMAGE_SIZE,
                f"Размер {width}x{height}, требуется {req_w}x{req_h}",
            )

        if detected is ImageFormat.WEBP and image_probe.is_animated_webp(data):
            return self._reject(ComplianceError.ANIMATED_IMAGES_NOT_SUPPORTED, "Анимированный WebP")

        if emojis is not None and len(emojis) > limits.max_emojis:
            return self._reject(
                ComplianceError.TOO_MANY_EMOJIS,
                f"Эмодзи: {len(emojis)}, максимум {limits.max_emojis}",
            )

        image_data = ImageData(data=data, format=detected, role=role, width=width, height=height)
        LOGGER.debug("Изображение принято: %s, %d байт, %dx%d", detected.value, len(data), width, height)
        return ComplianceResult.success(image_data)

    @staticmethod
    def _reject(error: ComplianceError, detail: str) -> ComplianceResult:
        LOGGER.info("Изображение отклонено (%s): %s", error.value, detail)
        return ComplianceResult.failure(error, detail)
