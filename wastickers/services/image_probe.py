"""Чтение заголовков PNG/WebP без полного декодирования.

Принципы:
- SRP: только разбор байтов; решения о соответствии принимает `ComplianceService`.
- Чистый код: функции без состояния, вход не мутируется.
"""
from __future__ import annotations

import io
import struct
from typing import Iterator, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from wastickers.models.image_model import ImageFormat


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
RIFF_TAG = b"RIFF"
WEBP_TAG = b"WEBP"

VP8X_ANIMATION_FLAG = 0x02
_ANIMATION_CHUNKS = (b"ANIM", b"ANMF")

_PIL_FORMATS = {ImageFormat.PNG: "PNG", ImageFormat.WEBP: "WEBP"}


def sniff_format(data: bytes) -> Optional[ImageFormat]:
    """Определяет формат по сигнатуре или возвращает None."""
    if data.startswith(PNG_SIGNATURE):
        return ImageFormat.PNG
    if len(data) >= 12 and data[0:4] == RIFF_TAG and data[8:12] == WEBP_TAG:
        return ImageFormat.WEBP
    return None


def iter_webp_chunks(data: bytes) -> Iterator[Tuple[bytes, bytes]]:
    """Перебирает чанки RIFF-контейнера WebP как пары (fourcc, payload).

    Обрезанный хвост просто завершает перебор.
    """
    offset = 12
    end = len(data)
    while offset + 8 <= end:
        fourcc = data[offset:offset + 4]
        (size,) = struct.unpack_from("<I", data, offset + 4)
        start = offset + 8
        yield fourcc, data[start:min(start + size, end)]
        # payload is padded to an even length
        offset = start + size + (size & 1)


def is_animated_webp(data: bytes) -> bool:
    """True, если в контейнере есть флаг анимации VP8X или кадры ANIM/ANMF."""
    for fourcc, payload in iter_webp_chunks(data):
        if fourcc == b"VP8X" and payload and payload[0] & VP8X_ANIMATION_FLAG:
            return True
        if fourcc in _ANIMATION_CHUNKS:
            return True
    return False


class OversizedCanvasError(ValueError):
    """Заголовок объявляет холст больше предела Pillow (`Image.MAX_IMAGE_PIXELS`)."""


def read_dimensions(data: bytes, image_format: ImageFormat) -> Tuple[int, int]:
    """Возвращает (ширина, высота) из заголовка.

    `Image.open` ленивый: читается только заголовок, пиксели не декодируются.

    Raises:
        OversizedCanvasError: если объявленный холст превышает предел Pillow.
        ValueError: если заголовок не распознан или формат не совпадает с ожидаемым.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.format != _PIL_FORMATS[image_format]:
                raise ValueError(f"Ожидался {image_format.value}, получен {img.format}")
            return img.size
    except Image.DecompressionBombError as exc:
        raise OversizedCanvasError(f"Холст превышает допустимый предел: {exc}") from exc
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValueError(f"Не удалось прочитать заголовок изображения: {exc}") from exc
