from __future__ import annotations

import io
import struct
from pathlib import Path
import sys
from typing import Callable, Optional, Tuple

import pytest
from PIL import Image
from PIL.PngImagePlugin import PngInfo

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wastickers.models.image_model import StickerRole
from wastickers.models.limits import MESSAGE_STICKER_LIMITS, ComplianceLimits
from wastickers.services.compliance_service import ComplianceService
from wastickers.services.image_service import ImageService

TRAY_LIMITS = ComplianceLimits(max_file_size=50 * 1024, dimensions=(96, 96), max_emojis=0)

# tEXt chunk overhead: length + type + crc + keyword + NUL separator
_TEXT_KEY = "Comment"
_TEXT_OVERHEAD = 12 + len(_TEXT_KEY) + 1


def make_png(
    size: Tuple[int, int] = (512, 512),
    color: Tuple[int, int, int, int] = (255, 0, 0, 255),
    total_bytes: Optional[int] = None,
) -> bytes:
    """PNG заданного размера; `total_bytes` добивает файл tEXt-чанком до точной длины."""
    image = Image.new("RGBA", size, color)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    if total_bytes is None:
        return buffer.getvalue()
    padding = total_bytes - len(buffer.getvalue()) - _TEXT_OVERHEAD
    assert padding >= 0, "total_bytes is smaller than the bare PNG"
    info = PngInfo()
    info.add_text(_TEXT_KEY, "x" * padding)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", pnginfo=info)
    data = buffer.getvalue()
    assert len(data) == total_bytes
    return data


def make_webp(
    size: Tuple[int, int] = (512, 512), animated: bool = False, pad_to: Optional[int] = None
) -> bytes:
    """WebP заданного размера; `pad_to` добавляет EXIF-чанк, чтобы файл был примерно такой длины."""

    def encode(exif: bytes) -> bytes:
        buffer = io.BytesIO()
        if animated:
            frames = [Image.new("RGBA", size, color) for color in ((255, 0, 0, 255), (0, 0, 255, 255))]
            frames[0].save(
                buffer, format="WEBP", save_all=True, append_images=frames[1:], duration=100, loop=0, exif=exif
            )
        else:
            Image.new("RGBA", size, (0, 255, 0, 255)).save(buffer, format="WEBP", lossless=True, exif=exif)
        return buffer.getvalue()

    data = encode(b"")
    if pad_to is None:
        return data
    return encode(b"\x00" * max(0, pad_to - len(data)))


def make_riff(*chunks: Tuple[bytes, bytes]) -> bytes:
    """Собирает RIFF/WEBP-контейнер из пар (fourcc, payload)."""
    body = b"WEBP"
    for fourcc, payload in chunks:
        body += fourcc + struct.pack("<I", len(payload)) + payload
        if len(payload) & 1:
            body += b"\x00"
    return b"RIFF" + struct.pack("<I", len(body)) + body


@pytest.fixture
def bundle_dir(tmp_path: Path) -> Path:
    (tmp_path / "sticker.png").write_bytes(make_png())
    (tmp_path / "sticker.webp").write_bytes(make_webp())
    (tmp_path / "tray.png").write_bytes(make_png(size=(96, 96)))
    (tmp_path / "notes.txt").write_bytes(b"not an image")
    (tmp_path / "disguised.png").write_bytes(make_webp())
    return tmp_path


@pytest.fixture
def service(bundle_dir: Path) -> ComplianceService:
    limits = {StickerRole.MESSAGE: MESSAGE_STICKER_LIMITS, StickerRole.TRAY: TRAY_LIMITS}
    return ComplianceService(limits, ImageService(bundle_dir))


@pytest.fixture
def png_factory() -> Callable[..., bytes]:
    return make_png


@pytest.fixture
def webp_factory() -> Callable[..., bytes]:
    return make_webp
