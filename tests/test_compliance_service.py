from __future__ import annotations

import struct
import zlib

import pytest

from conftest import make_png, make_webp
from wastickers.models.compliance import ComplianceError, ComplianceResult, StickerComplianceError
from wastickers.models.image_model import ImageFormat, StickerRole
from wastickers.models.limits import MissingLimitsError
from wastickers.services.compliance_service import ComplianceService
from wastickers.services.image_service import ImageService

LIMIT = 100 * 1024


def fake_webp(total_bytes: int) -> bytes:
    """Только сигнатура RIFF/WEBP, без валидного содержимого."""
    return b"RIFF" + struct.pack("<I", total_bytes - 8) + b"WEBP" + b"\x00" * (total_bytes - 12)


def test_compliant_png_is_accepted(service: ComplianceService) -> None:
    data = make_png(total_bytes=96 * 1024)
    result = service.validate(data, ImageFormat.PNG)
    assert result.ok
    image_data = result.unwrap()
    assert image_data.byte_size == 98304
    assert image_data.format is ImageFormat.PNG
    assert (image_data.width, image_data.height) == (512, 512)
    assert not image_data.is_tray
    assert image_data.data == data


def test_compliant_webp_is_accepted(service: ComplianceService) -> None:
    data = make_webp()
    result = service.validate(data, "webp")
    assert result.ok
    assert result.image_data is not None
    assert result.image_data.format is ImageFormat.WEBP
    assert result.image_data.byte_size == len(data)


def test_size_limit_boundary(service: ComplianceService) -> None:
    assert service.validate(make_png(total_bytes=LIMIT), ImageFormat.PNG).ok
    over = service.validate(make_png(total_bytes=LIMIT + 1), ImageFormat.PNG)
    assert over.error is ComplianceError.IMAGE_TOO_BIG


def test_oversized_webp_is_too_big(service: ComplianceService) -> None:
    data = make_webp(pad_to=120 * 1024)
    assert 120 * 1024 <= len(data) < 121 * 1024
    result = service.validate(data, ImageFormat.WEBP)
    assert result.error is ComplianceError.IMAGE_TOO_BIG
    assert result.image_data is None


def test_unknown_signature_fails_before_size_check(service: ComplianceService) -> None:
    data = b"GIF89a" + b"\x00" * (LIMIT * 2)
    result = service.validate(data, ImageFormat.PNG)
    assert result.error is ComplianceError.UNSUPPORTED_IMAGE_FORMAT


def test_declared_format_must_match_signature(service: ComplianceService) -> None:
    result = service.validate(make_webp(), ImageFormat.PNG)
    assert result.error is ComplianceError.UNSUPPORTED_IMAGE_FORMAT


def test_unknown_declared_format(service: ComplianceService) -> None:
    result = service.validate(make_png(), "gif")
    assert result.error is ComplianceError.UNSUPPORTED_IMAGE_FORMAT


def test_undecodable_header_is_unsupported(service: ComplianceService) -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
    result = service.validate(data, ImageFormat.PNG)
    assert result.error is ComplianceError.UNSUPPORTED_IMAGE_FORMAT


@pytest.mark.parametrize("size", [(256, 256), (512, 256), (513, 513)])
def test_wrong_dimensions(service: ComplianceService, size) -> None:
    result = service.validate(make_png(size=size), ImageFormat.PNG)
    assert result.error is ComplianceError.INCORRECT_IMAGE_SIZE


def test_animated_webp_is_rejected(service: ComplianceService) -> None:
    data = make_webp(animated=True, pad_to=60 * 1024)
    assert 60 * 1024 <= len(data) < 61 * 1024
    result = service.validate(data, ImageFormat.WEBP)
    assert result.error is ComplianceError.ANIMATED_IMAGES_NOT_SUPPORTED


def test_too_many_emojis(service: ComplianceService) -> None:
    data = make_png()
    assert service.validate(data, ImageFormat.PNG, emojis=["😀", "😂", "🥳"]).ok
    result = service.validate(data, ImageFormat.PNG, emojis=["😀", "😂", "🥳", "😎"])
    assert result.error is ComplianceError.TOO_MANY_EMOJIS


def test_image_checks_run_before_emoji_check(service: ComplianceService) -> None:
    result = service.validate(make_png(size=(128, 128)), ImageFormat.PNG, emojis=["😀"] * 10)
    assert result.error is ComplianceError.INCORRECT_IMAGE_SIZE


def test_validation_is_idempotent(service: ComplianceService) -> None:
    data = make_png()
    assert service.validate(data, ImageFormat.PNG) == service.validate(data, ImageFormat.PNG)
    bad = make_png(size=(64, 64))
    assert service.validate(bad, ImageFormat.PNG) == service.validate(bad, ImageFormat.PNG)


def test_tray_role_uses_tray_limits(service: ComplianceService) -> None:
    tray = service.validate(make_png(size=(96, 96)), ImageFormat.PNG, StickerRole.TRAY)
    assert tray.ok
    assert tray.unwrap().is_tray
    message_sized = service.validate(make_png(), ImageFormat.PNG, StickerRole.TRAY)
    assert message_sized.error is ComplianceError.INCORRECT_IMAGE_SIZE


def test_tray_without_configured_limits() -> None:
    service = ComplianceService()
    with pytest.raises(MissingLimitsError):
        service.validate(make_png(size=(96, 96)), ImageFormat.PNG, StickerRole.TRAY)


def test_validate_file_accepts_bundle_resources(service: ComplianceService) -> None:
    assert service.validate_file("sticker.png").ok
    assert service.validate_file("sticker.webp").ok
    assert service.validate_file("tray.png", StickerRole.TRAY).ok


def test_validate_file_missing(service: ComplianceService) -> None:
    result = service.validate_file("missing.png")
    assert result.error is ComplianceError.FILE_NOT_FOUND
    with pytest.raises(StickerComplianceError) as excinfo:
        result.unwrap()
    assert excinfo.value.error is ComplianceError.FILE_NOT_FOUND


def test_validate_file_unsupported_extension(service: ComplianceService) -> None:
    assert service.validate_file("notes.txt").error is ComplianceError.UNSUPPORTED_IMAGE_FORMAT


def test_validate_file_extension_must_match_content(service: ComplianceService) -> None:
    assert service.validate_file("disguised.png").error is ComplianceError.UNSUPPORTED_IMAGE_FORMAT


def test_file_not_found_skips_byte_inspection(service: ComplianceService, monkeypatch) -> None:
    def fail(*_args, **_kwargs):
        raise AssertionError("bytes must not be inspected")

    monkeypatch.setattr("wastickers.services.image_probe.sniff_format", fail)
    assert service.validate_file("nope.webp").error is ComplianceError.FILE_NOT_FOUND


def png_with_header_only(width: int, height: int) -> bytes:
    """PNG из одних чанков IHDR, пустого IDAT и IEND."""

    def chunk(fourcc: bytes, payload: bytes) -> bytes:
        return struct.pack(">I", len(payload)) + fourcc + payload + struct.pack(">I", zlib.crc32(fourcc + payload))

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IDAT", b"") + chunk(b"IEND", b"")


def test_huge_declared_canvas_is_incorrect_size(service: ComplianceService) -> None:
    data = png_with_header_only(40000, 40000)
    assert len(data) < LIMIT
    result = service.validate(data, ImageFormat.PNG)
    assert result.error is ComplianceError.INCORRECT_IMAGE_SIZE
    assert result.image_data is None


def test_missing_file_reported_before_unconfigured_tray(bundle_dir) -> None:
    service = ComplianceService(image_service=ImageService(bundle_dir))
    assert service.validate_file("absent.png", StickerRole.TRAY).error is ComplianceError.FILE_NOT_FOUND
    with pytest.raises(MissingLimitsError):
        service.validate_file("tray.png", StickerRole.TRAY)


def test_empty_result_cannot_be_unwrapped() -> None:
    empty = ComplianceResult()
    assert not empty.ok
    with pytest.raises(ValueError):
        empty.unwrap()


def test_size_checked_before_header_is_read(service: ComplianceService, monkeypatch) -> None:
    def fail(*_args, **_kwargs):
        raise AssertionError("header must not be read")

    monkeypatch.setattr("wastickers.services.image_probe.read_dimensions", fail)
    assert service.validate(fake_webp(LIMIT + 1), ImageFormat.WEBP).error is ComplianceError.IMAGE_TOO_BIG
