"""Копирование изображений в системный буфер обмена.

Модель стикера зависит только от протокола `ClipboardWriter`, поэтому
проверка и тесты не требуют графической среды.
"""
from __future__ import annotations

import logging
import shutil
import subprocess
from typing import List, Protocol

LOGGER = logging.getLogger(__name__)


class ClipboardError(RuntimeError):
    pass


class ClipboardWriter(Protocol):
    def write_image(self, png_bytes: bytes) -> None:
        ...


class SystemClipboardWriter:
    """Пишет PNG в буфер обмена через wl-copy (Wayland) или xclip (X11)."""

    def _command(self) -> List[str]:
        if shutil.which("wl-copy"):
            return ["wl-copy", "--type", "image/png"]
        if shutil.which("xclip"):
            return ["xclip", "-selection", "clipboard", "-t", "image/png"]
        raise ClipboardError("Не найдена утилита буфера обмена (установите wl-clipboard или xclip).")

    def write_image(self, png_bytes: bytes) -> None:
        command = self._command()
        try:
            subprocess.run(command, input=png_bytes, check=True)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise ClipboardError(f"Не удалось скопировать изображение: {exc}") from exc
        LOGGER.debug("Скопировано в буфер обмена через %s: %d байт", command[0], len(png_bytes))

