"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без правил проверки).
- DIP: зависит от сервисов как от абстрактных ролей; буфер обмена передаётся снаружи.
Clean Code:
- Обработчики компактны; логика проверки вынесена в `ComplianceService`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import filedialog, TclError
from typing import Dict, Optional

import customtkinter as ctk

from wastickers.models.compliance import ComplianceResult
from wastickers.models.image_model import StickerRole
from wastickers.models.limits import ComplianceLimits, MissingLimitsError
from wastickers.models.sticker import Sticker
from wastickers.services.clipboard_service import ClipboardError, ClipboardWriter
from wastickers.services.compliance_service import ComplianceService
from wastickers.services.image_service import ImageService
from wastickers.ui.image_viewer import ImageViewer
from wastickers.ui.sidebar import Sidebar

LOGGER = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Проверка выбранного файла через `ComplianceService`.
    - Копирование принятого стикера через `ClipboardWriter`.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    window: ctk.CTk
    limits: Dict[StickerRole, ComplianceLimits]
    clipboard: ClipboardWriter
    initial_dir: Optional[Path] = None

    _current_path: Optional[Path] = None
    _result: Optional[ComplianceResult] = field(default=None, repr=False)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Сохраняет слабую связность: компоненты UI ничего не знают друг о друге,
        общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_params_change = self._handle_params_change
        self.sidebar.on_copy = self._handle_copy

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите стикер",
                initialdir=str(self.initial_dir) if self.initial_dir else None,
                filetypes=(
                    ("Stickers", "*.png *.webp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        self._current_path = Path(file_path)
        self.sidebar.set_path(str(self._current_path))
        self._run_validation()

    def _handle_params_change(self) -> None:
        if self._current_path is not None:
            self._run_validation()

    def _handle_copy(self) -> None:
        if self._result is None or self._result.image_data is None:
            return
        sticker = Sticker(image_data=self._result.image_data, emojis=tuple(self.sidebar.get_emojis() or ()))
        try:
            sticker.copy_to_pasteboard(self.clipboard)
        except ClipboardError as exc:
            LOGGER.warning("Копирование не удалось: %s", exc)
            self.sidebar.set_status(str(exc))
            return
        self.sidebar.set_status("Скопировано в буфер обмена")

    # ---- Helpers ----
    def _run_validation(self) -> None:
        """Проверяет текущий файл с ролью и эмодзи из сайдбара.

        Каталог файла используется как каталог ресурсов, поэтому путь
        проходит тот же `validate_file`, что и у библиотеки.
        """
        if self._current_path is None:
            return
        service = ComplianceService(self.limits, ImageService(self._current_path.parent))
        try:
            result = service.validate_file(
                self._current_path.name, self.sidebar.get_role(), self.sidebar.get_emojis()
            )
        except MissingLimitsError as exc:
            self._result = None
            self.viewer.show_message("Лимиты не настроены")
            self.sidebar.clear_result(str(exc))
            return

        self._result = result
        self.sidebar.set_result(result)
        if result.image_data is not None:
            self.viewer.set_image(result.image_data.image)
        else:
            self.viewer.show_message(result.error.value if result.error else "")
