"""Боковая панель: открытие файла, роль, эмодзи, результат проверки.

Принципы:
- SRP: управляет только UI параметров, не содержит правил проверки.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, List, Optional

import customtkinter as ctk

from wastickers.models.compliance import ComplianceResult
from wastickers.models.image_model import StickerRole

_ROLE_LABELS = {"Стикер": StickerRole.MESSAGE, "Иконка набора": StickerRole.TRAY}


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, параметры, результат."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_params_change: Optional[Callable[[], None]] = None
        self.on_copy: Optional[Callable[[], None]] = None

        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть стикер…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Params section
        self._params_title = ctk.CTkLabel(self, text="Параметры", font=ctk.CTkFont(size=16, weight="bold"))
        self._params_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._role_menu = ctk.CTkSegmentedButton(
            self, values=list(_ROLE_LABELS), command=lambda _value: self._emit_params_change()
        )
        self._role_menu.set("Стикер")
        self._role_menu.grid(row=3, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._emoji_val = ctk.StringVar(value="")
        self._emoji_entry = ctk.CTkEntry(self, textvariable=self._emoji_val, placeholder_text="Эмодзи через пробел")
        self._emoji_entry.grid(row=4, column=0, padx=8, pady=(0, 10), sticky="ew")
        self._emoji_entry.bind("<Return>", lambda _event: self._emit_params_change())

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Результат", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=5, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._verdict_val = ctk.StringVar(value="—")
        self._details_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_verdict = ctk.CTkLabel(self, textvariable=self._verdict_val, anchor="w", justify="left")
        self._info_details = ctk.CTkLabel(
            self, textvariable=self._details_val, wraplength=250, anchor="w", justify="left"
        )
        self._info_path.grid(row=6, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_verdict.grid(row=7, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_details.grid(row=8, column=0, padx=8, pady=(0, 10), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

        self._copy_btn = ctk.CTkButton(self, text="Копировать в буфер", command=self._emit_copy, state="disabled")
        self._copy_btn.grid(row=100, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def get_role(self) -> StickerRole:
        return _ROLE_LABELS.get(self._role_menu.get(), StickerRole.MESSAGE)

    def get_emojis(self) -> Optional[List[str]]:
        """Эмодзи из поля ввода; None, если поле пустое (проверка количества не нужна)."""
        tokens = self._emoji_val.get().split()
        return tokens or None

    def set_path(self, path: str) -> None:
        self._path_val.set(path)

    def set_result(self, result: ComplianceResult) -> None:
        if result.ok and result.image_data is not None:
            data = result.image_data
            self._verdict_val.set("Соответствует")
            self._details_val.set(
                f"{data.format.value.upper()}, {data.width}x{data.height}, {data.byte_size / 1024:.1f} КБ"
            )
            self._copy_btn.configure(state="normal")
        else:
            self._verdict_val.set(f"Отклонено: {result.error.value if result.error else '—'}")
            self._details_val.set(result.detail or "—")
            self._copy_btn.configure(state="disabled")

    def clear_result(self, status: str = "—") -> None:
        """Сбрасывает вердикт и блокирует копирование, когда проверка не выполнена."""
        self._verdict_val.set("—")
        self._details_val.set(status)
        self._copy_btn.configure(state="disabled")

    def set_status(self, text: str) -> None:
        self._details_val.set(text)

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_params_change(self) -> None:
        if self.on_params_change:
            self.on_params_change()

    def _emit_copy(self) -> None:
        if self.on_copy:
            self.on_copy()
