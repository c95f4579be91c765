"""Виджет предпросмотра стикера.

Принципы:
- SRP: отвечает только за представление изображения.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Optional

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk


class ImageViewer(ctk.CTkFrame):
    """Канва, вписывающая изображение в доступную область."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._message: Optional[str] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)

    # ---- Public API ----
    def set_image(self, image: Optional[Image.Image]) -> None:
        """Показывает изображение (None очищает канву)."""
        self._image = image
        self._message = None
        self._render()

    def show_message(self, text: str) -> None:
        """Показывает текст вместо изображения (например, если файл не декодируется)."""
        self._image = None
        self._message = text
        self._render()

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        self._render()

    def _render(self) -> None:
        self._canvas.delete("all")
        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))

        if self._image is None:
            if self._message:
                self._canvas.create_text(canvas_w // 2, canvas_h // 2, text=self._message, fill="#888888")
            return

        img_w, img_h = self._image.size
        # never upscale small tray icons past 4x
        scale = max(0.1, min(4.0, min(canvas_w / img_w, canvas_h / img_h)))
        scaled = self._image.resize(
            (max(1, int(img_w * scale)), max(1, int(img_h * scale))), Image.Resampling.LANCZOS
        )
        self._tk_image = ImageTk.PhotoImage(scaled)
        self._canvas.create_image(canvas_w // 2, canvas_h // 2, image=self._tk_image, anchor="center")

    def _get_canvas_bg(self) -> str:
        # Soft checker-like color; CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"
