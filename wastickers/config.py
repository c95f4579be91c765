"""Configuration module for the sticker toolkit."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wastickers.models.image_model import StickerRole
from wastickers.models.limits import MESSAGE_STICKER_LIMITS, ComplianceLimits


class Settings(BaseSettings):
    """Environment-driven settings (`STICKERS_*`)."""

    model_config = SettingsConfigDict(env_prefix="STICKERS_", env_file=".env", env_file_encoding="utf-8")

    bundle_dir: Path = Field(default=Path("."))
    max_file_size: int = Field(default=MESSAGE_STICKER_LIMITS.max_file_size, gt=0)
    dimension: int = Field(default=MESSAGE_STICKER_LIMITS.dimensions[0], gt=0)
    max_emojis: int = Field(default=MESSAGE_STICKER_LIMITS.max_emojis, ge=0)
    # no defaults: tray limits must be configured explicitly
    tray_max_file_size: Optional[int] = Field(default=None, gt=0)
    tray_dimension: Optional[int] = Field(default=None, gt=0)
    log_level: str = Field(default="INFO")

    def limits(self) -> Dict[StickerRole, ComplianceLimits]:
        profiles = {
            StickerRole.MESSAGE: ComplianceLimits(
                max_file_size=self.max_file_size,
                dimensions=(self.dimension, self.dimension),
                max_emojis=self.max_emojis,
            )
        }
        if self.tray_max_file_size is not None and self.tray_dimension is not None:
            profiles[StickerRole.TRAY] = ComplianceLimits(
                max_file_size=self.tray_max_file_size,
                dimensions=(self.tray_dimension, self.tray_dimension),
                max_emojis=0,
            )
        return profiles


@lru_cache()
def load_settings() -> Settings:
    return Settings()
