# reframe/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class FFmpegConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bin: str = Field(default="ffmpeg", alias="FFMPEG_BIN")


class FFProbeConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    timeout_sec: int = 30
    log_level: str = "error"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace
    bin: str = Field(default="ffprobe", alias="FFPROBE_BIN")


class ExportDefaults(BaseModel):
    crf: int = Field(18, ge=0, le=51)
    preset: str = "slow"
    default_gop: int = Field(48, ge=1, description="GOP used when the source frame rate is unknown")
    pad_color: str = "black"
    sws_flags: str = "lanczos+accurate_rnd+full_chroma_int"
    aac_bitrate: str = "160k"


class ThumbnailDefaults(BaseModel):
    timestamp: float = Field(0.5, ge=0.0)
    max_width: Optional[int] = Field(None, ge=16, le=8192)


class ConcurrencyConfig(BaseModel):
    max_operations: int = Field(4, ge=1, le=64)
    cancel_on_exit: bool = False

    @field_validator("cancel_on_exit", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=False)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "reframe"
    app_env: str = "development"  # development|test|production
    log_level: str = "INFO"

    # -------- External tools --------
    ffmpeg: FFmpegConfig = FFmpegConfig()
    ffprobe: FFProbeConfig = FFProbeConfig()

    # -------- Export behaviour --------
    export: ExportDefaults = ExportDefaults()
    thumbnail: ThumbnailDefaults = ThumbnailDefaults()
    concurrency: ConcurrencyConfig = ConcurrencyConfig()

    # None -> libass falls back to the system fonts
    fonts_dir: Optional[Path] = Field(default=None, description="Fonts directory handed to the subtitles filter")

    # None -> wait for ffmpeg as long as it takes
    transcode_timeout_sec: Optional[int] = Field(None, ge=1)
    # False -> re-run `ffmpeg -encoders` on every H.264 export
    cache_encoder_detection: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    @field_validator("cache_encoder_detection", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    @property
    def ffmpeg_bin(self) -> str:
        return self.ffmpeg.bin

    @property
    def ffprobe_bin(self) -> str:
        return self.ffprobe.bin


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from reframe.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
