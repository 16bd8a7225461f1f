# reframe/services/schemas/operations.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ProbeRequest(_CamelModel):
    input: str = Field(..., min_length=1, examples=["/videos/clip.mov"])


class ExportRequest(_CamelModel):
    input: str = Field(..., min_length=1)
    codec: str = Field("h264", examples=["h264", "hevc", "prores"])
    crf: Optional[int] = Field(None, ge=0, le=51)
    preset: Optional[str] = Field(None, examples=["slow", "medium"])
    tune: Optional[str] = Field(None, examples=["film", "animation"])
    width: Optional[int] = Field(None, ge=2, le=16384)
    height: Optional[int] = Field(None, ge=2, le=16384)
    format: Optional[str] = Field(None, examples=["9:16", "16:9", "4:5", "1:1"])
    use_standard_sizes: Optional[bool] = None
    subtitles: Optional[str] = None
    out: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def _width_and_height_together(self):
        if (self.width is None) != (self.height is None):
            raise ValueError("width and height must be given together")
        return self


class ExtractAudioRequest(_CamelModel):
    input: str = Field(..., min_length=1)
    # any ffmpeg audio encoder name; aac, m4a and mp3 can be stream-copied
    codec: str = Field("aac", min_length=1, max_length=32, pattern=r"^[A-Za-z0-9_]+$", examples=["aac", "mp3", "flac"])
    out: Optional[str] = None


class ExtractThumbnailRequest(_CamelModel):
    input: str = Field(..., min_length=1)
    timestamp: Optional[float] = Field(None, ge=0.0)
    max_width: Optional[int] = Field(None, ge=16, le=8192)


class ProbeResultSchema(_CamelModel):
    duration: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[float] = None
    video: bool = False
    audio: bool = False
    audio_codec: Optional[str] = None
    audio_bitrate: Optional[int] = None


class ExportResultSchema(_CamelModel):
    video: str


class ExtractAudioResultSchema(_CamelModel):
    audio: str


class ThumbnailResultSchema(_CamelModel):
    image_data: str
    width: int
    height: int
