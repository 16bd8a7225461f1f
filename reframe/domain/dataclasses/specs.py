# reframe/domain/dataclasses/specs.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from reframe.domain.enums.aspect_ratio import AspectRatio
from reframe.domain.enums.audio_target import AudioTarget, suffix_for_codec
from reframe.domain.enums.video_codec import VideoCodec


@dataclass(frozen=True)
class ExportSpec:
    """
    Caller intention for a full export. `codec_name` keeps the raw request
    string so an unknown codec can be reported back verbatim.
    """
    input: Path
    out: Path
    codec: VideoCodec = VideoCodec.h264
    codec_name: str = "h264"
    crf: Optional[int] = None
    preset: Optional[str] = None
    tune: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[AspectRatio] = None
    use_standard_sizes: bool = False
    subtitles: Optional[Path] = None

    @property
    def explicit_size(self) -> Optional[tuple[int, int]]:
        if self.width is not None and self.height is not None:
            return self.width, self.height
        return None


@dataclass(frozen=True)
class ExtractAudioSpec:
    """
    `codec` is the requested target. aac, m4a and mp3 may be stream-copied;
    any other name goes to ffmpeg as the audio encoder unchanged.
    """
    input: Path
    codec: str = "aac"
    out: Optional[Path] = None

    @property
    def target(self) -> Optional[AudioTarget]:
        return AudioTarget.lookup(self.codec)

    @property
    def encoder(self) -> str:
        target = self.target
        return target.encoder if target is not None else self.codec

    @property
    def resolved_out(self) -> Path:
        return self.out if self.out is not None else Path(self.input).with_suffix(suffix_for_codec(self.codec))


@dataclass(frozen=True)
class ThumbnailSpec:
    input: Path
    timestamp: Optional[float] = None
    max_width: Optional[int] = None


@dataclass(frozen=True)
class ExportConfig:
    """All export knobs after defaults were filled in, computed once before planning."""
    crf: int
    preset: str
    tune: str
    gop: int
    use_standard_sizes: bool
