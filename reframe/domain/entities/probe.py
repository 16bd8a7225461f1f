# reframe/domain/entities/probe.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class MediaProbe:
    """
    Normalized, framework-free result of a media probe (ffprobe).
    Created once per operation and never mutated afterwards.
    """
    duration: Optional[float] = None       # seconds
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[float] = None
    has_video: bool = False
    has_audio: bool = False
    audio_codec: Optional[str] = None
    audio_bitrate: Optional[int] = None    # bits/sec

    @property
    def dimensions(self) -> Optional[tuple[int, int]]:
        if self.width and self.height:
            return self.width, self.height
        return None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
