# reframe/domain/enums/video_codec.py
from __future__ import annotations

from enum import StrEnum


class VideoCodec(StrEnum):
    h264 = "h264"
    hevc = "hevc"
    prores = "prores"
    copy = "copy"

    @classmethod
    def from_name(cls, name: str | None) -> "VideoCodec":
        """Caller vocabulary -> codec. Unknown names fall back to stream copy."""
        key = (name or "").strip().lower()
        if key == "h265":
            key = "hevc"
        try:
            member = cls(key)
        except ValueError:
            return cls.copy
        return member
