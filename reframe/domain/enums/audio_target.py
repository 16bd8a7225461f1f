# reframe/domain/enums/audio_target.py
from __future__ import annotations

from enum import StrEnum
from typing import Optional

# Containers for encoders outside the aac/m4a/mp3 family
_OTHER_SUFFIXES = {
    "flac": ".flac",
    "alac": ".m4a",
    "opus": ".opus",
    "libopus": ".opus",
    "vorbis": ".ogg",
    "libvorbis": ".ogg",
    "ac3": ".ac3",
    "eac3": ".eac3",
    "libmp3lame": ".mp3",
    "wavpack": ".wv",
}
FALLBACK_SUFFIX = ".mka"  # Matroska audio takes any codec


class AudioTarget(StrEnum):
    """Extraction targets that may be satisfied by a stream copy."""
    aac = "aac"
    m4a = "m4a"
    mp3 = "mp3"

    @classmethod
    def lookup(cls, name: str | None) -> Optional["AudioTarget"]:
        """Known target for `name`, or None for any other codec name."""
        key = (name or "aac").strip().lower()
        try:
            return cls(key)
        except ValueError:
            return None

    @property
    def source_codec(self) -> str:
        """Codec name ffprobe reports for a stream we could copy as-is."""
        # m4a is a container; what lives in it is AAC
        return "aac" if self in (AudioTarget.aac, AudioTarget.m4a) else "mp3"

    @property
    def encoder(self) -> str:
        return "libmp3lame" if self is AudioTarget.mp3 else "aac"

    @property
    def suffix(self) -> str:
        return ".mp3" if self is AudioTarget.mp3 else ".m4a"

    @property
    def is_aac_family(self) -> bool:
        return self.source_codec == "aac"


def suffix_for_codec(codec: str) -> str:
    """Output file suffix for an arbitrary ffmpeg audio encoder name."""
    target = AudioTarget.lookup(codec)
    if target is not None:
        return target.suffix
    key = codec.strip().lower()
    if key.startswith("pcm_"):
        return ".wav"
    return _OTHER_SUFFIXES.get(key, FALLBACK_SUFFIX)
