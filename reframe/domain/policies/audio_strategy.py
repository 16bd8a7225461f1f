# reframe/domain/policies/audio_strategy.py
from __future__ import annotations

from typing import Optional

from reframe.domain.entities.audio_decision import COPY, AudioDecision
from reframe.domain.entities.probe import MediaProbe
from reframe.domain.enums.audio_target import AudioTarget

DEFAULT_AUDIO_CODEC = "aac"
DEFAULT_AUDIO_ARGS = ("-q:a", "2")   # VBR
AAC_COPY_MAX_BITRATE = 160_000

# Uncompressed / ancient ADPCM variants
REENCODE_PREFIXES = ("pcm_", "adpcm_")
# Efficient lossy codecs, copied at any bitrate
COPY_CODECS = frozenset({"mp3", "opus", "vorbis", "ac3", "eac3", "dts", "mp2"})
# Lossless (too big) or legacy (poor compatibility)
REENCODE_CODECS = frozenset({"flac", "alac", "ape", "wavpack", "gsm", "speex"})


def _reencode(reason: str, *, fallback: bool = False) -> AudioDecision:
    return AudioDecision(DEFAULT_AUDIO_CODEC, DEFAULT_AUDIO_ARGS, reason=reason, fallback=fallback)


def _copy(reason: str) -> AudioDecision:
    return AudioDecision(COPY, (), reason=reason)


def decide_audio_strategy(probe: Optional[MediaProbe]) -> AudioDecision:
    """Stream-copy vs re-encode for the export audio track. Rules apply top to bottom."""
    if probe is None:
        return _reencode("no probe data")
    if not probe.has_audio:
        return _reencode("no audio track detected")
    if not probe.audio_codec:
        return _reencode("audio codec unknown")

    codec = probe.audio_codec.lower()

    if codec.startswith(REENCODE_PREFIXES):
        return _reencode(f"'{codec}' is uncompressed or legacy PCM")

    if codec == "aac":
        if probe.audio_bitrate is None:
            return _copy("aac with unknown bitrate")
        if probe.audio_bitrate <= AAC_COPY_MAX_BITRATE:
            return _copy(f"aac at {probe.audio_bitrate} bit/s")
        # high-bitrate AAC continues to the table below

    if codec in COPY_CODECS:
        return _copy(f"'{codec}' is already efficient")
    if codec in REENCODE_CODECS:
        return _reencode(f"'{codec}' is lossless or legacy")

    return _reencode(
        f"Codec '{probe.audio_codec}' - re-encoding with VBR for optimal quality/size",
        fallback=True,
    )


def can_copy_audio_for_target(probe: Optional[MediaProbe], target: Optional[AudioTarget]) -> bool:
    """Audio extraction: copy only when the source already is the requested codec family."""
    if target is None or probe is None or not probe.audio_codec:
        return False
    return probe.audio_codec.lower() == target.source_codec
