# reframe/common/probe/ffprobe_helpers.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from reframe.domain.entities.probe import MediaProbe


def build_ffprobe_cmd(
    input_path: str | Path,
    ffprobe_bin: str = "ffprobe",
    log_level: str = "error",
    extra_args: Iterable[str] | None = None,
) -> List[str]:
    """
    ffprobe command that emits stream + container metadata as JSON, errors only.
    """
    base = [
        ffprobe_bin,
        "-v", log_level,
        "-print_format", "json",
        "-show_streams",
        "-show_format",
    ]
    if extra_args:
        base += list(extra_args)
    base.append(str(input_path))
    return base


def parse_rate(rate: Any) -> Optional[float]:
    """
    Frame rate as ffprobe prints it: "30000/1001" or "29.97".
    A zero denominator means "unknown", not an error.
    """
    if rate is None:
        return None
    s = str(rate).strip()
    if not s:
        return None
    try:
        if "/" in s:
            num, den = s.split("/", 1)
            n, d = float(num), float(den)
            if d == 0:
                return None
            return n / d
        return float(s)
    except ValueError:
        return None


def _maybe_float(x: Any) -> Optional[float]:
    if x is None:
        return None
    try:
        return float(x)
    except (TypeError, ValueError):
        return None


def _maybe_str(x: Any) -> Optional[str]:
    return None if x is None else str(x)


def _maybe_int(x: Any) -> Optional[int]:
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, int):
        return x
    try:
        return int(str(x).strip())
    except ValueError:
        return None


def parse_ffprobe(data: Dict[str, Any]) -> MediaProbe:
    """
    Fold ffprobe JSON into a MediaProbe. Safe to call in unit tests with fixture JSON.

    Streams are walked in order; a later stream of the same type overrides
    the fields of an earlier one. Duration prefers the container value and
    falls back to the video stream's own duration.
    """
    if not isinstance(data, dict):
        raise TypeError("ffprobe JSON root must be an object")
    fmt = data.get("format") or {}
    streams = data.get("streams") or []
    if not isinstance(fmt, dict) or not isinstance(streams, list):
        raise TypeError("ffprobe JSON has unexpected 'format'/'streams' shape")

    duration = _maybe_float(fmt.get("duration"))
    width = height = None
    fps = None
    has_video = has_audio = False
    audio_codec = None
    audio_bitrate = None

    for st in streams:
        if not isinstance(st, dict):
            continue
        kind = st.get("codec_type")
        if kind == "video":
            has_video = True
            width = _maybe_int(st.get("width"))
            height = _maybe_int(st.get("height"))
            rate = parse_rate(st.get("avg_frame_rate"))
            if rate is not None:
                fps = rate
            if duration is None:
                duration = _maybe_float(st.get("duration"))
        elif kind == "audio":
            has_audio = True
            audio_codec = _maybe_str(st.get("codec_name"))
            audio_bitrate = _maybe_int(st.get("bit_rate"))
        # subtitles / data / attachments are irrelevant here

    return MediaProbe(
        duration=duration,
        width=width,
        height=height,
        fps=fps,
        has_video=has_video,
        has_audio=has_audio,
        audio_codec=audio_codec,
        audio_bitrate=audio_bitrate,
    )
