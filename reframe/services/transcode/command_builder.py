# reframe/services/transcode/command_builder.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from reframe.domain.entities.audio_decision import AudioDecision
from reframe.domain.entities.filter_chain import FilterChain


def build_export_cmd(
    ffmpeg_bin: str,
    input_path: str | Path,
    out_path: str | Path,
    *,
    video_args: Sequence[str],
    audio: AudioDecision,
    chain: Optional[FilterChain] = None,
    sws_flags: Optional[str] = None,
) -> List[str]:
    cmd = [ffmpeg_bin, "-y", "-i", str(input_path)]
    if sws_flags:
        cmd += ["-sws_flags", sws_flags]
    if chain:
        cmd += ["-vf", str(chain)]
    cmd += [
        "-fps_mode", "passthrough",   # keep source frame timing (replaces -vsync)
        "-threads", "0",
    ]
    cmd += list(video_args)
    cmd += audio.to_args()
    cmd += [
        "-map_metadata", "0",
        "-map", "0:v:0",
        "-map", "0:a?",               # audio only if the source has it
        "-movflags", "+faststart",
        str(out_path),
    ]
    return cmd


def build_extract_audio_cmd(
    ffmpeg_bin: str,
    input_path: str | Path,
    out_path: str | Path,
    *,
    codec: str,
    bitrate: Optional[str] = None,
) -> List[str]:
    cmd = [ffmpeg_bin, "-y", "-i", str(input_path), "-vn", "-acodec", codec]
    if bitrate:
        cmd += ["-b:a", bitrate]
    cmd.append(str(out_path))
    return cmd


def build_thumbnail_cmd(
    ffmpeg_bin: str,
    input_path: str | Path,
    out_png: str | Path,
    *,
    timestamp: float,
    max_width: Optional[int] = None,
) -> List[str]:
    cmd = [
        ffmpeg_bin, "-hide_banner", "-loglevel", "error",
        "-ss", f"{timestamp:.3f}",
        "-i", str(input_path),
        "-frames:v", "1", "-an",
    ]
    if max_width:
        cmd += ["-vf", f"scale='min({int(max_width)},iw)':-2:flags=lanczos,setsar=1"]
    cmd += ["-y", str(out_png)]
    return cmd
