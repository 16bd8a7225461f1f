# reframe/domain/policies/encoder_args.py
from __future__ import annotations

from typing import List, Tuple

from reframe.domain.dataclasses.specs import ExportConfig
from reframe.domain.enums.hardware_encoder import HardwareEncoder
from reframe.domain.enums.video_codec import VideoCodec

# BT.709, limited range
COLOR_LOCK_ARGS: Tuple[str, ...] = (
    "-color_range", "tv",
    "-colorspace", "bt709",
    "-color_primaries", "bt709",
    "-color_trc", "bt709",
)
BENCHMARK_ARGS: Tuple[str, ...] = ("-benchmark", "-stats")

NVENC_PRESET = "p5"
NVENC_TUNE = "hq"
PRORES_PROFILE = "3"  # HQ


def build_encoder_args(choice: HardwareEncoder, crf: int | str, gop_size: int | str, preset: str) -> List[str]:
    crf, gop = str(crf), str(gop_size)
    if choice is HardwareEncoder.videotoolbox:
        args = [
            "-c:v", choice.codec_name,
            "-b:v", "0",
            "-crf", crf,
            "-allow_sw", "1",
            "-g", gop,
            "-pix_fmt", choice.pix_fmt,
        ]
    elif choice is HardwareEncoder.nvenc:
        args = [
            "-c:v", choice.codec_name,
            "-cq", crf,
            "-preset", NVENC_PRESET,
            "-tune", NVENC_TUNE,
            "-rc", "vbr",
            "-g", gop,
            "-pix_fmt", choice.pix_fmt,
        ]
    else:
        args = [
            "-c:v", choice.codec_name,
            "-preset", preset,
            "-crf", crf,
            "-g", gop,
            "-pix_fmt", choice.pix_fmt,
        ]
    args.extend(COLOR_LOCK_ARGS)
    args.extend(BENCHMARK_ARGS)
    return args


def build_video_codec_args(codec: VideoCodec, encoder: HardwareEncoder, cfg: ExportConfig) -> List[str]:
    """Video block of the export command for the requested codec."""
    if codec is VideoCodec.h264:
        args = build_encoder_args(encoder, cfg.crf, cfg.gop, cfg.preset)
        # GPU encoders carry their own tuning
        if not encoder.is_hardware:
            args += ["-tune", cfg.tune]
        return args
    if codec is VideoCodec.hevc:
        return [
            "-c:v", "libx265",
            "-preset", cfg.preset,
            "-tune", cfg.tune,
            "-crf", str(cfg.crf),
            "-g", str(cfg.gop),
            "-pix_fmt", "yuv420p",
        ]
    if codec is VideoCodec.prores:
        return ["-c:v", "prores_ks", "-profile:v", PRORES_PROFILE]
    return ["-c:v", "copy"]
