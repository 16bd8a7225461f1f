# tests/domain/policies/test_encoder_args.py
from __future__ import annotations

import pytest

from reframe.domain.dataclasses.specs import ExportConfig
from reframe.domain.enums.hardware_encoder import HardwareEncoder
from reframe.domain.enums.video_codec import VideoCodec
from reframe.domain.policies.encoder_args import (
    BENCHMARK_ARGS,
    COLOR_LOCK_ARGS,
    build_encoder_args,
    build_video_codec_args,
)

CFG = ExportConfig(crf=20, preset="medium", tune="film", gop=60, use_standard_sizes=False)


def _value(args, flag):
    return args[args.index(flag) + 1]


def test_videotoolbox_args():
    args = build_encoder_args(HardwareEncoder.videotoolbox, 18, 48, "slow")
    assert args[:12] == [
        "-c:v", "h264_videotoolbox", "-b:v", "0", "-crf", "18",
        "-allow_sw", "1", "-g", "48", "-pix_fmt", "nv12",
    ]
    assert "-preset" not in args


def test_nvenc_args():
    args = build_encoder_args(HardwareEncoder.nvenc, 19, 50, "slow")
    assert _value(args, "-c:v") == "h264_nvenc"
    assert _value(args, "-cq") == "19"
    assert _value(args, "-preset") == "p5"
    assert _value(args, "-tune") == "hq"
    assert _value(args, "-rc") == "vbr"
    assert _value(args, "-pix_fmt") == "nv12"
    assert "-crf" not in args


def test_software_args_use_preset_and_crf():
    args = build_encoder_args(HardwareEncoder.software, 18, 48, "veryslow")
    assert args[:10] == ["-c:v", "libx264", "-preset", "veryslow", "-crf", "18", "-g", "48", "-pix_fmt", "yuv420p"]


@pytest.mark.parametrize("encoder", list(HardwareEncoder))
def test_every_encoder_gets_gop_and_trailing_color_lock(encoder):
    args = build_encoder_args(encoder, 18, 72, "slow")
    assert _value(args, "-g") == "72"
    tail = list(COLOR_LOCK_ARGS) + list(BENCHMARK_ARGS)
    assert args[-len(tail):] == tail


def test_h264_software_adds_tune():
    args = build_video_codec_args(VideoCodec.h264, HardwareEncoder.software, CFG)
    assert args[-2:] == ["-tune", "film"]


@pytest.mark.parametrize("encoder", [HardwareEncoder.videotoolbox, HardwareEncoder.nvenc])
def test_h264_hardware_has_no_content_tune(encoder):
    args = build_video_codec_args(VideoCodec.h264, encoder, CFG)
    assert "film" not in args


def test_hevc_block():
    assert build_video_codec_args(VideoCodec.hevc, HardwareEncoder.software, CFG) == [
        "-c:v", "libx265", "-preset", "medium", "-tune", "film",
        "-crf", "20", "-g", "60", "-pix_fmt", "yuv420p",
    ]


def test_prores_block_has_no_quality_knob():
    args = build_video_codec_args(VideoCodec.prores, HardwareEncoder.software, CFG)
    assert args == ["-c:v", "prores_ks", "-profile:v", "3"]


def test_unknown_codec_copies():
    assert build_video_codec_args(VideoCodec.copy, HardwareEncoder.software, CFG) == ["-c:v", "copy"]
