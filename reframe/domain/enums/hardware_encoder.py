# reframe/domain/enums/hardware_encoder.py
from __future__ import annotations

from enum import StrEnum


class HardwareEncoder(StrEnum):
    videotoolbox = "videotoolbox"
    nvenc = "nvenc"
    software = "software"

    @property
    def codec_name(self) -> str:
        return _CODEC_NAMES[self]

    @property
    def pix_fmt(self) -> str:
        # GPU encoders take nv12 natively
        if self in (HardwareEncoder.videotoolbox, HardwareEncoder.nvenc):
            return "nv12"
        return "yuv420p"

    @property
    def is_hardware(self) -> bool:
        return self is not HardwareEncoder.software

    @property
    def label(self) -> str:
        return _LABELS[self]


_CODEC_NAMES = {
    HardwareEncoder.videotoolbox: "h264_videotoolbox",
    HardwareEncoder.nvenc: "h264_nvenc",
    HardwareEncoder.software: "libx264",
}

_LABELS = {
    HardwareEncoder.videotoolbox: "VideoToolbox (GPU) + NV12 optimization",
    HardwareEncoder.nvenc: "NVENC (GPU) + NV12 optimization",
    HardwareEncoder.software: "libx264 (CPU)",
}
