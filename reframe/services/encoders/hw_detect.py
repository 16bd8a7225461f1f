# reframe/services/encoders/hw_detect.py
from __future__ import annotations

import platform
import threading
from typing import Callable, Optional

from reframe.common.logging import get_logger
from reframe.common.settings import get_settings
from reframe.domain.enums.hardware_encoder import HardwareEncoder
from reframe.domain.errors import ReframeError
from reframe.domain.ports.encoders import EncoderDetectorPort
from reframe.domain.ports.process import ProcessRunnerPort

logger = get_logger(__name__)

DETECTION_TIMEOUT_SEC = 10


def is_macos() -> bool:
    return platform.system() == "Darwin"


class HardwareEncoderDetector(EncoderDetectorPort):
    """
    Picks the H.264 encoder for an export: VideoToolbox (macOS only) > NVENC > libx264.

    Availability comes from a substring search in `ffmpeg -hide_banner -encoders`.
    Anything that goes wrong while asking ffmpeg means "not available"; software
    encoding is always possible.
    """

    def __init__(
        self,
        runner: ProcessRunnerPort,
        ffmpeg_bin: Optional[str] = None,
        *,
        cache: Optional[bool] = None,
        platform_check: Callable[[], bool] = is_macos,
    ) -> None:
        if ffmpeg_bin is None or cache is None:
            cfg = get_settings()
            ffmpeg_bin = ffmpeg_bin or cfg.ffmpeg_bin
            cache = cfg.cache_encoder_detection if cache is None else cache
        self.runner = runner
        self.ffmpeg_bin = ffmpeg_bin
        self.cache = cache
        self._is_macos = platform_check
        self._cached: Optional[HardwareEncoder] = None
        self._lock = threading.Lock()

    def encoder_listing(self) -> str:
        cmd = [self.ffmpeg_bin, "-hide_banner", "-encoders"]
        try:
            res = self.runner.run(cmd, timeout=DETECTION_TIMEOUT_SEC)
        except ReframeError as e:
            logger.info("Encoder detection unavailable (%s); assuming software only", e.message)
            return ""
        return f"{res.stdout or ''}\n{res.stderr or ''}"

    def detect(self) -> HardwareEncoder:
        """One capability query per call."""
        listing = self.encoder_listing()
        if self._is_macos() and HardwareEncoder.videotoolbox.codec_name in listing:
            return HardwareEncoder.videotoolbox
        if HardwareEncoder.nvenc.codec_name in listing:
            return HardwareEncoder.nvenc
        return HardwareEncoder.software

    def select_hardware_encoder(self) -> HardwareEncoder:
        if not self.cache:
            return self.detect()
        with self._lock:
            if self._cached is None:
                self._cached = self.detect()
            return self._cached
