# reframe/services/thumbs/frame_grabber.py
from __future__ import annotations

import base64
import io
import tempfile
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from reframe.common.logging import get_logger
from reframe.domain.dataclasses.results import ThumbnailResult
from reframe.domain.errors import ExecutionFailure, IOFailure, ProcessSpawnError
from reframe.domain.ports.process import ProcessRunnerPort
from reframe.services.transcode.command_builder import build_thumbnail_cmd

logger = get_logger(__name__)


def clamp_timestamp(timestamp: float, duration: Optional[float]) -> float:
    """Keep the seek point inside the file; past-the-end seeks yield no frame."""
    t = max(0.0, float(timestamp))
    if duration and duration > 0 and t >= duration:
        return duration / 2.0
    return t


class FrameGrabber:
    """Pulls a single PNG frame out of a video and returns it base64-encoded."""

    def __init__(self, runner: ProcessRunnerPort, ffmpeg_bin: str = "ffmpeg", timeout: Optional[float] = None):
        self.runner = runner
        self.ffmpeg_bin = ffmpeg_bin
        self.timeout = timeout

    def grab(self, video: Path, timestamp: float, max_width: Optional[int] = None) -> ThumbnailResult:
        tmp_dir = video.parent if video.parent.exists() else Path(tempfile.gettempdir())
        try:
            with tempfile.NamedTemporaryFile("wb", suffix=".png", delete=False, dir=str(tmp_dir)) as tf:
                out_png = Path(tf.name)
        except OSError as e:
            raise IOFailure(f"Cannot create temporary frame file in {tmp_dir}: {e}") from e

        try:
            cmd = build_thumbnail_cmd(self.ffmpeg_bin, video, out_png, timestamp=timestamp, max_width=max_width)
            try:
                res = self.runner.run(cmd, timeout=self.timeout)
            except ProcessSpawnError as e:
                raise ExecutionFailure("Could not start ffmpeg for frame extraction",
                                       program=self.ffmpeg_bin, stderr=e.message) from e
            if not res.ok:
                raise ExecutionFailure(f"ffmpeg failed extracting frame at {timestamp:.3f}s",
                                       program=res.program, rc=res.returncode, stderr=res.stderr)
            return self._encode(out_png)
        finally:
            out_png.unlink(missing_ok=True)

    @staticmethod
    def _encode(png: Path) -> ThumbnailResult:
        try:
            with Image.open(png) as im:
                im.load()
                width, height = im.size
                buf = io.BytesIO()
                im.save(buf, format="PNG", optimize=True)
        except (OSError, UnidentifiedImageError) as e:
            raise IOFailure(f"Extracted frame is not a readable image: {e}") from e
        return ThumbnailResult(
            image_data=base64.b64encode(buf.getvalue()).decode("ascii"),
            width=width,
            height=height,
        )
