# reframe/domain/policies/filter_graph.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from reframe.domain.entities.filter_chain import FilterChain
from reframe.domain.entities.geometry import CanvasGeometry
from reframe.domain.enums.hardware_encoder import HardwareEncoder

# libass renders onto a 4:4:4 frame
SUBTITLE_CHROMA_FORMAT = "yuv444p"


def escape_subtitle_path(path: str | Path) -> str:
    """
    Make a path safe inside the subtitles filter argument.
    Backslashes must be doubled before colons are escaped, otherwise the
    backslash we add in front of each colon would be doubled as well.
    """
    escaped = str(path).replace("\\", "\\\\")
    escaped = escaped.replace(":", "\\:")
    return f"'{escaped}'"


def scale_stage(width: int, height: int) -> str:
    return f"scale={width}:{height}:flags=lanczos:force_original_aspect_ratio=decrease"


def pad_stage(width: int, height: int, color: str = "black") -> str:
    return f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2:{color}"


def standard_scale_stage(size: CanvasGeometry) -> str:
    return f"scale={size.width}:{size.height}:flags=lanczos"


def subtitles_stage(subtitle_path: str | Path, fonts_dir: Optional[str | Path]) -> str:
    stage = f"subtitles={escape_subtitle_path(subtitle_path)}"
    if fonts_dir:
        stage += f":fontsdir={escape_subtitle_path(fonts_dir)}"
    return stage


def build_filter_chain(
    target_w: int,
    target_h: int,
    subtitle_path: Optional[str | Path] = None,
    encoder: HardwareEncoder = HardwareEncoder.software,
    *,
    fonts_dir: Optional[str | Path] = None,
    pad_color: str = "black",
    post_scale: Optional[CanvasGeometry] = None,
) -> FilterChain:
    """
    Stages, in order:
      [format=yuv444p]  only with subtitles
      scale (lanczos, decrease-only)
      pad (centered, solid color)
      [scale to post_scale]  optional delivery size
      [subtitles]  after geometry so text renders at final resolution
      format=<encoder pix_fmt>  always last
    """
    stages: List[str] = []
    if subtitle_path:
        stages.append(f"format={SUBTITLE_CHROMA_FORMAT}")
    stages.append(scale_stage(target_w, target_h))
    stages.append(pad_stage(target_w, target_h, pad_color))
    if post_scale is not None:
        stages.append(standard_scale_stage(post_scale))
    if subtitle_path:
        stages.append(subtitles_stage(subtitle_path, fonts_dir))
    stages.append(f"format={encoder.pix_fmt}")
    return FilterChain(tuple(stages))
