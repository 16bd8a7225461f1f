# reframe/domain/policies/geometry.py
from __future__ import annotations

import math
from typing import Dict, Optional

from reframe.domain.entities.geometry import CanvasGeometry
from reframe.domain.enums.aspect_ratio import AspectRatio

# Platform delivery sizes, applied only when the caller opts in.
STANDARD_SIZES: Dict[AspectRatio, CanvasGeometry] = {
    AspectRatio.r9x16: CanvasGeometry(1080, 1920),
    AspectRatio.r16x9: CanvasGeometry(1920, 1080),
    AspectRatio.r4x5: CanvasGeometry(1080, 1350),
    AspectRatio.r1x1: CanvasGeometry(1080, 1080),
}


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _even(x: int) -> int:
    """Floor at 2, then round down to the nearest even value (yuv420 chroma)."""
    x = max(2, int(x))
    return x - (x % 2)


def fit_canvas(src_w: int, src_h: int, ar: AspectRatio) -> CanvasGeometry:
    """
    Choose a canvas of aspect `ar` that holds the source frame without
    scaling it down.

    Candidate A keeps the source height, candidate B keeps the source width.
    A candidate qualifies when it is at least as large as the source on
    both axes. Two qualifying candidates -> smaller area wins (A on ties);
    one -> that one; none -> A.
    """
    if src_w <= 0 or src_h <= 0:
        raise ValueError(f"Source dimensions must be positive, got {src_w}x{src_h}")

    aw, ah = ar.wh
    cand_a = CanvasGeometry(_even(_round_half_up(src_h * aw / ah)), _even(src_h))
    cand_b = CanvasGeometry(_even(src_w), _even(_round_half_up(src_w * ah / aw)))

    a_ok = cand_a.contains(src_w, src_h)
    b_ok = cand_b.contains(src_w, src_h)

    if a_ok and b_ok:
        return cand_a if cand_a.area <= cand_b.area else cand_b
    if b_ok:
        return cand_b
    return cand_a


def standard_size_for(ar: AspectRatio, want_standard: bool = True) -> Optional[CanvasGeometry]:
    if not want_standard:
        return None
    return STANDARD_SIZES[ar]
