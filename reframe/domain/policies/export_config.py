# reframe/domain/policies/export_config.py
from __future__ import annotations

import math
from typing import Optional

from reframe.common.settings import ExportDefaults
from reframe.domain.dataclasses.specs import ExportConfig, ExportSpec
from reframe.domain.entities.probe import MediaProbe

# Exact frame rates are typical for games, animation and screen captures.
SYNTHETIC_FRAME_RATES = (24.0, 30.0, 60.0)


def detect_content_type(probe: Optional[MediaProbe]) -> str:
    if probe is not None and probe.fps is not None:
        if any(abs(probe.fps - r) < 0.01 for r in SYNTHETIC_FRAME_RATES):
            return "animation"
    return "film"


def gop_for(probe: Optional[MediaProbe], default: int = 48) -> int:
    """Keyframe every ~2 seconds."""
    if probe is not None and probe.fps:
        return int(math.floor(probe.fps * 2.0 + 0.5))
    return default


def resolve_export_config(spec: ExportSpec, probe: Optional[MediaProbe], defaults: ExportDefaults) -> ExportConfig:
    return ExportConfig(
        crf=spec.crf if spec.crf is not None else defaults.crf,
        preset=spec.preset or defaults.preset,
        tune=spec.tune or detect_content_type(probe),
        gop=gop_for(probe, defaults.default_gop),
        use_standard_sizes=bool(spec.use_standard_sizes),
    )
