# reframe/domain/dataclasses/results.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExportResult:
    video: Path


@dataclass(frozen=True)
class ExtractAudioResult:
    audio: Path


@dataclass(frozen=True)
class ThumbnailResult:
    image_data: str     # base64 PNG
    width: int
    height: int
