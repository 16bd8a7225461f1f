# reframe/services/mappers/operations.py
from __future__ import annotations

from pathlib import Path

from reframe.domain.dataclasses.results import ExportResult, ExtractAudioResult, ThumbnailResult
from reframe.domain.dataclasses.specs import ExportSpec, ExtractAudioSpec, ThumbnailSpec
from reframe.domain.entities.probe import MediaProbe
from reframe.domain.enums.aspect_ratio import AspectRatio
from reframe.domain.enums.video_codec import VideoCodec
from reframe.services.schemas.operations import (
    ExportRequest,
    ExportResultSchema,
    ExtractAudioRequest,
    ExtractAudioResultSchema,
    ExtractThumbnailRequest,
    ProbeResultSchema,
    ThumbnailResultSchema,
)


# ---- requests -> domain specs ------------------------------------------------
def to_export_spec(req: ExportRequest) -> ExportSpec:
    """Raises UnsupportedAspectRatio for an unknown `format`."""
    return ExportSpec(
        input=Path(req.input),
        out=Path(req.out),
        codec=VideoCodec.from_name(req.codec),
        codec_name=req.codec,
        crf=req.crf,
        preset=req.preset,
        tune=req.tune,
        width=req.width,
        height=req.height,
        format=AspectRatio.parse(req.format) if req.format else None,
        use_standard_sizes=bool(req.use_standard_sizes),
        subtitles=Path(req.subtitles) if req.subtitles else None,
    )


def to_extract_audio_spec(req: ExtractAudioRequest) -> ExtractAudioSpec:
    return ExtractAudioSpec(
        input=Path(req.input),
        codec=req.codec.strip().lower(),
        out=Path(req.out) if req.out else None,
    )


def to_thumbnail_spec(req: ExtractThumbnailRequest) -> ThumbnailSpec:
    return ThumbnailSpec(input=Path(req.input), timestamp=req.timestamp, max_width=req.max_width)


# ---- domain results -> response schemas ---------------------------------------
def to_probe_schema(pr: MediaProbe) -> ProbeResultSchema:
    return ProbeResultSchema(
        duration=pr.duration,
        width=pr.width,
        height=pr.height,
        fps=pr.fps,
        video=pr.has_video,
        audio=pr.has_audio,
        audio_codec=pr.audio_codec,
        audio_bitrate=pr.audio_bitrate,
    )


def to_export_schema(res: ExportResult) -> ExportResultSchema:
    return ExportResultSchema(video=str(res.video))


def to_extract_audio_schema(res: ExtractAudioResult) -> ExtractAudioResultSchema:
    return ExtractAudioResultSchema(audio=str(res.audio))


def to_thumbnail_schema(res: ThumbnailResult) -> ThumbnailResultSchema:
    return ThumbnailResultSchema(image_data=res.image_data, width=res.width, height=res.height)
