from reframe.services.schemas.operations import (
    ExportRequest,
    ExportResultSchema,
    ExtractAudioRequest,
    ExtractAudioResultSchema,
    ExtractThumbnailRequest,
    ProbeRequest,
    ProbeResultSchema,
    ThumbnailResultSchema,
)
__all__ = [
    "ExportRequest",
    "ExportResultSchema",
    "ExtractAudioRequest",
    "ExtractAudioResultSchema",
    "ExtractThumbnailRequest",
    "ProbeRequest",
    "ProbeResultSchema",
    "ThumbnailResultSchema",
]
