# reframe/services/transcode/dispatch.py
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from reframe.domain.ports.events import EventSink
from reframe.services.mappers.operations import (
    to_export_schema,
    to_export_spec,
    to_extract_audio_schema,
    to_extract_audio_spec,
    to_probe_schema,
    to_thumbnail_schema,
    to_thumbnail_spec,
)
from reframe.services.schemas.operations import (
    ExportRequest,
    ExtractAudioRequest,
    ExtractThumbnailRequest,
    ProbeRequest,
)
from reframe.services.transcode.orchestrator import TranscodeOrchestrator

Handler = Callable[[TranscodeOrchestrator, str, Mapping[str, Any], EventSink], Dict[str, Any]]


def _probe(orch: TranscodeOrchestrator, op_id: str, params: Mapping[str, Any], events: EventSink) -> Dict[str, Any]:
    req = ProbeRequest.model_validate(params)
    return to_probe_schema(orch.probe(op_id, req.input, events)).model_dump(by_alias=True)


def _export(orch: TranscodeOrchestrator, op_id: str, params: Mapping[str, Any], events: EventSink) -> Dict[str, Any]:
    spec = to_export_spec(ExportRequest.model_validate(params))
    return to_export_schema(orch.export(op_id, spec, events)).model_dump(by_alias=True)


def _extract_audio(orch: TranscodeOrchestrator, op_id: str, params: Mapping[str, Any], events: EventSink) -> Dict[str, Any]:
    spec = to_extract_audio_spec(ExtractAudioRequest.model_validate(params))
    return to_extract_audio_schema(orch.extract_audio(op_id, spec, events)).model_dump(by_alias=True)


def _extract_thumbnail(orch: TranscodeOrchestrator, op_id: str, params: Mapping[str, Any], events: EventSink) -> Dict[str, Any]:
    spec = to_thumbnail_spec(ExtractThumbnailRequest.model_validate(params))
    return to_thumbnail_schema(orch.extract_thumbnail(op_id, spec, events)).model_dump(by_alias=True)


HANDLERS: Dict[str, Handler] = {
    "probe": _probe,
    "exportVideo": _export,
    "extractAudio": _extract_audio,
    "extractThumbnail": _extract_thumbnail,
}


def dispatch(
    orch: TranscodeOrchestrator,
    op_id: str,
    method: str,
    params: Mapping[str, Any],
    events: EventSink,
) -> Dict[str, Any]:
    """
    Caller-facing entry point: method name + camelCase params in, camelCase
    result dict out. Validation errors surface as pydantic.ValidationError.
    """
    try:
        handler = HANDLERS[method]
    except KeyError:
        raise ValueError(f"Unknown method '{method}'. Known: {', '.join(sorted(HANDLERS))}") from None
    return handler(orch, op_id, params or {}, events)
