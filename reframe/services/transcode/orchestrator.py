# reframe/services/transcode/orchestrator.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar

from reframe.common.logging import get_logger
from reframe.common.settings import Settings, get_settings
from reframe.domain.dataclasses.results import ExportResult, ExtractAudioResult, ThumbnailResult
from reframe.domain.dataclasses.specs import ExportConfig, ExportSpec, ExtractAudioSpec, ThumbnailSpec
from reframe.domain.entities.filter_chain import FilterChain
from reframe.domain.entities.geometry import CanvasGeometry
from reframe.domain.entities.probe import MediaProbe
from reframe.domain.enums.hardware_encoder import HardwareEncoder
from reframe.domain.enums.operation import OperationKind, OperationState
from reframe.domain.enums.video_codec import VideoCodec
from reframe.domain.errors import ExecutionFailure, IOFailure, ProbeFailure, ProcessSpawnError, ReframeError
from reframe.domain.policies.audio_strategy import can_copy_audio_for_target, decide_audio_strategy
from reframe.domain.policies.encoder_args import build_video_codec_args
from reframe.domain.policies.export_config import resolve_export_config
from reframe.domain.policies.filter_graph import build_filter_chain
from reframe.domain.policies.geometry import fit_canvas, standard_size_for
from reframe.domain.ports.encoders import EncoderDetectorPort
from reframe.domain.ports.events import EventSink
from reframe.domain.ports.probe import MediaProbePort
from reframe.domain.ports.process import ProcessResult, ProcessRunnerPort
from reframe.services.encoders.hw_detect import HardwareEncoderDetector
from reframe.services.probe.ffprobe_adapter import FFprobeAdapter
from reframe.services.process.subprocess_runner import SubprocessRunner
from reframe.services.thumbs.frame_grabber import FrameGrabber, clamp_timestamp
from reframe.services.transcode.command_builder import build_export_cmd, build_extract_audio_cmd
from reframe.services.transcode.events import PhaseSink
from reframe.services.transcode.tracker import OperationTracker

logger = get_logger(__name__)

T = TypeVar("T")
S = OperationState

# Share of the overall progress bar the probe takes in export-style flows;
# execution starts reporting from here.
PROBE_PHASE_END = 0.1


class TranscodeOrchestrator:
    """
    Drives one operation at a time per call: probe -> plan -> execute.

    Holds no per-operation state; every call builds its own tracker, so a
    single orchestrator can serve concurrent operations from an OperationPool.
    Collaborators (process runner, prober, encoder detector) are injected so
    tests can substitute fakes.
    """

    def __init__(
        self,
        runner: Optional[ProcessRunnerPort] = None,
        prober: Optional[MediaProbePort] = None,
        detector: Optional[EncoderDetectorPort] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.cfg = settings or get_settings()
        self.runner = runner or SubprocessRunner()
        self.prober = prober or FFprobeAdapter(
            self.runner,
            ffprobe_bin=self.cfg.ffprobe_bin,
            timeout_sec=self.cfg.ffprobe.timeout_sec,
            log_level=self.cfg.ffprobe.log_level,
        )
        self.detector = detector or HardwareEncoderDetector(
            self.runner, self.cfg.ffmpeg_bin, cache=self.cfg.cache_encoder_detection
        )
        self.ffmpeg_bin = self.cfg.ffmpeg_bin

    # =========================================================================
    # Operations
    # =========================================================================
    def probe(self, op_id: str, input_path: str | Path, events: EventSink) -> MediaProbe:
        """Probe-only: a failed probe fails the operation."""
        t = OperationTracker(op_id, OperationKind.probe, events)

        def body() -> MediaProbe:
            t.advance(S.probing)
            return self.prober.probe(op_id, Path(input_path), events)

        return self._run(t, body)

    def export(self, op_id: str, spec: ExportSpec, events: EventSink) -> ExportResult:
        t = OperationTracker(op_id, OperationKind.export, events)

        def body() -> ExportResult:
            self._require_input(spec.input)
            pr = self._probe_tolerant(t, spec.input)

            t.advance(S.planning)
            cfg = resolve_export_config(spec, pr, self.cfg.export)
            encoder = (
                self.detector.select_hardware_encoder()
                if spec.codec is VideoCodec.h264
                else HardwareEncoder.software
            )
            chain = self._plan_filters(t, spec, pr, encoder, cfg)
            video_args = self._plan_video(t, spec, encoder, cfg)

            audio = decide_audio_strategy(pr)
            if audio.fallback:
                t.warn(audio.reason)

            self._ensure_parent(spec.out)
            cmd = build_export_cmd(
                self.ffmpeg_bin,
                spec.input,
                spec.out,
                video_args=video_args,
                audio=audio,
                chain=chain,
                sws_flags=self.cfg.export.sws_flags,
            )
            t.log(
                f"Starting export with CRF {cfg.crf}, encoder: {_encoder_info(video_args, encoder)}, "
                f"preset '{cfg.preset}', tune '{cfg.tune}', audio: {audio.codec}"
            )

            t.advance(S.executing)
            t.progress("Exporting…", PROBE_PHASE_END)
            self._run_ffmpeg(cmd, "ffmpeg export failed")
            t.log("High-quality export completed successfully")
            t.progress("Export complete", 1.0)
            return ExportResult(video=Path(spec.out))

        return self._run(t, body)

    def extract_audio(self, op_id: str, spec: ExtractAudioSpec, events: EventSink) -> ExtractAudioResult:
        t = OperationTracker(op_id, OperationKind.extract_audio, events)

        def body() -> ExtractAudioResult:
            self._require_input(spec.input)
            pr = self._probe_tolerant(t, spec.input)

            t.advance(S.planning)
            target = spec.target
            use_copy = can_copy_audio_for_target(pr, target)
            if use_copy:
                t.log("Using stream copy for audio extraction (no re-encoding needed)")
                codec = "copy"
            else:
                t.log(f"Re-encoding audio to {spec.codec}")
                codec = spec.encoder
            aac_reencode = not use_copy and target is not None and target.is_aac_family
            bitrate = self.cfg.export.aac_bitrate if aac_reencode else None

            out = spec.resolved_out
            self._ensure_parent(out)
            cmd = build_extract_audio_cmd(self.ffmpeg_bin, spec.input, out, codec=codec, bitrate=bitrate)

            t.advance(S.executing)
            t.progress("Extracting audio…", PROBE_PHASE_END)
            self._run_ffmpeg(cmd, "ffmpeg audio extraction failed")
            t.log(f"Audio written to {out}")
            t.progress("Audio extracted", 1.0)
            return ExtractAudioResult(audio=Path(out))

        return self._run(t, body)

    def extract_thumbnail(self, op_id: str, spec: ThumbnailSpec, events: EventSink) -> ThumbnailResult:
        t = OperationTracker(op_id, OperationKind.extract_thumbnail, events)

        def body() -> ThumbnailResult:
            self._require_input(spec.input)
            pr = self._probe_tolerant(t, spec.input)

            t.advance(S.planning)
            requested = spec.timestamp if spec.timestamp is not None else self.cfg.thumbnail.timestamp
            ts = clamp_timestamp(requested, pr.duration if pr else None)
            if ts != requested:
                t.log(f"Timestamp {requested:.3f}s is past the end; using {ts:.3f}s")
            max_width = spec.max_width or self.cfg.thumbnail.max_width

            t.advance(S.executing)
            grabber = FrameGrabber(self.runner, self.ffmpeg_bin, timeout=self.cfg.transcode_timeout_sec)
            result = grabber.grab(Path(spec.input), ts, max_width)
            t.log(f"Thumbnail {result.width}x{result.height} extracted at {ts:.3f}s")
            return result

        return self._run(t, body)

    # =========================================================================
    # Planning helpers
    # =========================================================================
    def _plan_filters(
        self,
        t: OperationTracker,
        spec: ExportSpec,
        pr: Optional[MediaProbe],
        encoder: HardwareEncoder,
        cfg: ExportConfig,
    ) -> Optional[FilterChain]:
        if spec.codec is VideoCodec.copy:
            if spec.explicit_size or spec.format or spec.subtitles:
                t.warn("Video is stream-copied; scaling, padding and subtitles are skipped")
            return None

        target: Optional[CanvasGeometry] = None
        post_scale: Optional[CanvasGeometry] = None

        # explicit dimensions win over format (older callers send both)
        if spec.explicit_size:
            w, h = spec.explicit_size
            target = CanvasGeometry(w, h)
            t.log(f"Scaling to {w}x{h} with letterboxing")
        elif spec.format is not None:
            dims = pr.dimensions if pr else None
            if dims:
                src_w, src_h = dims
                target = fit_canvas(src_w, src_h, spec.format)
                post_scale = standard_size_for(spec.format, cfg.use_standard_sizes)
                if post_scale:
                    t.log(
                        f"High-quality conversion to {spec.format} format ({src_w}x{src_h}) "
                        f"with padding to {target} and scaling to {post_scale}"
                    )
                else:
                    t.log(
                        f"High-quality conversion to {spec.format} format ({src_w}x{src_h}) "
                        f"with padding to {target} - no scaling"
                    )
            else:
                t.warn("Warning: Could not determine video dimensions for format conversion")
        elif spec.subtitles and pr and pr.dimensions:
            target = CanvasGeometry(*pr.dimensions)

        if target is None:
            if spec.subtitles:
                t.warn("Warning: Output geometry unknown; subtitles are not burned in")
            return None

        return build_filter_chain(
            target.width,
            target.height,
            spec.subtitles,
            encoder,
            fonts_dir=self.cfg.fonts_dir,
            pad_color=self.cfg.export.pad_color,
            post_scale=post_scale,
        )

    def _plan_video(self, t: OperationTracker, spec: ExportSpec, encoder: HardwareEncoder, cfg: ExportConfig) -> List[str]:
        if spec.codec is VideoCodec.h264:
            t.log(f"Using {encoder.label} for H.264 encoding")
        elif spec.codec is VideoCodec.copy:
            t.warn(f"Unknown codec '{spec.codec_name}', using stream copy")
        return build_video_codec_args(spec.codec, encoder, cfg)

    # =========================================================================
    # Execution helpers
    # =========================================================================
    def _run(self, t: OperationTracker, body: Callable[[], T]) -> T:
        try:
            result = body()
        except ReframeError as e:
            err = t.fail(e)
            if err is e:
                raise
            raise err from e
        except Exception as e:
            t.fail(e)
            raise
        t.complete()
        return result

    def _probe_tolerant(self, t: OperationTracker, path: Path) -> Optional[MediaProbe]:
        """Export-style flows keep going on default assumptions when ffprobe fails."""
        t.advance(S.probing)
        try:
            return self.prober.probe(t.op_id, Path(path), PhaseSink(t.events, 0.0, PROBE_PHASE_END))
        except ProbeFailure as e:
            t.warn(f"Probe failed, continuing with defaults: {e.message}")
            return None

    def _run_ffmpeg(self, cmd: Sequence[str], failure: str) -> ProcessResult:
        try:
            res = self.runner.run(cmd, timeout=self.cfg.transcode_timeout_sec)
        except ProcessSpawnError as e:
            raise ExecutionFailure(f"{failure}: could not start ffmpeg", program=self.ffmpeg_bin,
                                   stderr=e.message) from e
        if not res.ok:
            raise ExecutionFailure(failure, program=res.program, rc=res.returncode, stderr=res.stderr)
        return res

    @staticmethod
    def _require_input(path: str | Path) -> None:
        if not Path(path).is_file():
            raise IOFailure(f"Input file not found: {path}")

    @staticmethod
    def _ensure_parent(out: str | Path) -> None:
        parent = Path(out).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailure(f"Cannot create output directory {parent}: {e}") from e


def _encoder_info(video_args: Sequence[str], encoder: HardwareEncoder) -> str:
    args = list(video_args)
    name = args[args.index("-c:v") + 1] if "-c:v" in args else "copy"
    if name == encoder.codec_name and encoder.is_hardware:
        return f"{name} (GPU)"
    return name if name == "copy" else f"{name} (CPU)"
