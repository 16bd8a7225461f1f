# reframe/services/probe/ffprobe_adapter.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from reframe.common.logging import get_logger
from reframe.common.probe.ffprobe_helpers import build_ffprobe_cmd, parse_ffprobe
from reframe.common.settings import get_settings
from reframe.domain.dataclasses.events import ProgressEvent
from reframe.domain.entities.probe import MediaProbe
from reframe.domain.errors import ProbeFailure, ProcessSpawnError, ReframeError
from reframe.domain.ports.events import EventSink
from reframe.domain.ports.probe import MediaProbePort
from reframe.domain.ports.process import ProcessRunnerPort

logger = get_logger(__name__)

PROGRESS_START = 0.05
PROGRESS_DONE = 1.0


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    Emits a progress event when probing starts and when it completes.
    """

    def __init__(
        self,
        runner: ProcessRunnerPort,
        ffprobe_bin: Optional[str] = None,
        timeout_sec: Optional[int] = None,
        log_level: Optional[str] = None,
    ):
        self.runner = runner
        if ffprobe_bin is None or timeout_sec is None or log_level is None:
            cfg = get_settings()
            ffprobe_bin = ffprobe_bin or cfg.ffprobe_bin
            timeout_sec = timeout_sec or cfg.ffprobe.timeout_sec
            log_level = log_level or cfg.ffprobe.log_level
        self.ffprobe_bin = ffprobe_bin
        self.log_level = log_level
        self.timeout_sec = int(timeout_sec or 30)

    # ---- Port API -------------------------------------------------------------
    def probe(self, op_id: str, path: Path, events: EventSink) -> MediaProbe:
        if not path:
            raise ProbeFailure("No path provided to probe().", stage="probing")

        events.emit(ProgressEvent(op_id, "Probing…", PROGRESS_START))

        cmd = build_ffprobe_cmd(path, self.ffprobe_bin, self.log_level)
        try:
            proc = self.runner.run(cmd, timeout=self.timeout_sec)
        except ProcessSpawnError as e:
            raise ProbeFailure("Failed to execute ffprobe", stage="probing", program=self.ffprobe_bin,
                               stderr=e.message) from e
        except ReframeError as e:
            raise ProbeFailure(e.message, stage="probing", program=self.ffprobe_bin, stderr=e.stderr) from e

        if not proc.ok:
            raise ProbeFailure("ffprobe returned non-zero exit code", stage="probing",
                               program=self.ffprobe_bin, rc=proc.returncode, stderr=proc.stderr)

        try:
            data = json.loads(proc.stdout or "{}")
            result = parse_ffprobe(data)
        except (json.JSONDecodeError, TypeError) as e:
            raise ProbeFailure(f"ffprobe produced unparseable output: {e}", stage="probing",
                               program=self.ffprobe_bin, stderr=proc.stderr) from e

        logger.debug("probe %s -> %s", path, result)
        events.emit(ProgressEvent(op_id, "Probe complete", PROGRESS_DONE))
        return result
