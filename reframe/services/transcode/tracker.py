# reframe/services/transcode/tracker.py
from __future__ import annotations

import logging
from typing import Dict, FrozenSet

from reframe.common.logging import get_logger
from reframe.domain.dataclasses.events import LogEvent, ProgressEvent
from reframe.domain.dataclasses.reports import OperationReport
from reframe.domain.enums.operation import OperationKind, OperationState
from reframe.domain.errors import ReframeError
from reframe.domain.ports.events import EventSink

logger = get_logger(__name__)

S = OperationState

# Probe-only operations finish straight out of PROBING; export and audio
# extraction skip PROBING when there is nothing to probe.
ALLOWED_TRANSITIONS: Dict[OperationState, FrozenSet[OperationState]] = {
    S.pending: frozenset({S.probing, S.planning, S.failed}),
    S.probing: frozenset({S.planning, S.completed, S.failed}),
    S.planning: frozenset({S.executing, S.failed}),
    S.executing: frozenset({S.completed, S.failed}),
    S.completed: frozenset(),
    S.failed: frozenset(),
}


class OperationTracker:
    """
    State machine + event emission for a single operation.

    Owns the OperationReport and is the only thing that writes to the
    operation's EventSink, so events come out in production order.
    """

    def __init__(self, op_id: str, kind: OperationKind, events: EventSink) -> None:
        self.op_id = op_id
        self.kind = kind
        self.events = events
        self.report = OperationReport(op_id=op_id, kind=kind)
        self.report.enter(S.pending)

    @property
    def state(self) -> OperationState:
        return self.report.state

    # ---- transitions ----------------------------------------------------------
    def advance(self, new_state: OperationState) -> None:
        cur = self.state
        if new_state not in ALLOWED_TRANSITIONS[cur]:
            raise RuntimeError(f"{self.op_id}: illegal transition {cur} -> {new_state}")
        if cur is S.pending:
            self.report.start()
        self.report.enter(new_state)
        if new_state.is_terminal:
            self.report.stop()
        logger.debug("%s %s: %s -> %s", self.kind, self.op_id, cur, new_state)

    def complete(self) -> None:
        self.advance(S.completed)

    def fail(self, exc: BaseException) -> BaseException:
        """
        Move to FAILED and return the error to raise, tagged with the stage it
        happened in when it is one of ours.
        """
        stage = self.state.value
        if isinstance(exc, ReframeError):
            exc = exc.at_stage(stage)
            stage = exc.stage or stage
        self.report.add_error(stage, str(exc))
        if not self.state.is_terminal:
            if self.state is S.pending:
                self.report.start()
            self.report.enter(S.failed)
            self.report.stop()
        logger.warning("%s %s failed during %s: %s", self.kind, self.op_id, stage, exc)
        return exc

    # ---- events ---------------------------------------------------------------
    def progress(self, status: str, value: float) -> None:
        self.events.emit(ProgressEvent(self.op_id, status, value))

    def log(self, message: str, level: int = logging.INFO) -> None:
        logger.log(level, "[%s] %s", self.op_id, message)
        self.events.emit(LogEvent(self.op_id, message, level))

    def warn(self, message: str) -> None:
        self.log(message, logging.WARNING)
