# tests/services/transcode/test_tracker.py
from __future__ import annotations

import logging

import pytest

from reframe.domain.dataclasses.events import LogEvent
from reframe.domain.enums.operation import OperationKind, OperationState as S
from reframe.domain.errors import ExecutionFailure
from reframe.services.transcode.tracker import OperationTracker


def test_happy_path_history(sink):
    t = OperationTracker("op", OperationKind.export, sink)
    for st in (S.probing, S.planning, S.executing):
        t.advance(st)
    t.complete()
    assert t.report.states == [S.pending, S.probing, S.planning, S.executing, S.completed]
    assert t.report.elapsed_sec is not None and t.report.elapsed_sec >= 0


def test_probe_only_completes_from_probing(sink):
    t = OperationTracker("op", OperationKind.probe, sink)
    t.advance(S.probing)
    t.complete()
    assert t.state is S.completed


@pytest.mark.parametrize("path", [(S.executing,), (S.probing, S.executing), (S.planning, S.completed)])
def test_illegal_transitions(sink, path):
    t = OperationTracker("op", OperationKind.export, sink)
    with pytest.raises(RuntimeError, match="illegal transition"):
        for st in path:
            t.advance(st)


def test_terminal_states_are_final(sink):
    t = OperationTracker("op", OperationKind.export, sink)
    t.advance(S.failed)
    with pytest.raises(RuntimeError):
        t.advance(S.probing)


def test_fail_tags_stage_and_records(sink):
    t = OperationTracker("op", OperationKind.export, sink)
    t.advance(S.probing)
    t.advance(S.planning)
    t.advance(S.executing)
    err = t.fail(ExecutionFailure("ffmpeg export failed", rc=1))
    assert isinstance(err, ExecutionFailure)
    assert err.stage == "executing"
    assert t.state is S.failed
    assert t.report.error_details[0][0] == "executing"


def test_fail_keeps_foreign_exceptions(sink):
    t = OperationTracker("op", OperationKind.probe, sink)
    boom = KeyError("x")
    assert t.fail(boom) is boom
    assert t.report.error_details == [("pending", str(boom))]


def test_log_and_warn_emit_events(sink):
    t = OperationTracker("op", OperationKind.export, sink)
    t.log("hello")
    t.warn("careful")
    assert sink.messages() == ["hello", "careful"]
    assert [e.level for e in sink.events if isinstance(e, LogEvent)] == [logging.INFO, logging.WARNING]
