# reframe/domain/enums/operation.py
from __future__ import annotations

from enum import StrEnum


class OperationKind(StrEnum):
    probe = "probe"
    export = "export"
    extract_audio = "extract_audio"
    extract_thumbnail = "extract_thumbnail"


class OperationState(StrEnum):
    pending = "pending"
    probing = "probing"
    planning = "planning"
    executing = "executing"
    completed = "completed"
    failed = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (OperationState.completed, OperationState.failed)
