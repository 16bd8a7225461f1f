# reframe/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from reframe.domain.enums.operation import OperationKind, OperationState


@dataclass
class OperationReport:
    """Per-operation bookkeeping:
    - timing: started_at / finished_at
    - state history: (state, timestamp) in the order entered
    - error capture: error_details as (stage, message)
    """
    op_id: str
    kind: OperationKind
    state: OperationState = OperationState.pending
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    history: List[Tuple[OperationState, datetime]] = field(default_factory=list)
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def enter(self, state: OperationState) -> None:
        self.state = state
        self.history.append((state, datetime.now()))

    def add_error(self, stage: str, message: str) -> None:
        self.error_details.append((stage, message))

    @property
    def states(self) -> List[OperationState]:
        return [s for s, _ in self.history]

    @property
    def elapsed_sec(self) -> Optional[float]:
        if self.started_at is None or self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
