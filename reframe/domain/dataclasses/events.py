# reframe/domain/dataclasses/events.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Union


@dataclass(frozen=True)
class ProgressEvent:
    id: str
    status: str
    progress: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "progress", min(1.0, max(0.0, float(self.progress))))

    def as_dict(self) -> Dict[str, Any]:
        return {"event": "Progress", "id": self.id, "status": self.status, "progress": self.progress}


@dataclass(frozen=True)
class LogEvent:
    id: str
    message: str
    # severity for in-process consumers; not part of the wire event
    level: int = field(default=logging.INFO, compare=False, repr=False)

    def as_dict(self) -> Dict[str, Any]:
        return {"event": "Log", "id": self.id, "message": self.message}


Event = Union[ProgressEvent, LogEvent]
