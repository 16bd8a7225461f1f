from __future__ import annotations
from pathlib import Path
from typing import Protocol
from reframe.domain.entities.probe import MediaProbe
from reframe.domain.ports.events import EventSink

class MediaProbePort(Protocol):
    def probe(self, op_id: str, path: Path, events: EventSink) -> MediaProbe: ...
