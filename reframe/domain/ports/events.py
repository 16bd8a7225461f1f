from __future__ import annotations
from typing import Protocol
from reframe.domain.dataclasses.events import Event

class EventSink(Protocol):
    # Called synchronously, in production order, for one operation.
    def emit(self, event: Event) -> None: ...
