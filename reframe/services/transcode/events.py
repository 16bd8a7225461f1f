# reframe/services/transcode/events.py
from __future__ import annotations

import queue
import threading
from dataclasses import replace
from typing import Iterator, List, Optional

from reframe.domain.dataclasses.events import Event, ProgressEvent
from reframe.domain.ports.events import EventSink

_CLOSED = object()


class EventChannel(EventSink):
    """
    FIFO of events for ONE operation. The producer (the operation's worker
    thread) calls emit(); the consumer iterates until close() is called.
    """

    def __init__(self, op_id: str, maxsize: int = 0) -> None:
        self.op_id = op_id
        self._q: "queue.Queue[object]" = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def emit(self, event: Event) -> None:
        if self._closed.is_set():
            raise RuntimeError(f"{self.op_id}: emit() after close()")
        self._q.put(event)

    def close(self) -> None:
        """Idempotent. Consumers see the end of the stream after draining what is queued."""
        if not self._closed.is_set():
            self._closed.set()
            self._q.put(_CLOSED)

    def get(self, timeout: Optional[float] = None) -> Optional[Event]:
        """Next event, or None once the channel is closed and empty."""
        item = self._q.get(timeout=timeout)
        if item is _CLOSED:
            # keep the sentinel for other readers / repeated iteration
            self._q.put(_CLOSED)
            return None
        return item  # type: ignore[return-value]

    def __iter__(self) -> Iterator[Event]:
        while True:
            ev = self.get()
            if ev is None:
                return
            yield ev

    def drain(self) -> List[Event]:
        """Everything queued right now, without blocking."""
        out: List[Event] = []
        while True:
            try:
                item = self._q.get_nowait()
            except queue.Empty:
                return out
            if item is _CLOSED:
                self._q.put(_CLOSED)
                return out
            out.append(item)  # type: ignore[arg-type]


class ListSink(EventSink):
    """Collects events in memory; handy for synchronous callers and tests."""

    def __init__(self) -> None:
        self.events: List[Event] = []

    def emit(self, event: Event) -> None:
        self.events.append(event)

    def messages(self) -> List[str]:
        return [getattr(e, "message") for e in self.events if hasattr(e, "message")]

    def progress(self) -> List[float]:
        return [getattr(e, "progress") for e in self.events if hasattr(e, "progress")]


class PhaseSink(EventSink):
    """
    Forwards to `inner`, mapping a sub-phase's 0..1 progress onto
    [start, end] of the whole operation. Log events pass through unchanged.
    """

    def __init__(self, inner: EventSink, start: float, end: float) -> None:
        self.inner = inner
        self.start = start
        self.end = end

    def emit(self, event: Event) -> None:
        if isinstance(event, ProgressEvent):
            event = replace(event, progress=self.start + (self.end - self.start) * event.progress)
        self.inner.emit(event)
