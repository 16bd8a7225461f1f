from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

from reframe.services.transcode.events import EventChannel

R = TypeVar("R")

log = logging.getLogger(__name__)


@dataclass
class PoolStats:
    start_ts: float
    submitted: int = 0
    completed: int = 0
    failed: int = 0

    @property
    def uptime_sec(self) -> float:
        return time.time() - self.start_ts

    @property
    def in_flight(self) -> int:
        return max(0, self.submitted - (self.completed + self.failed))


@dataclass
class OperationHandle(Generic[R]):
    """What a caller gets back for one submitted operation."""
    op_id: str
    future: "Future[R]"
    events: EventChannel

    def result(self, timeout: Optional[float] = None) -> R:
        return self.future.result(timeout=timeout)

    def done(self) -> bool:
        return self.future.done()


class OperationPool:
    """
    Bounded thread pool running independent operations side by side.

    Each operation gets its own EventChannel; the channel is closed once the
    operation finishes (success or error), so a consumer can simply iterate
    `handle.events` and then read `handle.result()`.

    Notes
    -----
    - Operation ids must be unique among in-flight operations.
    - There is no cancellation: shutdown(cancel_pending=True) only drops
      operations that have not started yet.
    """

    def __init__(self, max_workers: Optional[int] = None, name: str = "reframe-op") -> None:
        if max_workers is None:
            from reframe.common.settings import get_settings
            max_workers = get_settings().concurrency.max_operations
        self._name = name
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=name)
        self._stats = PoolStats(start_ts=time.time())
        self._active: Dict[str, OperationHandle] = {}
        self._lock = threading.Lock()
        self._closed = False

    # -------------------------
    # Lifecycle
    # -------------------------
    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """Shut down the executor. Safe to call multiple times."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)

    def __enter__(self) -> "OperationPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    def stats(self) -> PoolStats:
        """Return a *snapshot* of current stats."""
        with self._lock:
            return PoolStats(
                start_ts=self._stats.start_ts,
                submitted=self._stats.submitted,
                completed=self._stats.completed,
                failed=self._stats.failed,
            )

    def active_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._active)

    # -------------------------
    # Submission
    # -------------------------
    def submit(self, op_id: str, fn: Callable[..., R], /, *args, **kwargs) -> OperationHandle[R]:
        """
        Run `fn(op_id, *args, <channel>, **kwargs)` on the pool.

        `fn` is usually a bound TranscodeOrchestrator method, whose last
        positional parameter is the event sink.
        """
        channel = EventChannel(op_id)

        with self._lock:
            if self._closed:
                raise RuntimeError(f"{self._name}: submit() after shutdown")
            if op_id in self._active:
                raise ValueError(f"Operation '{op_id}' is already running")
            self._stats.submitted += 1
            fut: Future[R] = self._executor.submit(fn, op_id, *args, channel, **kwargs)
            handle = OperationHandle(op_id=op_id, future=fut, events=channel)
            self._active[op_id] = handle

        def _done(f: Future[R]) -> None:
            with self._lock:
                self._active.pop(op_id, None)
                if f.cancelled() or f.exception() is not None:
                    self._stats.failed += 1
                else:
                    self._stats.completed += 1
            if not f.cancelled() and f.exception() is not None:
                log.warning("%s operation %s failed: %s", self._name, op_id, f.exception())
            channel.close()

        fut.add_done_callback(_done)
        return handle
