# reframe/domain/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# ffmpeg is chatty on stderr (-stats); keep only the tail in error payloads.
STDERR_TAIL_CHARS = 2000


def _tail(text: Optional[str]) -> Optional[str]:
    if not text:
        return text
    return text[-STDERR_TAIL_CHARS:]


@dataclass(eq=False)
class ReframeError(Exception):
    """
    Base error for every failure surfaced by the engine.

    `stage` names the operation state the failure happened in (probing,
    planning, executing, ...), `program` the external tool involved.
    """
    message: str
    stage: Optional[str] = None
    program: Optional[str] = None
    rc: Optional[int] = None
    stderr: Optional[str] = None

    def __post_init__(self) -> None:
        self.stderr = _tail(self.stderr)

    def __str__(self) -> str:
        parts = [self.message]
        ctx = []
        if self.stage:
            ctx.append(f"stage={self.stage}")
        if self.program:
            ctx.append(f"program={self.program}")
        if self.rc is not None:
            ctx.append(f"rc={self.rc}")
        if ctx:
            parts.append(f"[{', '.join(ctx)}]")
        if self.stderr:
            parts.append(f": {self.stderr.strip()}")
        return " ".join(parts)

    def at_stage(self, stage: str) -> "ReframeError":
        """Copy of this error tagged with `stage` (keeps an existing tag)."""
        if self.stage:
            return self
        return type(self)(self.message, stage=stage, program=self.program, rc=self.rc, stderr=self.stderr)


class ProbeFailure(ReframeError):
    """ffprobe failed or produced output we could not parse."""


class UnsupportedAspectRatio(ReframeError, ValueError):
    """Requested aspect-ratio string is not one of the supported formats."""


class ExecutionFailure(ReframeError):
    """The transcode process failed, timed out, or could not be started."""


class IOFailure(ReframeError):
    """Reading or writing files around an operation failed."""


class ProcessSpawnError(ReframeError):
    """The external executable could not be started at all (missing binary, permissions)."""
