# reframe/services/process/subprocess_runner.py
from __future__ import annotations

import shlex
import subprocess
from typing import Optional, Sequence

from reframe.common.logging import get_logger
from reframe.domain.errors import ExecutionFailure, ProcessSpawnError
from reframe.domain.ports.process import ProcessResult, ProcessRunnerPort

logger = get_logger(__name__)


class SubprocessRunner(ProcessRunnerPort):
    """
    Infrastructure adapter implementing ProcessRunnerPort with `subprocess.run`.
    Blocks the calling thread until the child exits; run operations on an
    OperationPool to get concurrency.
    """

    def run(
        self,
        cmd: Sequence[str],
        *,
        timeout: Optional[float] = None,
        binary: bool = False,
    ) -> ProcessResult:
        args = tuple(str(a) for a in cmd)
        if not args:
            raise ProcessSpawnError("Empty command")
        logger.debug("exec: %s", " ".join(shlex.quote(a) for a in args))

        try:
            proc = subprocess.run(
                args,
                capture_output=True,
                text=not binary,
                errors=None if binary else "replace",
                timeout=timeout,
                check=False,  # callers map the return code themselves
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionFailure(
                f"{args[0]} timed out after {timeout}s",
                stage="executing",
                program=args[0],
                stderr=_decode(e.stderr),
            ) from e
        except OSError as e:
            raise ProcessSpawnError(f"Failed to start {args[0]}: {e}", program=args[0]) from e

        return ProcessResult(
            args=args,
            returncode=proc.returncode,
            stdout=proc.stdout if proc.stdout is not None else (b"" if binary else ""),
            stderr=_decode(proc.stderr) or "",
        )


def _decode(data: str | bytes | None) -> Optional[str]:
    if data is None:
        return None
    if isinstance(data, bytes):
        return data.decode("utf-8", "replace")
    return data
