# reframe/domain/ports/process.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Union


@dataclass(frozen=True)
class ProcessResult:
    args: tuple[str, ...]
    returncode: int
    stdout: Union[str, bytes] = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def program(self) -> str:
        return self.args[0] if self.args else ""


class ProcessRunnerPort(Protocol):
    """Spawns an external process and waits for it. Raises ProcessSpawnError if it cannot start."""
    def run(
        self,
        cmd: Sequence[str],
        *,
        timeout: Optional[float] = None,
        binary: bool = False,
    ) -> ProcessResult: ...
