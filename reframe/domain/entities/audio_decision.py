# reframe/domain/entities/audio_decision.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

COPY = "copy"


@dataclass(frozen=True)
class AudioDecision:
    codec: str
    extra_args: Tuple[str, ...] = ()
    reason: str = ""
    fallback: bool = False   # True when the codec was not in any known list

    @property
    def is_copy(self) -> bool:
        return self.codec == COPY

    def to_args(self) -> list[str]:
        return ["-c:a", self.codec, *self.extra_args]
