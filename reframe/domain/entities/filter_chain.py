# reframe/domain/entities/filter_chain.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FilterChain:
    """
    Ordered ffmpeg -vf stages. Later stages see the output of earlier ones,
    so the order is part of the value.
    """
    stages: Tuple[str, ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(s.split("=", 1)[0] for s in self.stages)

    def __bool__(self) -> bool:
        return bool(self.stages)

    def __len__(self) -> int:
        return len(self.stages)

    def __str__(self) -> str:
        return ",".join(self.stages)
