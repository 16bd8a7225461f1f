# reframe/domain/entities/geometry.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CanvasGeometry:
    """Output frame size in pixels. Planner output is always even on both axes (yuv420)."""
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, width: int, height: int) -> bool:
        return self.width >= width and self.height >= height

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
