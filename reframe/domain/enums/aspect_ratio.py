# reframe/domain/enums/aspect_ratio.py
from __future__ import annotations

from enum import StrEnum

from reframe.domain.errors import UnsupportedAspectRatio


class AspectRatio(StrEnum):
    r9x16 = "9:16"
    r16x9 = "16:9"
    r4x5 = "4:5"
    r1x1 = "1:1"

    @property
    def wh(self) -> tuple[int, int]:
        w, h = self.value.split(":", 1)
        return int(w), int(h)

    @classmethod
    def parse(cls, value: str) -> "AspectRatio":
        """Canonical string ("9:16") -> member. Anything else is a hard error."""
        try:
            return cls((value or "").strip())
        except ValueError:
            supported = ", ".join(m.value for m in cls)
            raise UnsupportedAspectRatio(
                f"Unsupported aspect ratio format: {value}. Supported formats: {supported}",
                stage="planning",
            ) from None
