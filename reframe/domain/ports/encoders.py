from __future__ import annotations
from typing import Protocol
from reframe.domain.enums.hardware_encoder import HardwareEncoder

class EncoderDetectorPort(Protocol):
    def select_hardware_encoder(self) -> HardwareEncoder: ...
