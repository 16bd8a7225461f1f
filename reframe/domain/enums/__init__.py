from reframe.domain.enums.aspect_ratio import AspectRatio
from reframe.domain.enums.audio_target import AudioTarget
from reframe.domain.enums.hardware_encoder import HardwareEncoder
from reframe.domain.enums.operation import OperationKind, OperationState
from reframe.domain.enums.video_codec import VideoCodec
__all__ = [
    "AspectRatio",
    "AudioTarget",
    "HardwareEncoder",
    "OperationKind",
    "OperationState",
    "VideoCodec",
]
