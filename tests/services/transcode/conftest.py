# tests/services/transcode/conftest.py
from __future__ import annotations

import pytest

from reframe.domain.enums.hardware_encoder import HardwareEncoder
from reframe.services.transcode.orchestrator import TranscodeOrchestrator


class StubDetector:
    def __init__(self, choice: HardwareEncoder = HardwareEncoder.software) -> None:
        self.choice = choice
        self.calls = 0

    def select_hardware_encoder(self) -> HardwareEncoder:
        self.calls += 1
        return self.choice


@pytest.fixture()
def detector() -> StubDetector:
    return StubDetector()


@pytest.fixture()
def orch(runner, detector, settings) -> TranscodeOrchestrator:
    return TranscodeOrchestrator(runner=runner, detector=detector, settings=settings)


@pytest.fixture()
def ffmpeg_cmd(runner, match):
    """The single ffmpeg job the orchestrator ran."""
    def _get():
        (cmd,) = runner.calls_matching(match.ffmpeg_job)
        return list(cmd)
    return _get


@pytest.fixture()
def build_orch(runner, settings):
    """Orchestrator with a chosen encoder and settings overrides."""
    def _build(encoder: HardwareEncoder = HardwareEncoder.software, **overrides) -> TranscodeOrchestrator:
        cfg = settings.model_copy(update=overrides) if overrides else settings
        return TranscodeOrchestrator(runner=runner, detector=StubDetector(encoder), settings=cfg)
    return _build
