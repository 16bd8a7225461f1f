# tests/conftest.py
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pytest

from reframe.common import settings as settings_mod
from reframe.common.settings import Settings
from reframe.domain.ports.process import ProcessResult
from reframe.services.transcode.events import ListSink

Args = Tuple[str, ...]


def is_ffprobe(args: Args) -> bool:
    return "ffprobe" in args[0]


def is_encoder_listing(args: Args) -> bool:
    return "-encoders" in args


def is_ffmpeg_job(args: Args) -> bool:
    return "ffmpeg" in args[0] and "-encoders" not in args


class FakeRunner:
    """
    ProcessRunnerPort double. Records every command and answers with the
    first scripted handler whose matcher accepts it (default: rc=0, no output).
    """

    def __init__(self) -> None:
        self.calls: List[Args] = []
        self.timeouts: List[Optional[float]] = []
        self._handlers: List[Tuple[Callable[[Args], bool], Callable[[Args], ProcessResult]]] = []

    def on(
        self,
        matcher: Callable[[Args], bool],
        *,
        rc: int = 0,
        stdout: Any = "",
        stderr: str = "",
        raises: Optional[BaseException] = None,
        effect: Optional[Callable[[Args], None]] = None,
    ) -> "FakeRunner":
        def _handler(args: Args) -> ProcessResult:
            if effect is not None:
                effect(args)
            if raises is not None:
                raise raises
            return ProcessResult(args=args, returncode=rc, stdout=stdout, stderr=stderr)

        self._handlers.append((matcher, _handler))
        return self

    def run(self, cmd: Sequence[str], *, timeout: Optional[float] = None, binary: bool = False) -> ProcessResult:
        args = tuple(str(a) for a in cmd)
        self.calls.append(args)
        self.timeouts.append(timeout)
        for matcher, handler in self._handlers:
            if matcher(args):
                return handler(args)
        return ProcessResult(args=args, returncode=0, stdout="", stderr="")

    def calls_matching(self, matcher: Callable[[Args], bool]) -> List[Args]:
        return [c for c in self.calls if matcher(c)]


def ffprobe_payload(
    *,
    width: int | None = 1920,
    height: int | None = 1080,
    fps: str = "30000/1001",
    duration: str | None = "12.5",
    audio_codec: str | None = "aac",
    audio_bitrate: str | None = "128000",
) -> str:
    streams: List[Dict[str, Any]] = []
    if width is not None and height is not None:
        streams.append({
            "codec_type": "video",
            "codec_name": "h264",
            "width": width,
            "height": height,
            "avg_frame_rate": fps,
            "duration": "12.48",
        })
    if audio_codec is not None:
        st: Dict[str, Any] = {"codec_type": "audio", "codec_name": audio_codec}
        if audio_bitrate is not None:
            st["bit_rate"] = audio_bitrate
        streams.append(st)
    fmt: Dict[str, Any] = {"format_name": "mov,mp4,m4a,3gp,3g2,mj2"}
    if duration is not None:
        fmt["duration"] = duration
    return json.dumps({"format": fmt, "streams": streams})


@pytest.fixture(autouse=True)
def _clean_settings_cache():
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(_env_file=None, fonts_dir=tmp_path / "fonts")


@pytest.fixture()
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def sink() -> ListSink:
    return ListSink()


@pytest.fixture()
def video_file(tmp_path):
    p = tmp_path / "clip.mp4"
    p.write_bytes(b"not really a video")
    return p


@pytest.fixture()
def probe_json():
    return ffprobe_payload


@pytest.fixture()
def match():
    """Command matchers for FakeRunner.on()."""
    from types import SimpleNamespace
    return SimpleNamespace(ffprobe=is_ffprobe, encoders=is_encoder_listing, ffmpeg_job=is_ffmpeg_job)
