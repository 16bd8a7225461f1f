# tests/services/transcode/test_thumbnail_operation.py
from __future__ import annotations

import base64

import pytest
from PIL import Image

from reframe.domain.dataclasses.specs import ThumbnailSpec
from reframe.domain.errors import ExecutionFailure


def _write_png(args):
    Image.new("RGB", (320, 180)).save(args[-1], format="PNG")


def test_thumbnail_default_timestamp(orch, runner, match, sink, video_file, probe_json, ffmpeg_cmd):
    runner.on(match.ffprobe, stdout=probe_json())
    runner.on(match.ffmpeg_job, effect=_write_png)
    res = orch.extract_thumbnail("op", ThumbnailSpec(input=video_file), sink)

    assert (res.width, res.height) == (320, 180)
    assert base64.b64decode(res.image_data).startswith(b"\x89PNG")
    cmd = ffmpeg_cmd()
    assert cmd[cmd.index("-ss") + 1] == "0.500"
    assert "-vf" not in cmd


def test_thumbnail_past_end_is_clamped(orch, runner, match, sink, video_file, probe_json, ffmpeg_cmd):
    runner.on(match.ffprobe, stdout=probe_json(duration="12.5"))
    runner.on(match.ffmpeg_job, effect=_write_png)
    orch.extract_thumbnail("op", ThumbnailSpec(input=video_file, timestamp=30.0, max_width=160), sink)

    cmd = ffmpeg_cmd()
    assert cmd[cmd.index("-ss") + 1] == "6.250"
    assert "min(160,iw)" in cmd[cmd.index("-vf") + 1]
    assert any("past the end" in m for m in sink.messages())


def test_thumbnail_failure(orch, runner, match, sink, video_file, probe_json):
    runner.on(match.ffprobe, stdout=probe_json())
    runner.on(match.ffmpeg_job, rc=1, stderr="Invalid data")
    with pytest.raises(ExecutionFailure) as ei:
        orch.extract_thumbnail("op", ThumbnailSpec(input=video_file), sink)
    assert ei.value.stage == "executing"
    assert list(video_file.parent.glob("*.png")) == []
