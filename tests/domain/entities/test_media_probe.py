import dataclasses

import pytest

from reframe.domain.entities.probe import MediaProbe


def test_media_probe_defaults():
    pr = MediaProbe()
    assert pr.duration is None
    assert pr.has_video is False
    assert pr.has_audio is False
    assert pr.dimensions is None


def test_media_probe_values_and_equality():
    pr = MediaProbe(duration=12.5, width=1920, height=1080, fps=23.976, has_video=True)
    assert pr.dimensions == (1920, 1080)
    assert pr == MediaProbe(duration=12.5, width=1920, height=1080, fps=23.976, has_video=True)
    assert pr.as_dict()["width"] == 1920


def test_media_probe_is_immutable():
    pr = MediaProbe(width=10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        pr.width = 20  # type: ignore[misc]
