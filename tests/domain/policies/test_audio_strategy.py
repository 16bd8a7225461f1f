# tests/domain/policies/test_audio_strategy.py
from __future__ import annotations

import pytest

from reframe.common.probe.ffprobe_helpers import parse_ffprobe
from reframe.domain.entities.probe import MediaProbe
from reframe.domain.enums.audio_target import AudioTarget
from reframe.domain.policies.audio_strategy import can_copy_audio_for_target, decide_audio_strategy


def _probe(codec, bitrate=None, has_audio=True) -> MediaProbe:
    return MediaProbe(has_video=True, has_audio=has_audio, audio_codec=codec, audio_bitrate=bitrate)


def _is_default_reencode(d) -> bool:
    return d.codec == "aac" and d.extra_args == ("-q:a", "2")


def test_no_probe_reencodes():
    assert _is_default_reencode(decide_audio_strategy(None))


def test_no_audio_track_reencodes():
    assert _is_default_reencode(decide_audio_strategy(_probe(None, has_audio=False)))


def test_unknown_codec_name_missing_reencodes():
    assert _is_default_reencode(decide_audio_strategy(_probe(None)))


@pytest.mark.parametrize("codec", ["pcm_s16le", "pcm_f32le", "adpcm_ms", "PCM_S24LE"])
def test_pcm_and_adpcm_reencode(codec):
    d = decide_audio_strategy(_probe(codec))
    assert _is_default_reencode(d)
    assert not d.fallback


def test_aac_at_or_below_threshold_copies():
    assert decide_audio_strategy(_probe("aac", 150_000)).is_copy
    assert decide_audio_strategy(_probe("aac", 160_000)).is_copy


def test_aac_unknown_bitrate_copies():
    assert decide_audio_strategy(_probe("aac", None)).is_copy


def test_high_bitrate_aac_reencodes():
    d = decide_audio_strategy(_probe("aac", 200_000))
    assert _is_default_reencode(d)


@pytest.mark.parametrize("codec", ["mp3", "opus", "vorbis", "ac3", "eac3", "dts", "mp2"])
@pytest.mark.parametrize("bitrate", [None, 64_000, 320_000, 1_500_000])
def test_efficient_codecs_copy_at_any_bitrate(codec, bitrate):
    d = decide_audio_strategy(_probe(codec, bitrate))
    assert d.is_copy
    assert d.to_args() == ["-c:a", "copy"]


@pytest.mark.parametrize("codec", ["flac", "alac", "ape", "wavpack", "gsm", "speex"])
def test_lossless_and_legacy_reencode_without_fallback_note(codec):
    d = decide_audio_strategy(_probe(codec))
    assert _is_default_reencode(d)
    assert d.fallback is False


def test_unrecognized_codec_reencodes_with_fallback_note():
    d = decide_audio_strategy(_probe("truehd"))
    assert _is_default_reencode(d)
    assert d.fallback is True
    assert "truehd" in d.reason
    assert d.to_args() == ["-c:a", "aac", "-q:a", "2"]


@pytest.mark.parametrize(
    "src, target, expected",
    [
        ("aac", AudioTarget.aac, True),
        ("aac", AudioTarget.m4a, True),
        ("AAC", AudioTarget.m4a, True),
        ("mp3", AudioTarget.mp3, True),
        ("mp3", AudioTarget.aac, False),
        ("aac", AudioTarget.mp3, False),
        ("opus", AudioTarget.aac, False),
    ],
)
def test_extraction_copy_rule(src, target, expected):
    assert can_copy_audio_for_target(_probe(src), target) is expected


def test_extraction_without_probe_never_copies():
    assert can_copy_audio_for_target(None, AudioTarget.aac) is False
    assert can_copy_audio_for_target(_probe(None), AudioTarget.aac) is False


def test_extraction_to_other_codec_never_copies():
    assert can_copy_audio_for_target(_probe("flac"), None) is False


def test_numeric_codec_name_from_ffprobe_falls_back_cleanly():
    pr = parse_ffprobe({"format": {}, "streams": [{"codec_type": "audio", "codec_name": 42}]})
    d = decide_audio_strategy(pr)
    assert _is_default_reencode(d)
    assert d.fallback is True
    assert can_copy_audio_for_target(pr, AudioTarget.aac) is False
