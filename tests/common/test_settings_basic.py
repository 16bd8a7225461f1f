# tests/common/test_settings_basic.py
from __future__ import annotations

from reframe.common.settings import Settings, get_settings


def test_defaults(monkeypatch):
    for k in ("FFMPEG__BIN", "FFPROBE__BIN", "EXPORT__CRF", "CACHE_ENCODER_DETECTION", "TRANSCODE_TIMEOUT_SEC"):
        monkeypatch.delenv(k, raising=False)
    s = Settings(_env_file=None)
    assert s.ffmpeg_bin == "ffmpeg"
    assert s.ffprobe_bin == "ffprobe"
    assert s.ffprobe.timeout_sec == 30
    assert s.export.crf == 18
    assert s.export.preset == "slow"
    assert s.export.default_gop == 48
    assert s.transcode_timeout_sec is None
    assert s.cache_encoder_detection is False
    assert s.fonts_dir is None


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("FFMPEG__BIN", "/opt/ffmpeg/bin/ffmpeg")
    monkeypatch.setenv("EXPORT__CRF", "22")
    monkeypatch.setenv("CACHE_ENCODER_DETECTION", "yes")
    monkeypatch.setenv("TRANSCODE_TIMEOUT_SEC", "600")
    s = Settings(_env_file=None)
    assert s.ffmpeg_bin == "/opt/ffmpeg/bin/ffmpeg"
    assert s.export.crf == 22
    assert s.cache_encoder_detection is True
    assert s.transcode_timeout_sec == 600


def test_bins_by_field_name():
    s = Settings(_env_file=None, ffmpeg={"bin": "ff"}, ffprobe={"bin": "fp"})
    assert (s.ffmpeg_bin, s.ffprobe_bin) == ("ff", "fp")


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
