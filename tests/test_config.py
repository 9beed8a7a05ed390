from __future__ import annotations

from pathlib import Path

import pytest

from pinyin_ruby.config import ConfigError, ReaderConfig
from pinyin_ruby.history import DEFAULT_HISTORY_PATH


def test_defaults() -> None:
    config = ReaderConfig.from_env({})
    assert config.mode == "pinyin"
    assert config.tone_display == "mark"
    assert config.history_path == DEFAULT_HISTORY_PATH
    assert config.max_history_items == 20
    assert config.zhuyin_map_path is None


def test_environment_overrides() -> None:
    config = ReaderConfig.from_env({
        "PINYIN_RUBY_MODE": "zhuyin",
        "PINYIN_RUBY_TONE_DISPLAY": "number",
        "PINYIN_RUBY_HISTORY": "/tmp/h.json",
        "PINYIN_RUBY_ZHUYIN_MAP": "/tmp/z.json",
    })
    assert config.mode == "zhuyin"
    assert config.tone_display == "number"
    assert config.history_path == Path("/tmp/h.json")
    assert config.zhuyin_map_path == Path("/tmp/z.json")


@pytest.mark.parametrize(
    "kwargs",
    [{"mode": "ipa"}, {"tone_display": "color"}, {"max_history_items": 0}],
)
def test_invalid_values_raise(kwargs) -> None:
    with pytest.raises(ConfigError):
        ReaderConfig(**kwargs)
